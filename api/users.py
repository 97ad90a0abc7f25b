from __future__ import annotations

from flask import Blueprint, request, jsonify, g, abort

from models import storage
from models.user import User
from models.schemas.user import UserCreateSchema, UserOutSchema
from utils.decorators import jwt_required
from utils.security import hash_password

bp = Blueprint("users", __name__)

user_create_schema = UserCreateSchema()
user_out_schema = UserOutSchema()


@bp.post("/users")
def create_user():
    """
    Register a new user.
    ---
    tags:
      - Users
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      201:
        description: Created
      409:
        description: Email already registered
      422:
        description: Validation error
    """
    data = user_create_schema.load(request.get_json(silent=True) or {})

    session = storage.get_session()
    if session.query(User).filter(User.email == data["email"]).first():
        abort(409, description="Email already registered")

    user = User(email=data["email"], hashed_password=hash_password(data["password"]))
    storage.new(user)
    storage.save()

    return jsonify(user_out_schema.dump(user)), 201


@bp.put("/users")
@jwt_required()
def update_user():
    """
    Change the caller's email and password.
    Other sessions (refresh tokens) of the user stay valid.
    ---
    tags:
      - Users
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
    """
    data = user_create_schema.load(request.get_json(silent=True) or {})
    user: User = g.current_user

    session = storage.get_session()
    taken = session.query(User).filter(User.email == data["email"], User.id != user.id).first()
    if taken:
        abort(409, description="Email already registered")

    user.email = data["email"]
    user.hashed_password = hash_password(data["password"])
    user.save()

    return jsonify(user_out_schema.dump(user)), 200
