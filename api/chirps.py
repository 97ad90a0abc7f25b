from __future__ import annotations

import uuid

from flask import Blueprint, request, jsonify, g, abort

from models import storage
from models.chirp import Chirp
from models.schemas.chirp import ChirpCreateSchema, ChirpOutSchema
from utils.decorators import jwt_required
from utils.moderation import censor

bp = Blueprint("chirps", __name__)

chirp_create_schema = ChirpCreateSchema()
chirp_out_schema = ChirpOutSchema()
chirp_list_out_schema = ChirpOutSchema(many=True)


def parse_uuid(value: str, name: str) -> str:
    try:
        return str(uuid.UUID(value))
    except ValueError:
        abort(400, description=f"{name} must be a UUID")


def parse_sort():
    sort = request.args.get("sort", "asc").lower()
    if sort not in ("asc", "desc"):
        abort(400, description="Unsupported sort. Allowed: asc, desc")
    return Chirp.created_at.desc() if sort == "desc" else Chirp.created_at.asc()


@bp.post("/chirps")
@jwt_required()
def create_chirp():
    """
    Post a chirp (max 140 characters, profanity masked)
    ---
    tags:
      - Chirps
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
            body: { type: string }
    responses:
      201:
        description: Created
      401:
        description: Unauthorized
      422:
        description: Chirp is too long
    """
    data = chirp_create_schema.load(request.get_json(silent=True) or {})

    chirp = Chirp(body=censor(data["body"]), user_id=str(g.current_user_id))
    storage.new(chirp)
    storage.save()

    return jsonify(chirp_out_schema.dump(chirp)), 201


@bp.get("/chirps")
def list_chirps():
    """
    List chirps, optionally by one author
    ---
    tags:
      - Chirps
    parameters:
      - in: query
        name: author_id
        type: string
      - in: query
        name: sort
        type: string
        enum: [asc, desc]
    responses:
      200: { description: OK }
    """
    session = storage.get_session()
    query = session.query(Chirp)

    author_id = request.args.get("author_id")
    if author_id:
        query = query.filter(Chirp.user_id == parse_uuid(author_id, "author_id"))

    rows = query.order_by(parse_sort(), Chirp.id).all()
    return jsonify(chirp_list_out_schema.dump(rows)), 200


@bp.get("/chirps/<chirp_id>")
def get_chirp(chirp_id: str):
    """
    Get a chirp by id
    ---
    tags:
      - Chirps
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    chirp = storage.get(Chirp, parse_uuid(chirp_id, "chirp_id"))
    if not chirp:
        abort(404)
    return jsonify(chirp_out_schema.dump(chirp)), 200


@bp.delete("/chirps/<chirp_id>")
@jwt_required()
def delete_chirp(chirp_id: str):
    """
    Delete one of your own chirps
    ---
    tags:
      - Chirps
    security:
      - Bearer: []
    responses:
      204: { description: Deleted }
      403: { description: Not the author }
      404: { description: Not found }
    """
    chirp = storage.get(Chirp, parse_uuid(chirp_id, "chirp_id"))
    if not chirp:
        abort(404)
    if chirp.user_id != str(g.current_user_id):
        abort(403, description="User is not author of chirp")

    chirp.delete()
    return ("", 204)
