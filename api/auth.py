"""
Authentication blueprint:
- POST /login    email + password -> user, access token, refresh token
- POST /refresh  Bearer <refresh token> -> new access token
- POST /revoke   Bearer <refresh token> -> 204

The refresh token is not rotated on /refresh; it stays usable until it
expires or is revoked.
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify, abort, current_app

from models.schemas.user import UserLoginSchema, UserOutSchema
from services.sessions import SessionCoordinator
from utils.exceptions import RefreshTokenNotFound

bp = Blueprint("auth", __name__)

user_login_schema = UserLoginSchema()
user_out_schema = UserOutSchema()


def get_sessions() -> SessionCoordinator:
    return current_app.extensions["sessions"]


@bp.post("/login")
def login():
    """
    Login: return the user with an access token and a refresh token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             email: { type: string }
             password: { type: string }
             expires_in_seconds: { type: integer, description: "capped at the default (360)" }
    responses:
      200:
        description: OK (returns tokens)
      401:
        description: Unauthorized
    """
    payload = user_login_schema.load(request.get_json(silent=True) or {})

    tokens = get_sessions().login(
        payload["email"],
        payload["password"],
        expires_in_seconds=payload.get("expires_in_seconds"),
    )

    body = user_out_schema.dump(tokens.user)
    body["token"] = tokens.access_token
    body["refresh_token"] = tokens.refresh_token
    return jsonify(body), 200


@bp.post("/refresh")
def refresh():
    """
    Exchange a refresh token for a new access token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK
      401:
        description: Missing, unknown, expired or revoked refresh token
    """
    token = get_sessions().refresh(request.headers)
    return jsonify({"token": token}), 200


@bp.post("/revoke")
def revoke():
    """
    Revoke a refresh token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      204:
        description: Revoked (also when it already was)
      404:
        description: Unknown refresh token
    """
    try:
        get_sessions().revoke_session(request.headers)
    except RefreshTokenNotFound as exc:
        abort(404, description=exc.message)
    return ("", 204)
