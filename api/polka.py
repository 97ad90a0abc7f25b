"""
Polka payment webhooks. Only `user.upgraded` does anything: it turns on
Chirpy Red for the user. Every other event is acknowledged with 204 so
Polka stops retrying it.
"""
from __future__ import annotations

import logging

from flask import Blueprint, request, abort

from models import storage
from models.user import User
from models.schemas.polka import PolkaDataSchema, PolkaEventSchema, USER_UPGRADED
from utils.decorators import api_key_required

logger = logging.getLogger(__name__)

bp = Blueprint("polka", __name__)

event_schema = PolkaEventSchema()
data_schema = PolkaDataSchema()


@bp.post("/polka/webhooks")
@api_key_required()
def polka_webhook():
    """
    Polka event receiver
    ---
    tags:
      - Webhooks
    security:
      - ApiKey: []
    responses:
      204: { description: Handled or ignored }
      401: { description: Missing or wrong API key }
      404: { description: Unknown user }
    """
    event = event_schema.load(request.get_json(silent=True) or {})
    if event["event"] != USER_UPGRADED:
        return ("", 204)

    data = data_schema.load(event["data"])
    user = storage.get(User, str(data["user_id"]))
    if not user:
        abort(404, description="User not found")

    user.is_chirpy_red = True
    user.save()
    logger.info("user %s upgraded to Chirpy Red", user.id)
    return ("", 204)
