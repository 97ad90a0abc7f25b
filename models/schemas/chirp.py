from marshmallow import EXCLUDE, Schema, ValidationError, fields

from models.chirp import MAX_CHIRP_LENGTH


def validate_body(value: str) -> None:
    # the limit is on encoded size, so multi-byte characters count more than once
    if len(value.encode("utf-8")) > MAX_CHIRP_LENGTH:
        raise ValidationError("Chirp is too long")


class ChirpCreateSchema(Schema):
    class Meta:
        # older clients still send user_id; the author always comes from the token
        unknown = EXCLUDE

    body = fields.String(required=True, validate=validate_body)


class ChirpOutSchema(Schema):
    id = fields.String()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
    body = fields.String()
    user_id = fields.String()
