from marshmallow import EXCLUDE, Schema, fields, pre_load, validate


def _norm_email(v):
    return v.strip().lower() if isinstance(v, str) else v


class _EmailNormalizingSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "email" in data:
            data = dict(data, email=_norm_email(data["email"]))
        return data


class UserCreateSchema(_EmailNormalizingSchema):
    email = fields.Email(required=True)
    # emptiness is rejected by hash_password itself
    password = fields.String(required=True, load_only=True)


class UserLoginSchema(_EmailNormalizingSchema):
    email = fields.String(required=True)
    password = fields.String(required=True, load_only=True)
    expires_in_seconds = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=0))


class UserOutSchema(Schema):
    id = fields.String()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
    email = fields.String()
    is_chirpy_red = fields.Boolean()


