from marshmallow import EXCLUDE, Schema, fields

USER_UPGRADED = "user.upgraded"


class PolkaDataSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    user_id = fields.UUID(required=True)


class PolkaEventSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    event = fields.String(required=True)
    # only user.upgraded events carry a payload we read
    data = fields.Dict(load_default=dict)
