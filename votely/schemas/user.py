from marshmallow import Schema, fields

class UserSchema(Schema):
    id = fields.UUID()
    email = fields.Email()
    username = fields.Str()
    phone_number = fields.Str(allow_none=True)
    created_at = fields.DateTime()
