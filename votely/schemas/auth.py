from marshmallow import Schema, fields, validate, EXCLUDE

class RegisterSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.Str(required=True, validate=validate.Length(min=8, max=128))
    username = fields.Str(
        required=True,
        validate=[
            validate.Length(min=3, max=30),
            validate.Regexp(r"^[A-Za-z0-9_.-]+$", error="Username may only contain letters, digits, '.', '-' and '_'"),
        ],
    )
    phone_number = fields.Str(required=False, allow_none=True, validate=validate.Length(max=30))

class LoginSchema(Schema):
    """Schema for login request"""
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.Str(required=True, validate=validate.Length(min=1, max=128))
