from marshmallow import Schema, fields, EXCLUDE

from ..extensions import ma


class OptionsField(fields.Field):
    """Accepts a comma-separated string or a list of strings; validated later as a whole."""

    default_error_messages = {"invalid": "Options must be a string or a list of strings"}

    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, str):
            return value
        if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
            return list(value)
        raise self.make_error("invalid")


class PollWriteSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    question = fields.Str(required=True, error_messages={"required": "Question and options are required"})
    options = OptionsField(required=True, error_messages={"required": "Question and options are required"})


class PollReadSchema(ma.Schema):
    id = fields.UUID()
    question = fields.Str()
    options = fields.List(fields.Str())
    created_by = fields.UUID()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class PollListQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    page = fields.Int(load_default=1)
    limit = fields.Int(load_default=None, allow_none=True)

