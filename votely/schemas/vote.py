from marshmallow import Schema, fields, validate, EXCLUDE

class VoteSubmitSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    # format is checked by parse_poll_id, same as path ids
    poll_id = fields.Str(
        required=True,
        error_messages={"required": "Poll ID and option are required", "invalid": "Invalid poll ID format"},
    )
    option_index = fields.Int(
        required=True,
        validate=validate.Range(min=0, error="Option must be a valid non-negative number"),
        error_messages={"required": "Poll ID and option are required", "invalid": "Option must be a valid non-negative number"},
    )

class VoteReadSchema(Schema):
    id = fields.UUID()
    poll_id = fields.UUID()
    option_index = fields.Int()
    voted_by = fields.UUID()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()

class VoteReceiptSchema(Schema):
    status = fields.Str(required=True)  # "created" | "updated"
    vote = fields.Nested(VoteReadSchema, required=True)

class VoteStatusSchema(Schema):
    has_voted = fields.Bool(required=True)
    vote = fields.Nested(VoteReadSchema, allow_none=True)
