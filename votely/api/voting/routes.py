from flask import Blueprint, request
from flasgger import swag_from
from flask_jwt_extended import jwt_required

from ...schemas.vote import VoteSubmitSchema, VoteReceiptSchema, VoteStatusSchema
from ...services import voting as vote_service
from ...utils.session import current_user_id
from ...utils.validation import load_or_raise, parse_poll_id, request_payload

voting_bp = Blueprint("voting", __name__)

vote_submit_schema = VoteSubmitSchema()
vote_receipt_schema = VoteReceiptSchema()
vote_status_schema = VoteStatusSchema()


@voting_bp.post("/votes")
@jwt_required()
@swag_from({
    "tags": ["Voting"],
    "security": [{"BearerAuth": []}],
    "summary": "Submit or change a vote",
    "description": "One vote per user per poll. Submitting again replaces the previous choice.",
    "parameters": [{
        "in": "body",
        "name": "body",
        "required": True,
        "schema": {
            "type": "object",
            "properties": {
                "poll_id": {"type": "string", "format": "uuid"},
                "option_index": {"type": "integer", "example": 0},
            },
            "required": ["poll_id", "option_index"],
        },
    }],
    "responses": {
        200: {"description": "Existing vote updated"},
        201: {"description": "Vote recorded"},
        400: {"description": "Validation error"},
        401: {"description": "Unauthorized"},
        404: {"description": "Poll not found"},
        503: {"description": "Storage unavailable, retry"},
    },
})
def submit_vote():
    payload = load_or_raise(vote_submit_schema, request_payload(request))
    poll_id = parse_poll_id(payload["poll_id"])

    result = vote_service.submit_vote(poll_id, payload["option_index"], current_user_id())

    body = vote_receipt_schema.dump({"status": result.status, "vote": result.vote})
    return body, (201 if result.created else 200)


@voting_bp.get("/polls/<poll_id>/vote")
@jwt_required()
@swag_from({
    "tags": ["Voting"],
    "security": [{"BearerAuth": []}],
    "summary": "Current user's vote on a poll",
    "parameters": [{"in": "path", "name": "poll_id", "required": True, "type": "string", "format": "uuid"}],
    "responses": {200: {"description": "OK"}, 400: {}, 401: {}, 404: {"description": "Poll not found"}},
})
def vote_status(poll_id):
    vote = vote_service.get_vote_status(parse_poll_id(poll_id), current_user_id())
    return vote_status_schema.dump({"has_voted": vote is not None, "vote": vote}), 200
