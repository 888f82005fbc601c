from flask import Blueprint
from flasgger import swag_from
from flask_jwt_extended import jwt_required

from ...schemas.poll import PollReadSchema
from ...schemas.stats import PollStatsSchema
from ...services import polls as poll_service
from ...utils.session import current_user_id
from ...utils.validation import parse_poll_id

results_bp = Blueprint("results", __name__)

poll_read_schema = PollReadSchema()
poll_stats_schema = PollStatsSchema()


@results_bp.get("/<poll_id>/votes")
@jwt_required()
@swag_from({
    "tags": ["Results"],
    "security": [{"BearerAuth": []}],
    "summary": "Vote statistics for a poll",
    "description": (
        "Per-option counts in option order, total, percentages (one decimal) "
        "and the leading option. most_voted_option is null until someone votes."
    ),
    "parameters": [{"in": "path", "name": "poll_id", "required": True, "type": "string", "format": "uuid"}],
    "responses": {
        200: {"description": "Statistics"},
        400: {"description": "Invalid poll ID format"},
        401: {"description": "Unauthorized"},
        404: {"description": "Poll not found"},
        503: {"description": "Storage unavailable"},
    }
})
def poll_votes(poll_id):
    poll, stats = poll_service.get_poll_stats(parse_poll_id(poll_id))
    return poll_stats_schema.dump((poll, stats)), 200


@results_bp.get("/mine")
@jwt_required()
@swag_from({
    "tags": ["Results"],
    "security": [{"BearerAuth": []}],
    "summary": "Current user's polls with statistics",
    "responses": {200: {"description": "OK"}, 401: {"description": "Unauthorized"}},
})
def my_polls():
    polls = [
        {**poll_read_schema.dump(poll), "stats": poll_stats_schema.dump((poll, stats))}
        for poll, stats in poll_service.list_user_polls_with_stats(current_user_id())
    ]
    return {"polls": polls}, 200
