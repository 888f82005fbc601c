from flask import Blueprint, request, current_app
from flasgger import swag_from
from flask_jwt_extended import jwt_required

from ...schemas.poll import PollWriteSchema, PollReadSchema, PollListQuerySchema
from ...services import polls as poll_service
from ...utils.session import current_user_id
from ...utils.validation import load_or_raise, parse_poll_id, request_payload

polls_bp = Blueprint("polls", __name__)

poll_write_schema = PollWriteSchema()
poll_read_schema = PollReadSchema()
poll_list_query_schema = PollListQuerySchema()

_POLL_BODY = {
    "in": "body",
    "name": "body",
    "required": True,
    "schema": {
        "type": "object",
        "properties": {
            "question": {"type": "string", "example": "Favourite colour?"},
            "options": {
                "description": "Comma-separated string or list of strings",
                "example": "Red, Green, Blue",
            },
        },
        "required": ["question", "options"],
    },
}

_POLL_ID_PARAM = {"in": "path", "name": "poll_id", "required": True, "type": "string", "format": "uuid"}


@polls_bp.post("")
@jwt_required()
@swag_from({
    "tags": ["Polls"],
    "security": [{"BearerAuth": []}],
    "summary": "Create a poll",
    "parameters": [_POLL_BODY],
    "responses": {201: {"description": "Created"}, 400: {"description": "Validation error"}, 401: {"description": "Unauthorized"}}
})
def create_poll():
    payload = load_or_raise(poll_write_schema, request_payload(request))

    poll = poll_service.create_poll(current_user_id(), payload["question"], payload["options"])
    return {"poll": poll_read_schema.dump(poll)}, 201


@polls_bp.get("")
@jwt_required()
@swag_from({
    "tags": ["Polls"],
    "security": [{"BearerAuth": []}],
    "summary": "List polls, newest first",
    "parameters": [
        {"in": "query", "name": "page", "required": False, "type": "integer", "default": 1},
        {"in": "query", "name": "limit", "required": False, "type": "integer", "default": 10},
    ],
    "responses": {200: {"description": "OK"}, 400: {"description": "Bad page/limit"}, 401: {"description": "Unauthorized"}}
})
def list_polls():
    query = load_or_raise(poll_list_query_schema, request.args.to_dict())

    limit = query["limit"]
    if limit is None:
        limit = current_app.config["POLLS_DEFAULT_PAGE_SIZE"]
    rows, total = poll_service.list_polls(page=query["page"], limit=limit)

    polls = [
        {**poll_read_schema.dump(poll), "votes": vote_count, "created_by_username": username}
        for poll, vote_count, username in rows
    ]
    return {"polls": polls, "total": total, "page": query["page"], "limit": limit}, 200


@polls_bp.get("/<poll_id>")
@swag_from({
    "tags": ["Polls"],
    "summary": "Get poll details",
    "parameters": [_POLL_ID_PARAM],
    "responses": {200: {"description": "OK"}, 400: {"description": "Invalid poll ID format"}, 404: {"description": "Poll not found"}}
})
def get_poll(poll_id):
    poll = poll_service.get_poll(parse_poll_id(poll_id))
    return {"poll": poll_read_schema.dump(poll)}, 200


@polls_bp.put("/<poll_id>")
@jwt_required()
@swag_from({
    "tags": ["Polls"],
    "security": [{"BearerAuth": []}],
    "summary": "Replace a poll's question and options (owner only)",
    "parameters": [_POLL_ID_PARAM, _POLL_BODY],
    "responses": {200: {}, 400: {}, 401: {}, 403: {}, 404: {}}
})
def update_poll(poll_id):
    poll_id = parse_poll_id(poll_id)
    payload = load_or_raise(poll_write_schema, request_payload(request))

    poll = poll_service.update_poll(poll_id, current_user_id(), payload["question"], payload["options"])
    return {"poll": poll_read_schema.dump(poll)}, 200


@polls_bp.delete("/<poll_id>")
@jwt_required()
@swag_from({
    "tags": ["Polls"],
    "security": [{"BearerAuth": []}],
    "summary": "Delete a poll and all its votes (owner only)",
    "parameters": [_POLL_ID_PARAM],
    "responses": {200: {}, 400: {}, 401: {}, 403: {}, 404: {}, 503: {}}
})
def delete_poll(poll_id):
    poll_service.delete_poll(parse_poll_id(poll_id), current_user_id())
    return {"message": "Poll deleted successfully"}, 200
