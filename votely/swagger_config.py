def swagger_template(app=None):
    title = "Votely API"
    version = "1.0.0"

    if app:
        title = app.config.get("SWAGGER_TITLE", title)
        version = app.config.get("SWAGGER_VERSION", version)

    return {
        "swagger": "2.0",
        "info": {
            "title": title,
            "version": version,
            "description": "Create polls, vote once per poll (votes can be changed) and read live results.",
        },
        "securityDefinitions": {
            "BearerAuth": {
                "type": "apiKey",
                "name": "Authorization",
                "in": "header",
                "description": "JWT Authorization header: Bearer <token>"
            }
        },
        "definitions": {
            "ErrorResponse": {
                "type": "object",
                "properties": {
                    "success": {"type": "boolean", "example": False},
                    "error": {
                        "type": "object",
                        "properties": {
                            "code": {"type": "string", "example": "VALIDATION_ERROR"},
                            "message": {"type": "string", "example": "Please provide at least 2 options"},
                            "details": {"type": "object"}
                        }
                    },
                    "request_id": {"type": "string"}
                }
            },
            "PollStats": {
                "type": "object",
                "properties": {
                    "poll_id": {"type": "string", "format": "uuid"},
                    "vote_counts": {"type": "array", "items": {"type": "integer"}, "example": [2, 1, 0]},
                    "total_votes": {"type": "integer", "example": 3},
                    "percentages": {"type": "array", "items": {"type": "number"}, "example": [66.7, 33.3, 0.0]},
                    "most_voted_option": {"type": "integer", "x-nullable": True, "example": 0},
                    "most_voted_option_text": {"type": "string", "x-nullable": True, "example": "Red"},
                    "most_voted_count": {"type": "integer", "example": 2},
                }
            }
        }
    }
