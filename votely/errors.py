from flask import jsonify, g, current_app, request
from werkzeug.exceptions import HTTPException

from .exceptions import ApiError

def _payload(code: str, message: str, details=None, status=400):
    return (
        jsonify({
            "success": False,
            "error": {
                "code": code,
                "message": message,
                "details": details or None,
            },
            "request_id": getattr(g, "request_id", None),
        }),
        status,
    )

def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(e: ApiError):
        if e.status_code >= 500:
            current_app.logger.warning(
                "%s request_id=%s path=%s", e.code, getattr(g, "request_id", None), request.path
            )
        return _payload(code=e.code, message=e.message, details=e.details, status=e.status_code)

    # Generic HTTP errors (404, 405, 415, etc.)
    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        desc = e.description

        # If we pass structured error info via abort(description=dict)
        if isinstance(desc, dict):
            code = desc.get("code") or e.name.replace(" ", "_").upper()
            message = desc.get("message") or e.name
            details = desc.get("errors") or desc.get("details")
            return _payload(code=code, message=message, details=details, status=e.code or 400)

        return _payload(
            code=e.name.replace(" ", "_").upper(),
            message=desc or e.name,
            details=None,
            status=e.code or 400
        )

    @app.errorhandler(404)
    def handle_404(_):
        return _payload("NOT_FOUND", "Resource not found", status=404)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        current_app.logger.exception(
            "Unhandled exception request_id=%s path=%s", getattr(g, "request_id", None), request.path
        )
        # Don't leak internals
        return _payload("INTERNAL_SERVER_ERROR", "An unexpected error occurred", status=500)


def register_jwt_handlers(jwt):
    """Render flask-jwt-extended failures with the same envelope as everything else."""

    @jwt.unauthorized_loader
    def _missing_token(reason):
        return _payload("UNAUTHORIZED", "Unauthorized", details={"reason": reason}, status=401)

    @jwt.invalid_token_loader
    def _invalid_token(reason):
        return _payload("UNAUTHORIZED", "Invalid token", details={"reason": reason}, status=401)

    @jwt.expired_token_loader
    def _expired_token(jwt_header, jwt_payload):
        return _payload("UNAUTHORIZED", "Token has expired", status=401)

    @jwt.revoked_token_loader
    def _revoked_token(jwt_header, jwt_payload):
        return _payload("UNAUTHORIZED", "Token has been revoked", status=401)
