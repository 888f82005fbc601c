import re
import time
import uuid
from flask import g, request, current_app

# Client-supplied ids are echoed back in headers and logs, so keep them tame.
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

def init_request_id(app):
    @app.before_request
    def _assign_request_id():
        rid = request.headers.get("X-Request-Id", "")
        g.request_id = rid if _VALID_REQUEST_ID.match(rid) else str(uuid.uuid4())
        g.request_started = time.perf_counter()

    @app.after_request
    def _add_request_id_header(response):
        if hasattr(g, "request_id"):
            response.headers["X-Request-Id"] = g.request_id
            elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
            current_app.logger.debug(
                "%s %s -> %s request_id=%s %.1fms",
                request.method, request.path, response.status_code, g.request_id, elapsed_ms,
            )
        return response
