import uuid
from typing import Optional, Dict, Any
from flask import request, has_request_context

from ..extensions import db
from ..models.audit_log import AuditLog


def _as_uuid(value) -> Optional[uuid.UUID]:
    if value is None:
        return None
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


def _request_context():
    """(ip, user_agent) when running inside a request, else (None, None)."""
    if not has_request_context():
        return None, None
    ip = request.headers.get("X-Forwarded-For", request.remote_addr)
    ua = request.headers.get("User-Agent")
    return ip, (ua[:255] if ua else None)


def audit_log(
    action: str,
    actor_id=None,
    entity_type: Optional[str] = None,
    entity_id=None,
    details: Optional[Dict[str, Any]] = None,
) -> AuditLog:
    """
    Stage an audit row in the current session.
    The caller commits it together with the write it describes.
    """
    ip, ua = _request_context()

    log = AuditLog(
        actor_user_id=_as_uuid(actor_id),
        action=action,
        entity_type=entity_type,
        entity_id=_as_uuid(entity_id),
        ip_address=ip,
        user_agent=ua,
        details=details or None,
    )
    db.session.add(log)
    return log
