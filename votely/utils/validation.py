import uuid

from marshmallow import ValidationError

from ..exceptions import InvalidIdentifier, ValidationFailed


def _first_message(messages):
    """Walk a marshmallow error structure down to its first leaf message."""
    if isinstance(messages, dict):
        key, value = next(iter(messages.items()))
        field, message = _first_message(value)
        return (field or key), message
    if isinstance(messages, (list, tuple)):
        return _first_message(messages[0])
    return None, str(messages)


def load_or_raise(schema, payload):
    """
    Deserialize ``payload`` with ``schema``.

    Only the first violated rule is reported, with the offending field name
    in ``details``.
    """
    try:
        return schema.load(payload)
    except ValidationError as err:
        field, message = _first_message(err.normalized_messages())
        details = {"field": field} if field and field != "_schema" else None
        raise ValidationFailed(message, details=details) from err


def parse_poll_id(raw) -> uuid.UUID:
    """
    Accept only canonical hyphenated UUID strings.
    Runs before any query so a malformed id never reaches the store.
    """
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        parsed = uuid.UUID(str(raw))
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdentifier()
    if str(parsed) != str(raw).lower():
        raise InvalidIdentifier()
    return parsed


def request_payload(req) -> dict:
    """JSON body, falling back to form fields for HTML form posts."""
    payload = req.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return req.form.to_dict()
