import uuid

from flask_jwt_extended import get_jwt_identity

from ..exceptions import AuthenticationRequired


def current_user_id() -> uuid.UUID:
    """
    Identity of the caller for a route already guarded by ``@jwt_required()``.

    Routes call this once and pass the id into services explicitly; services
    never look at the request themselves.
    """
    identity = get_jwt_identity()
    if not identity:
        raise AuthenticationRequired()
    try:
        return uuid.UUID(str(identity))
    except ValueError:
        raise AuthenticationRequired("Invalid token identity")
