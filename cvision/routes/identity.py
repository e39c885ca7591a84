from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from cvision.services.errors import Forbidden, Unauthenticated


def current_requester_id():
    """JWT subject of the current request, or None when no token was sent."""
    verify_jwt_in_request(optional=True)
    return get_jwt_identity()


def require_requester(role=None):
    """Like current_requester_id, but raises unless a (matching-role) user is present."""
    requester_id = current_requester_id()
    if not requester_id:
        raise Unauthenticated()
    if role is not None and get_jwt().get("role") != role:
        raise Forbidden(f"This action requires the {role} role")
    return requester_id
