from typing import Any, Optional

from django.http import HttpRequest
from rest_framework.exceptions import AuthenticationFailed as DRFAuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

from apps.api.utils import error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="validation")

_jwt_authenticator = JWTAuthentication()

# Views setting this attribute to True only run for an authenticated customer.
ACTOR_REQUIRED_ATTR = "requires_actor"


def _is_authenticated_user(request: HttpRequest) -> bool:
    user = getattr(request, "user", None)
    if user and getattr(user, "is_authenticated", False) and getattr(user, "id", None):
        return True

    # The middleware runs before DRF authenticates the request, so bearer
    # tokens have to be resolved here.
    meta = getattr(request, "META", {}) or {}
    if not meta.get("HTTP_AUTHORIZATION"):
        return False
    try:
        authenticated = _jwt_authenticator.authenticate(request)
    except (InvalidToken, DRFAuthenticationFailed) as exc:
        logger.warning("JWT authentication failed", detail=str(exc))
        return False
    if not authenticated:
        return False

    user, token = authenticated
    if not getattr(user, "is_authenticated", False) or not getattr(user, "id", None):
        return False
    request.user = user
    request.auth = token
    logger.debug("Authenticated user from bearer token", user_id=user.id)
    return True


def _set_validated_user(request: HttpRequest, user_id: Optional[int]) -> None:
    request.validated_user_id = user_id


def requires_actor(view_class) -> bool:
    return bool(getattr(view_class, ACTOR_REQUIRED_ATTR, False))


def validate_request_context(request: HttpRequest, view_class, view_kwargs) -> Any:
    """
    Request level checks for API views.

    Returns an error response when the request must not reach the view;
    otherwise None, with ``request.validated_user_id`` set for views that
    act on behalf of the caller (cart and checkout routes).
    """
    view_name = getattr(view_class, "__name__", "")
    method = getattr(request, "method", None)
    if not requires_actor(view_class):
        return None

    logger.debug("Resolving request actor", view=view_name, method=method)
    if not _is_authenticated_user(request):
        logger.warning("Rejected unauthenticated request", view=view_name, method=method)
        return error_response("UNAUTHORIZED", "Authentication required")
    actor_id = int(request.user.id)
    _set_validated_user(request, actor_id)
    logger.debug(
        "Validated request actor", view=view_name, method=method, actor_id=actor_id
    )
    return None
