from collections.abc import Mapping
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.serializers import as_serializer_error

DEFAULT_ERROR_STATUS = status.HTTP_400_BAD_REQUEST

ERROR_STATUS_MAP = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "METHOD_NOT_ALLOWED": status.HTTP_405_METHOD_NOT_ALLOWED,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "TOO_MANY_REQUESTS": status.HTTP_429_TOO_MANY_REQUESTS,
    # declines are retryable by resubmitting the checkout
    "PAYMENT_DECLINED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "SERVER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "SERVICE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _normalize_details(details: Any) -> Any:
    if isinstance(details, ValidationError):
        return as_serializer_error(details)
    if isinstance(details, Mapping):
        return dict(details)
    if isinstance(details, Exception):
        return {"type": details.__class__.__name__}
    return details


def _require_text(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"error_response requires {name} to be a string")
    value = value.strip()
    if not value:
        raise ValueError(f"error_response requires a non-empty {name}")
    return value


def build_error_payload(
    code: str,
    message: str,
    status_code: int,
    details: Optional[Any] = None,
    *,
    hint: Optional[str] = None,
    extra: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"code": code, "message": message, "status": status_code}
    if details is not None:
        body["details"] = _normalize_details(details)
    if hint is not None:
        body["hint"] = hint
    if extra:
        body["extra"] = dict(extra)
    return {"error": body}


def error_response(
    code: str,
    message: str,
    details: Optional[Any] = None,
    http_status: Optional[int] = None,
    *,
    hint: Optional[str] = None,
    extra: Optional[Mapping[str, Any]] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> Response:
    """
    Return the standard ``{"error": {...}}`` envelope.

    The HTTP status defaults to the mapping for ``code`` (unknown codes are
    400) unless ``http_status`` is given explicitly.
    """
    code = _require_text("code", code).upper()
    message = _require_text("message", message)
    if extra is not None and not isinstance(extra, Mapping):
        raise TypeError("error_response extra must be a mapping if provided")
    if headers is not None and not isinstance(headers, Mapping):
        raise TypeError("error_response headers must be a mapping if provided")
    if hint is not None and not isinstance(hint, str):
        raise TypeError("error_response hint must be a string if provided")

    status_code = (
        int(http_status)
        if http_status is not None
        else ERROR_STATUS_MAP.get(code, DEFAULT_ERROR_STATUS)
    )
    if not 100 <= status_code <= 599:
        raise ValueError("error_response status must be a valid HTTP status code")

    payload = build_error_payload(
        code, message, status_code, details, hint=hint, extra=extra
    )
    response_headers = (
        {str(key): str(value) for key, value in headers.items()} if headers else None
    )
    return Response(payload, status=status_code, headers=response_headers)


def resolve_actor_id(request) -> Optional[int]:
    """User id resolved by the request-context middleware, falling back to DRF auth."""
    actor_id = getattr(request, "validated_user_id", None)
    if actor_id is None:
        user = getattr(request, "user", None)
        if user is not None and getattr(user, "is_authenticated", False):
            actor_id = getattr(user, "id", None)
    return int(actor_id) if actor_id is not None else None
