from collections.abc import Mapping
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.serializers import as_serializer_error

DEFAULT_ERROR_STATUS = status.HTTP_400_BAD_REQUEST

ERROR_STATUS_MAP = {
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "SERVER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "METHOD_NOT_ALLOWED": status.HTTP_405_METHOD_NOT_ALLOWED,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "UNPROCESSABLE_ENTITY": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "TOO_MANY_REQUESTS": status.HTTP_429_TOO_MANY_REQUESTS,
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


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    http_status: int = status.HTTP_200_OK,
    *,
    extra: Optional[Mapping[str, Any]] = None,
) -> Response:
    """
    Wrap a payload in the storefront envelope ``{"success": true, "data": ...}``.

    Args:
        data: Response payload placed under ``data``.
        message: Optional human-readable message shown by clients.
        http_status: HTTP status code, 200 unless stated.
        extra: Optional top-level keys merged next to ``data`` (e.g. ``meta``).
    """

    payload: Dict[str, Any] = {"success": True, "data": data}
    if message is not None:
        payload["message"] = str(message)
    if extra:
        payload.update(dict(extra))
    return Response(payload, status=http_status)


def error_response(
    code: str,
    message: str,
    details: Optional[Any] = None,
    http_status: Optional[int] = None,
    *,
    data: Optional[Any] = None,
    hint: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> Response:
    """
    Return a failure envelope every client can render.

    The payload is ``{"success": false, "message": ..., "error": {...}}``.
    ``message`` is what storefront clients show the user; ``error.code`` is
    the machine-readable identifier.

    Args:
        code: Machine-readable error identifier.
        message: Human-readable explanation of the error.
        details: Optional context, e.g. validation errors.
        http_status: Explicit HTTP status code overriding the code mapping.
        data: Optional domain payload clients inspect on failure
            (coupon validation sends ``{"valid": false, ...}``).
        hint: Optional remediation advice.
        headers: Optional response headers.
    """

    if not isinstance(code, str):
        raise TypeError("error_response requires code to be a string")
    if not isinstance(message, str):
        raise TypeError("error_response requires message to be a string")

    code = code.strip()
    message = message.strip()

    if not code:
        raise ValueError("error_response requires a non-empty code")
    if not message:
        raise ValueError("error_response requires a non-empty message")

    normalized_code = code.upper()

    status_code = (
        int(http_status)
        if http_status is not None
        else ERROR_STATUS_MAP.get(normalized_code, DEFAULT_ERROR_STATUS)
    )

    if headers is not None and not isinstance(headers, Mapping):
        raise TypeError("error_response headers must be a mapping if provided")
    if hint is not None and not isinstance(hint, str):
        raise TypeError("error_response hint must be a string if provided")

    if not 100 <= status_code <= 599:
        raise ValueError("error_response status must be a valid HTTP status code")

    error: Dict[str, Any] = {"code": normalized_code, "status": status_code}
    if details is not None:
        error["details"] = _normalize_details(details)
    if hint is not None:
        error["hint"] = hint

    payload: Dict[str, Any] = {
        "success": False,
        "message": message,
        "error": error,
    }
    if data is not None:
        payload["data"] = data

    headers_dict = (
        {str(key): str(value) for key, value in headers.items()} if headers else None
    )

    return Response(payload, status=status_code, headers=headers_dict)
