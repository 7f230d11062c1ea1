from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple, Union

from django.core.exceptions import (
    PermissionDenied as DjangoPermissionDenied,
    ValidationError as DjangoValidationError,
)
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    AuthenticationFailed,
    MethodNotAllowed,
    NotAuthenticated,
    NotFound,
    ParseError,
    PermissionDenied,
    Throttled,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.utils import error_response
from apps.common import get_logger
from apps.common.i18n import Messages

logger = get_logger(__name__).bind(component="api", layer="exception")

STATUS_CODE_DEFAULTS: Dict[int, Tuple[str, str]] = {
    status.HTTP_400_BAD_REQUEST: ("VALIDATION_ERROR", Messages.VALIDATION_FAILED),
    status.HTTP_401_UNAUTHORIZED: ("UNAUTHORIZED", Messages.AUTH_REQUIRED),
    status.HTTP_403_FORBIDDEN: ("FORBIDDEN", Messages.FORBIDDEN),
    status.HTTP_404_NOT_FOUND: ("NOT_FOUND", Messages.NOT_FOUND),
    status.HTTP_405_METHOD_NOT_ALLOWED: ("METHOD_NOT_ALLOWED", Messages.METHOD_NOT_ALLOWED),
    status.HTTP_409_CONFLICT: ("CONFLICT", Messages.VALIDATION_FAILED),
    status.HTTP_422_UNPROCESSABLE_ENTITY: ("UNPROCESSABLE_ENTITY", Messages.VALIDATION_FAILED),
    status.HTTP_429_TOO_MANY_REQUESTS: ("TOO_MANY_REQUESTS", Messages.THROTTLED),
    status.HTTP_500_INTERNAL_SERVER_ERROR: ("SERVER_ERROR", Messages.SERVER_ERROR),
}


class ApplicationError(Exception):
    """
    Domain-level error raised from services and rendered by the global handler.

    Args:
        code: Machine readable error code.
        message: Human readable (Arabic) explanation shown to the user.
        status_code: Optional explicit HTTP status. If omitted, code mapping is used.
        details: Optional structured details for clients.
        data: Optional domain payload placed under ``data`` in the envelope.
        hint: Optional hint for remediation.
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
        data: Optional[Mapping[str, Any]] = None,
        hint: Optional[str] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        self.data = dict(data) if data is not None else None
        self.hint = hint

    def to_response(self) -> Response:
        return error_response(
            self.code,
            self.message,
            self.details,
            http_status=self.status_code,
            data=self.data,
            hint=self.hint,
        )


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """
    DRF ``EXCEPTION_HANDLER``: every failure leaves the API as a
    ``{"success": false, ...}`` envelope.
    """

    bound_logger = _bind_logger(context)

    if isinstance(exc, ApplicationError):
        bound_logger.info(
            "Handled application error",
            code=exc.code,
            status=exc.status_code,
        )
        return exc.to_response()

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(_normalize_django_validation_error(exc))

    response = drf_exception_handler(exc, context)
    if response is not None:
        return _from_drf_exception(exc, response, bound_logger)

    bound_logger.exception("Unhandled exception bubbled to global handler")
    return error_response(
        "SERVER_ERROR",
        Messages.SERVER_ERROR,
        http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _bind_logger(context: Dict[str, Any]):
    log = logger
    view = context.get("view")
    request = context.get("request")
    if view:
        log = log.bind(view=type(view).__name__)
    if request is not None:
        log = log.bind(
            method=getattr(request, "method", None),
            path=getattr(request, "path", None),
        )
    return log


def _from_drf_exception(exc: Exception, response: Response, bound_logger) -> Response:
    status_code = response.status_code
    code, message, details, hint = _normalize_payload(exc, response.data, status_code)
    headers = dict(response.headers) if getattr(response, "headers", None) else None

    if status_code >= 500:
        bound_logger.error("Converted server error", code=code, status=status_code)
    else:
        bound_logger.info("Converted API exception", code=code, status=status_code)

    return error_response(
        code,
        message,
        details,
        http_status=status_code,
        hint=hint,
        headers=headers,
    )


def _normalize_django_validation_error(
    exc: DjangoValidationError,
) -> Union[Dict[str, Any], list]:
    if hasattr(exc, "message_dict"):
        return exc.message_dict
    if hasattr(exc, "messages"):
        return list(exc.messages)
    return {"detail": getattr(exc, "message", Messages.VALIDATION_FAILED)}


def _normalize_payload(
    exc: Exception,
    payload: Any,
    status_code: int,
) -> Tuple[str, str, Optional[Any], Optional[str]]:
    if isinstance(exc, (ValidationError, ParseError)):
        return "VALIDATION_ERROR", Messages.VALIDATION_FAILED, payload, None
    if isinstance(exc, AuthenticationFailed):
        return "UNAUTHORIZED", Messages.AUTH_FAILED, None, None
    if isinstance(exc, NotAuthenticated):
        return "UNAUTHORIZED", Messages.AUTH_REQUIRED, None, None
    if isinstance(exc, (PermissionDenied, DjangoPermissionDenied)):
        return "FORBIDDEN", Messages.FORBIDDEN, None, None
    if isinstance(exc, (NotFound, Http404)):
        return "NOT_FOUND", Messages.NOT_FOUND, None, None
    if isinstance(exc, MethodNotAllowed):
        return "METHOD_NOT_ALLOWED", Messages.METHOD_NOT_ALLOWED, None, None
    if isinstance(exc, Throttled):
        wait = getattr(exc, "wait", None)
        details = {"retryAfter": wait} if wait is not None else None
        hint = "Wait before retrying this request." if wait is not None else None
        return "TOO_MANY_REQUESTS", Messages.THROTTLED, details, hint

    code, message = STATUS_CODE_DEFAULTS.get(
        status_code,
        (
            "SERVER_ERROR" if status_code >= 500 else "UNKNOWN_ERROR",
            Messages.SERVER_ERROR if status_code >= 500 else Messages.GENERIC_RETRY,
        ),
    )
    details = payload if _include_details(status_code, payload) else None
    return code, message, details, None


def _include_details(status_code: int, payload: Any) -> bool:
    if status_code >= 500:
        return False
    return isinstance(payload, (dict, list)) and payload not in (None, {})


__all__ = ["ApplicationError", "global_exception_handler"]
