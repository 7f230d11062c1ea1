from typing import Any, Mapping, Optional


class StorefrontError(Exception):
    """Base class for storefront client failures."""


class ApiError(StorefrontError):
    """
    A request that produced no usable response envelope: transport failure,
    timeout, or a non-JSON / non-envelope body.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        payload: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = dict(payload) if payload is not None else None


class NotAuthenticatedError(ApiError):
    """The server answered 401; the session is missing or expired."""
