from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple, Type

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
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
    UnsupportedMediaType,
    ValidationError as DRFValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.utils import error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="exception")

DEFAULT_SERVER_MESSAGE = "Something went wrong"

STATUS_CODE_DEFAULTS: Dict[int, Tuple[str, str]] = {
    status.HTTP_400_BAD_REQUEST: ("VALIDATION_ERROR", "Validation failed"),
    status.HTTP_401_UNAUTHORIZED: ("UNAUTHORIZED", "Access token required"),
    status.HTTP_403_FORBIDDEN: ("FORBIDDEN", "Invalid or expired token"),
    status.HTTP_404_NOT_FOUND: ("NOT_FOUND", "Route not found"),
    status.HTTP_405_METHOD_NOT_ALLOWED: ("METHOD_NOT_ALLOWED", "Method not allowed"),
    status.HTTP_409_CONFLICT: ("CONFLICT", "Resource conflict"),
    status.HTTP_415_UNSUPPORTED_MEDIA_TYPE: (
        "VALIDATION_ERROR",
        "Unsupported media type",
    ),
    status.HTTP_429_TOO_MANY_REQUESTS: (
        "TOO_MANY_REQUESTS",
        "Too many requests from this IP, please try again later.",
    ),
    status.HTTP_500_INTERNAL_SERVER_ERROR: ("SERVER_ERROR", DEFAULT_SERVER_MESSAGE),
}


class ApplicationError(Exception):
    """
    Domain-level application error raised from views and rendered by the
    global handler into the response envelope.

    Args:
        message: Human readable explanation, sent as the envelope `message`.
        error: Optional diagnostic text or validation detail for `error`.
        status_code: Optional explicit HTTP status overriding the class default.
        headers: Optional mapping of headers to include in the response.
    """

    code = "SERVER_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        *,
        error: Optional[Any] = None,
        status_code: Optional[int] = None,
        headers: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error = error
        if status_code is not None:
            self.status_code = status_code
        self.headers = headers

    def to_response(self) -> Response:
        return error_response(
            self.code,
            self.message,
            self.error,
            http_status=self.status_code,
            headers=self.headers,
        )

    @classmethod
    def from_result(cls, error: Tuple[str, str, Optional[Any]]) -> "ApplicationError":
        """Build the matching taxonomy error from a service `(code, message, details)` tuple."""
        code, message, details = error
        error_cls = ERROR_CLASSES.get(code.upper(), ApplicationError)
        return error_cls(message, error=details)


class ValidationError(ApplicationError):
    code = "VALIDATION_ERROR"
    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(ApplicationError):
    code = "UNAUTHORIZED"
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(ApplicationError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND


class MissingReferenceError(NotFoundError):
    """A write referenced a record that does not exist (e.g. address owner)."""

    code = "REFERENCE_ERROR"


class ConflictError(ApplicationError):
    code = "CONFLICT"
    status_code = status.HTTP_409_CONFLICT


class InternalError(ApplicationError):
    code = "SERVER_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


ERROR_CLASSES: Dict[str, Type[ApplicationError]] = {
    cls.code: cls
    for cls in (
        ValidationError,
        AuthError,
        NotFoundError,
        MissingReferenceError,
        ConflictError,
        InternalError,
    )
}


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """
    Central exception handler for DRF views returning the response envelope.
    """

    bound_logger = _bind_logger(context)

    if isinstance(exc, ApplicationError):
        log = bound_logger.error if exc.status_code >= 500 else bound_logger.info
        log("Handled application error", code=exc.code, status=exc.status_code)
        return exc.to_response()

    response = drf_exception_handler(exc, context)
    if response is not None:
        return _from_drf_exception(exc, response, bound_logger)

    bound_logger.exception("Unhandled exception bubbled to global handler")
    return error_response(
        "SERVER_ERROR",
        _server_error_message(context),
        str(exc) or exc.__class__.__name__,
        http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _server_error_message(context: Dict[str, Any]) -> str:
    view = context.get("view")
    request = context.get("request")
    messages = getattr(view, "error_messages", None) or {}
    method = (getattr(request, "method", None) or "").lower()
    return messages.get(method, DEFAULT_SERVER_MESSAGE)


def _bind_logger(context: Dict[str, Any]):
    log = logger
    view = context.get("view")
    request = context.get("request")
    if view:
        view_name = getattr(view, "__class__", type(view)).__name__
        log = log.bind(view=view_name)
    if request is not None:
        log = log.bind(
            method=getattr(request, "method", None),
            path=getattr(request, "path", None),
        )
    return log


def _from_drf_exception(
    exc: Exception, response: Response, bound_logger
) -> Response:
    status_code = response.status_code
    payload = response.data
    code, message, error = _normalize_payload(exc, payload, status_code)
    headers = dict(response.headers) if getattr(response, "headers", None) else None

    if status_code >= 500:
        bound_logger.error(
            "Converted server error",
            code=code,
            status=status_code,
        )
    else:
        bound_logger.info("Converted API exception", code=code, status=status_code)

    return error_response(
        code,
        message,
        error,
        http_status=status_code,
        headers=headers,
    )


def _normalize_payload(
    exc: Exception,
    payload: Any,
    status_code: int,
) -> Tuple[str, str, Optional[Any]]:
    if isinstance(exc, DRFValidationError):
        return ("VALIDATION_ERROR", "Validation failed", payload)
    if isinstance(exc, ParseError):
        return ("VALIDATION_ERROR", "Malformed request", _detail(payload))
    if isinstance(exc, UnsupportedMediaType):
        return ("VALIDATION_ERROR", "Unsupported media type", _detail(payload))
    if isinstance(exc, NotAuthenticated):
        return ("UNAUTHORIZED", "Access token required", None)
    if isinstance(exc, AuthenticationFailed):
        return ("UNAUTHORIZED", _extract_message(payload, "Access token required"), None)
    if isinstance(exc, (PermissionDenied, DjangoPermissionDenied)):
        return (
            "FORBIDDEN",
            _extract_message(payload, "Invalid or expired token"),
            None,
        )
    if isinstance(exc, (NotFound, Http404)):
        return ("NOT_FOUND", "Route not found", None)
    if isinstance(exc, MethodNotAllowed):
        return ("METHOD_NOT_ALLOWED", _extract_message(payload, "Method not allowed"), None)
    if isinstance(exc, Throttled):
        wait = getattr(exc, "wait", None)
        error = f"Retry after {int(wait)} seconds" if wait is not None else None
        return (
            "TOO_MANY_REQUESTS",
            STATUS_CODE_DEFAULTS[status.HTTP_429_TOO_MANY_REQUESTS][1],
            error,
        )

    code, default_message = STATUS_CODE_DEFAULTS.get(
        status_code,
        (
            "SERVER_ERROR" if status_code >= 500 else "UNKNOWN_ERROR",
            DEFAULT_SERVER_MESSAGE if status_code >= 500 else "Request failed",
        ),
    )
    if status_code >= 500:
        return code, default_message, None
    return code, _extract_message(payload, default_message), None


def _detail(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        detail = payload.get("detail")
        if detail is not None:
            return str(detail)
    return None


def _extract_message(payload: Any, fallback: str) -> str:
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict):
        detail = payload.get("detail")
        if isinstance(detail, str):
            return detail
    if isinstance(payload, list) and payload and isinstance(payload[0], str):
        return payload[0]
    return fallback


__all__ = [
    "ApplicationError",
    "AuthError",
    "ConflictError",
    "InternalError",
    "MissingReferenceError",
    "NotFoundError",
    "ValidationError",
    "global_exception_handler",
]
