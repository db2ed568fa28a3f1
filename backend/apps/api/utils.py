from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional

from rest_framework import status
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.serializers import as_serializer_error

DEFAULT_ERROR_STATUS = status.HTTP_400_BAD_REQUEST

ERROR_STATUS_MAP = {
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "REFERENCE_ERROR": status.HTTP_404_NOT_FOUND,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "SERVER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "METHOD_NOT_ALLOWED": status.HTTP_405_METHOD_NOT_ALLOWED,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "TOO_MANY_REQUESTS": status.HTTP_429_TOO_MANY_REQUESTS,
}


def _flatten_errors(errors: Any, prefix: str = "") -> Iterable[str]:
    if isinstance(errors, Mapping):
        for key, value in errors.items():
            label = f"{prefix}.{key}" if prefix else str(key)
            yield from _flatten_errors(value, label)
    elif isinstance(errors, (list, tuple)):
        for item in errors:
            yield from _flatten_errors(item, prefix)
    elif prefix and prefix != "non_field_errors":
        yield f"{prefix}: {errors}"
    else:
        yield str(errors)


def _normalize_error(error: Any) -> Optional[str]:
    if error is None:
        return None
    if isinstance(error, DRFValidationError):
        error = as_serializer_error(error)
    if isinstance(error, Exception):
        return str(error) or error.__class__.__name__
    if isinstance(error, str):
        return error
    return "; ".join(_flatten_errors(error)) or None


def success_response(
    data: Any = None,
    *,
    message: Optional[str] = None,
    count: Optional[int] = None,
    http_status: int = status.HTTP_200_OK,
) -> Response:
    """
    Return the standard success envelope.

    `data` is omitted when None so delete responses carry only a message;
    `count` is added for list endpoints.
    """
    payload: Dict[str, Any] = {"success": True}
    if message is not None:
        payload["message"] = message
    if data is not None:
        payload["data"] = data
    if count is not None:
        payload["count"] = count
    return Response(payload, status=http_status)


def error_response(
    code: str,
    message: str,
    error: Optional[Any] = None,
    http_status: Optional[int] = None,
    *,
    headers: Optional[Mapping[str, str]] = None,
) -> Response:
    """
    Return a consistently structured error envelope for API endpoints.

    Args:
        code: Machine-readable error identifier, used to pick the HTTP status.
        message: Human-readable explanation of the error.
        error: Optional diagnostic text; validation errors and exceptions are
            flattened into a single string.
        http_status: Explicit HTTP status code to override the default mapping.
        headers: Optional response headers to include alongside the payload.
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

    status_code = (
        int(http_status)
        if http_status is not None
        else ERROR_STATUS_MAP.get(code.upper(), DEFAULT_ERROR_STATUS)
    )

    if headers is not None and not isinstance(headers, Mapping):
        raise TypeError("error_response headers must be a mapping if provided")

    if not 100 <= status_code <= 599:
        raise ValueError("error_response status must be a valid HTTP status code")

    payload: Dict[str, Any] = {"success": False, "message": message}
    normalized = _normalize_error(error)
    if normalized is not None:
        payload["error"] = normalized

    headers_dict = (
        {str(key): str(value) for key, value in headers.items()} if headers else None
    )

    return Response(payload, status=status_code, headers=headers_dict)


def parse_id(raw: Any) -> Optional[int]:
    """Strictly parse a path identifier; returns None when it is not an integer."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if not isinstance(raw, str):
        return None
    candidate = raw.strip()
    if candidate.startswith(("+", "-")):
        digits = candidate[1:]
    else:
        digits = candidate
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(candidate)


def missing_fields(data: Mapping[str, Any], fields: Iterable[str]) -> list:
    """Return the names of fields that are absent or falsy in the payload."""
    return [field for field in fields if not data.get(field)]
