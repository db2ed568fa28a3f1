from collections.abc import Mapping
from typing import Any, Dict, Iterable, Type

from rest_framework import serializers
from rest_framework.exceptions import ValidationError as DRFValidationError

from apps.api.exceptions import ValidationError
from apps.api.utils import missing_fields, parse_id
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="validation")


def request_payload(request) -> Mapping:
    """Return the parsed JSON body, treating non-object bodies as empty."""
    data = getattr(request, "data", None)
    if isinstance(data, Mapping):
        return data
    if data not in (None, "", [], {}):
        logger.debug("Ignoring non-object request body", type=type(data).__name__)
    return {}


def require_id(raw: Any, label: str) -> int:
    parsed = parse_id(raw)
    if parsed is None:
        logger.info("Rejected malformed identifier", label=label, value=raw)
        raise ValidationError(f"Invalid {label} ID")
    return parsed


def require_fields(data: Mapping, fields: Iterable[str], message: str) -> None:
    missing = missing_fields(data, fields)
    if missing:
        logger.info("Rejected request with missing fields", missing=missing)
        raise ValidationError(message)


def validate_payload(
    serializer_class: Type[serializers.Serializer],
    data: Mapping,
    *,
    partial: bool = False,
) -> Dict[str, Any]:
    serializer = serializer_class(data=data, partial=partial)
    try:
        serializer.is_valid(raise_exception=True)
    except DRFValidationError as exc:
        logger.info("Payload validation failed", errors=exc.detail)
        raise ValidationError("Validation failed", error=exc) from exc
    return dict(serializer.validated_data)
