from typing import Optional

from drf_spectacular.utils import inline_serializer
from rest_framework import serializers


class ErrorResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=False)
    message = serializers.CharField()
    error = serializers.CharField(required=False)


class MessageResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    message = serializers.CharField()


def envelope(
    name: str,
    data_serializer: Optional[type[serializers.Serializer]] = None,
    *,
    many: bool = False,
) -> serializers.Serializer:
    """Create an inline `{success, message?, data, count?}` response serializer."""
    fields = {
        "success": serializers.BooleanField(),
        "message": serializers.CharField(required=False),
    }
    if data_serializer is not None:
        fields["data"] = data_serializer(many=many)
    if many:
        fields["count"] = serializers.IntegerField()
    return inline_serializer(name=name, fields=fields)
