from rest_framework import serializers


class UserSerializer(serializers.Serializer):
    """Public user view; the password hash is never part of it."""

    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField()
    email = serializers.CharField()
    age = serializers.IntegerField(allow_null=True)
    createdAt = serializers.CharField(source="created_at", allow_null=True)
    updatedAt = serializers.CharField(source="updated_at", allow_null=True)


class UserWriteSerializer(serializers.Serializer):
    # Presence of name/email is checked by the views before this runs.
    name = serializers.CharField(max_length=255, required=False)
    email = serializers.CharField(max_length=255, required=False)
    age = serializers.IntegerField(min_value=0, required=False, allow_null=True)
