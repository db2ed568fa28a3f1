from rest_framework import serializers

from apps.users.serializers import UserSerializer


class AddressSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    street = serializers.CharField()
    city = serializers.CharField()
    zipCode = serializers.CharField(source="zip_code")
    country = serializers.CharField()
    userId = serializers.IntegerField(source="user_id")
    createdAt = serializers.CharField(source="created_at", allow_null=True)
    updatedAt = serializers.CharField(source="updated_at", allow_null=True)
    user = UserSerializer(allow_null=True, required=False)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if data.get("user") is None:
            data.pop("user", None)
        return data


class AddressUpdateSerializer(serializers.Serializer):
    street = serializers.CharField(max_length=255, required=False)
    city = serializers.CharField(max_length=100, required=False)
    zipCode = serializers.CharField(source="zip_code", max_length=50, required=False)
    country = serializers.CharField(max_length=100, required=False)


class AddressCreateSerializer(AddressUpdateSerializer):
    userId = serializers.IntegerField(source="user_id", min_value=1)
