from rest_framework import serializers


class RegisterRequestSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.CharField(max_length=255)
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    age = serializers.IntegerField(min_value=0, required=False, allow_null=True)


class LoginRequestSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class ProfileSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    email = serializers.CharField()
    age = serializers.IntegerField(allow_null=True)


class AuthResultSerializer(serializers.Serializer):
    user = ProfileSerializer()
    token = serializers.CharField()
