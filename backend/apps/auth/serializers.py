from rest_framework import serializers

from apps.users.validators import (
    validate_name as validate_name_rules,
    validate_password as validate_password_rules,
)


class RegisterRequestSerializer(serializers.Serializer):
    name = serializers.CharField()
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_name(self, value: str) -> str:
        return validate_name_rules(value)

    def validate_password(self, value: str) -> str:
        return validate_password_rules(value)


class UserSummarySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    email = serializers.EmailField()


class RegisterResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSummarySerializer()
    access = serializers.CharField()
    refresh = serializers.CharField()


class MeResponseSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    email = serializers.EmailField()
    date_joined = serializers.CharField(allow_null=True)


class LogoutRequestSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class DetailResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()
