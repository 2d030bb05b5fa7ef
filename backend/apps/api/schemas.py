from typing import Dict

from drf_spectacular.utils import OpenApiResponse
from rest_framework import serializers


class ErrorDetailSerializer(serializers.Serializer):
    code = serializers.CharField()
    message = serializers.CharField()
    status = serializers.IntegerField()
    details = serializers.JSONField(required=False)
    hint = serializers.CharField(required=False, allow_blank=True)
    extra = serializers.JSONField(required=False)


class ErrorResponseSerializer(serializers.Serializer):
    error = ErrorDetailSerializer()


def error_responses(*status_codes: int) -> Dict[int, OpenApiResponse]:
    """``extend_schema(responses=...)`` entries documenting the error envelope."""
    return {
        code: OpenApiResponse(response=ErrorResponseSerializer) for code in status_codes
    }
