from rest_framework import serializers

PASSWORD_MIN_LENGTH = 6


def validate_name(value: str) -> str:
    """Display names are required and stored trimmed."""
    if value is None:
        raise serializers.ValidationError("Please add a name.")
    trimmed = value.strip()
    if not trimmed:
        raise serializers.ValidationError("Please add a name.")
    return trimmed


def validate_password(value: str) -> str:
    """
    Ensures that the password is present and at least 6 characters long.
    """
    if value is None:
        raise serializers.ValidationError("Please add a password.")
    if len(value) < PASSWORD_MIN_LENGTH:
        raise serializers.ValidationError(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters long."
        )
    return value
