"""
apps.accounts.serializers
~~~~~~~~~~~~~~~~~~~~~~~~~
I/O-only serializers for the user administration API.
"""
from rest_framework import serializers


class UserCreateSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)
    confirm_password = serializers.CharField(trim_whitespace=False)


class UserRoleSerializer(serializers.Serializer):
    role_name = serializers.CharField(max_length=150)


class UserStatusSerializer(serializers.Serializer):
    is_locked = serializers.BooleanField()


class ChangePasswordSerializer(serializers.Serializer):
    """``current_password`` may be omitted only by an administrator."""

    email = serializers.CharField()
    current_password = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    password = serializers.CharField(trim_whitespace=False)
    confirm_password = serializers.CharField(trim_whitespace=False)
