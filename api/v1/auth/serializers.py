"""
Serializers for login and console accounts.
"""

from rest_framework import serializers


class LoginRequestSerializer(serializers.Serializer):
    username = serializers.CharField(required=False, allow_blank=True, default="")
    password = serializers.CharField(
        required=False, allow_blank=True, default="", trim_whitespace=False
    )


class AccountSerializer(serializers.Serializer):
    """Serializer for the Account entity."""

    id = serializers.IntegerField()
    username = serializers.CharField()
    name = serializers.CharField(allow_null=True)
    email = serializers.CharField(allow_null=True)
    role = serializers.CharField(source="role.value")
    is_active = serializers.BooleanField()
    last_login = serializers.DateTimeField(allow_null=True)
    date_joined = serializers.DateTimeField(allow_null=True)
