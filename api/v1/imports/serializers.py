"""
Serializers for CSV imports.
"""

from rest_framework import serializers


class ImportRequestSerializer(serializers.Serializer):
    """Multipart form of an import upload."""

    type = serializers.CharField(required=False, allow_blank=True)
    file = serializers.FileField(required=False)


class RowErrorSerializer(serializers.Serializer):
    row = serializers.IntegerField()
    column = serializers.CharField()
    message = serializers.CharField()


class ImportResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    created = serializers.IntegerField()
    updated = serializers.IntegerField()
    errors = RowErrorSerializer(many=True)
    message = serializers.CharField(allow_null=True)
