"""
Serializers for assignment endpoints.
"""

from rest_framework import serializers


class AssignmentSerializer(serializers.Serializer):
    """Serializer for the Assignment entity with its display names."""

    id = serializers.UUIDField()
    license_id = serializers.UUIDField()
    license_name = serializers.CharField(allow_null=True)
    employee_id = serializers.UUIDField()
    employee_name = serializers.CharField(allow_null=True)
    employee_email = serializers.CharField(allow_null=True)
    seat_id = serializers.IntegerField(allow_null=True)
    seat_key = serializers.CharField(allow_null=True)
    assigned_date = serializers.DateField()
    returned_date = serializers.DateField(allow_null=True)
    reason = serializers.CharField(allow_null=True)
    is_active = serializers.BooleanField()


class AssignmentHistorySerializer(serializers.Serializer):
    """Serializer for AssignmentHistoryEntry."""

    id = serializers.UUIDField()
    license_id = serializers.UUIDField()
    license_name = serializers.CharField(allow_null=True)
    assignment_id = serializers.UUIDField(allow_null=True)
    action = serializers.CharField(source="action.value")
    reason = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField(allow_null=True)


class AssignmentResultSerializer(serializers.Serializer):
    """Serializer for AssignmentResultDTO."""

    success = serializers.BooleanField()
    message = serializers.CharField()
    count = serializers.IntegerField()
    skipped = serializers.ListField(child=serializers.CharField())
