"""
Serializers for employee endpoints.
"""

from rest_framework import serializers

from api.v1.assignments.serializers import AssignmentHistorySerializer, AssignmentSerializer


class EmployeeRequestSerializer(serializers.Serializer):
    """Serializer for employee create and update requests."""

    name = serializers.CharField(max_length=100)
    department = serializers.CharField(max_length=100)
    email = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    title = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class EmployeeSerializer(serializers.Serializer):
    """Serializer for the Employee entity."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    department = serializers.CharField()
    email = serializers.CharField(allow_null=True)
    title = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField(allow_null=True)
    updated_at = serializers.DateTimeField(allow_null=True)


class CreatedEmployeeSerializer(serializers.Serializer):
    """Serializer for CreatedEmployeeDTO."""

    employee = EmployeeSerializer()
    auto_assigned = serializers.IntegerField()


class EmployeeDetailSerializer(serializers.Serializer):
    """Serializer for EmployeeDetailDTO."""

    employee = EmployeeSerializer()
    assignments = AssignmentSerializer(many=True)
    history = AssignmentHistorySerializer(many=True)


class AssignRequestSerializer(serializers.Serializer):
    """Serializer for assigning licenses to an employee."""

    license_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=True)
    reason = serializers.CharField(required=False, allow_blank=True)


class UnassignRequestSerializer(serializers.Serializer):
    """Serializer for returning assignments of an employee."""

    assignment_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=True)
