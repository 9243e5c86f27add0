"""
Serializers for license group endpoints.
"""

from rest_framework import serializers


class GroupRequestSerializer(serializers.Serializer):
    """Serializer for group create and update requests."""

    name = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    is_default = serializers.BooleanField(required=False, default=False)
    license_ids = serializers.ListField(
        child=serializers.UUIDField(), required=False, allow_null=True
    )


class GroupMembersRequestSerializer(serializers.Serializer):
    """Serializer for adding or removing group members."""

    license_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)


class GroupLicenseSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    license_type = serializers.CharField()


class GroupSerializer(serializers.Serializer):
    """Serializer for GroupDTO."""

    id = serializers.UUIDField(source="group.id")
    name = serializers.CharField(source="group.name")
    description = serializers.CharField(source="group.description", allow_null=True)
    is_default = serializers.BooleanField(source="group.is_default")
    licenses = GroupLicenseSerializer(many=True)
    created_at = serializers.DateTimeField(source="group.created_at", allow_null=True)
    updated_at = serializers.DateTimeField(source="group.updated_at", allow_null=True)
