"""
Serializers for the audit history endpoint.
"""

from rest_framework import serializers


class HistoryQuerySerializer(serializers.Serializer):
    """Query string of the history search."""

    entity_type = serializers.CharField(required=False, allow_blank=True)
    action = serializers.CharField(required=False, allow_blank=True)
    entity_id = serializers.CharField(required=False, allow_blank=True)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    q = serializers.CharField(required=False, allow_blank=True)
    page = serializers.IntegerField(required=False, min_value=1, default=1)


class AuditEntrySerializer(serializers.Serializer):
    """Serializer for the AuditEntry entity."""

    id = serializers.UUIDField()
    entity_type = serializers.CharField(source="entity_type.value")
    entity_id = serializers.CharField()
    action = serializers.CharField(source="action.value")
    actor = serializers.CharField(allow_null=True)
    details = serializers.DictField()
    created_at = serializers.DateTimeField(allow_null=True)


class AuditPageSerializer(serializers.Serializer):
    """Serializer for AuditPage."""

    entries = AuditEntrySerializer(many=True)
    total = serializers.IntegerField()
    page = serializers.IntegerField()
    page_size = serializers.IntegerField()
    total_pages = serializers.IntegerField()
