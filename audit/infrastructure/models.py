"""
AuditLog model.
"""
import uuid

from django.db import models
from django.utils import timezone


class AuditLog(models.Model):
    """
    Immutable audit trail of inventory, account and session changes.
    """

    ENTITY_TYPE_CHOICES = [
        ("LICENSE", "License"),
        ("EMPLOYEE", "Employee"),
        ("ASSIGNMENT", "Assignment"),
        ("SEAT", "Seat"),
        ("GROUP", "Group"),
        ("USER", "User"),
        ("AUTH", "Auth"),
    ]

    ACTION_CHOICES = [
        ("CREATED", "Created"),
        ("UPDATED", "Updated"),
        ("DELETED", "Deleted"),
        ("ASSIGNED", "Assigned"),
        ("UNASSIGNED", "Unassigned"),
        ("REVOKED", "Revoked"),
        ("IMPORTED", "Imported"),
        ("LOGIN", "Login"),
        ("LOGOUT", "Logout"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    entity_type = models.CharField(max_length=20, choices=ENTITY_TYPE_CHOICES)
    entity_id = models.CharField(max_length=64)
    action = models.CharField(max_length=20, choices=ACTION_CHOICES)
    actor = models.CharField(max_length=150, null=True, blank=True, help_text="Who performed the action")
    details = models.JSONField(default=dict, blank=True, help_text="Summary and field changes")
    search_text = models.TextField(blank=True, default="", help_text="Details as JSON text, unicode kept")
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "audit_logs"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["entity_type", "entity_id"]),
            models.Index(fields=["action"]),
        ]

    def __str__(self):
        return f"{self.action} - {self.entity_type} {self.entity_id}"
