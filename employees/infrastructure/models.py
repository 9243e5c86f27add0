"""
Employee model.
"""
import uuid

from django.db import models


class Employee(models.Model):
    """A person licenses can be assigned to."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    department = models.CharField(max_length=255)
    email = models.EmailField(unique=True, null=True, blank=True)
    title = models.CharField(max_length=255, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "employees"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["department"]),
        ]

    def __str__(self):
        return f"{self.name} ({self.department})"
