"""
Assignment and AssignmentHistory models.
"""
import uuid

from django.db import models
from django.utils import timezone


class Assignment(models.Model):
    """
    Binding of a license (and, for key-based licenses, one seat) to an employee.

    An assignment is active while ``returned_date`` is null. Returning keeps
    the row for history.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license = models.ForeignKey(
        "licenses.License", on_delete=models.CASCADE, related_name="assignments"
    )
    employee = models.ForeignKey(
        "employees.Employee", on_delete=models.CASCADE, related_name="assignments"
    )
    seat = models.ForeignKey(
        "licenses.LicenseSeat",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assignments",
    )
    assigned_date = models.DateField(default=timezone.localdate)
    returned_date = models.DateField(null=True, blank=True)
    reason = models.CharField(max_length=500, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "assignments"
        ordering = ["-assigned_date", "-created_at"]
        indexes = [
            models.Index(fields=["license", "returned_date"]),
            models.Index(fields=["employee", "returned_date"]),
            models.Index(fields=["seat", "returned_date"]),
        ]

    def __str__(self):
        return f"{self.license_id} -> {self.employee_id}"

    @property
    def is_active(self) -> bool:
        return self.returned_date is None


class AssignmentHistory(models.Model):
    """
    Append-only trail of assign and return actions per employee and license.
    """

    ACTION_CHOICES = [
        ("ASSIGNED", "Assigned"),
        ("RETURNED", "Returned"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    assignment = models.ForeignKey(
        Assignment, on_delete=models.SET_NULL, null=True, blank=True, related_name="history"
    )
    license = models.ForeignKey(
        "licenses.License", on_delete=models.CASCADE, related_name="assignment_history"
    )
    employee = models.ForeignKey(
        "employees.Employee", on_delete=models.CASCADE, related_name="assignment_history"
    )
    action = models.CharField(max_length=20, choices=ACTION_CHOICES)
    reason = models.CharField(max_length=500, null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "assignment_history"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["employee", "created_at"]),
            models.Index(fields=["license", "created_at"]),
        ]

    def __str__(self):
        return f"{self.action} {self.license_id} / {self.employee_id}"
