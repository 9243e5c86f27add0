"""
LicenseGroup and LicenseGroupMember models.
"""
import uuid

from django.db import models


class LicenseGroup(models.Model):
    """
    Named bundle of licenses.

    Licenses of default groups are assigned to every new employee.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(null=True, blank=True)
    is_default = models.BooleanField(default=False, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "license_groups"
        ordering = ["name"]

    def __str__(self):
        return self.name


class LicenseGroupMember(models.Model):
    """Membership of a license in a group."""

    id = models.BigAutoField(primary_key=True)
    group = models.ForeignKey(LicenseGroup, on_delete=models.CASCADE, related_name="members")
    license = models.ForeignKey(
        "licenses.License", on_delete=models.CASCADE, related_name="group_memberships"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "license_group_members"
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["group", "license"], name="unique_group_license"),
        ]

    def __str__(self):
        return f"{self.group.name}: {self.license.name}"
