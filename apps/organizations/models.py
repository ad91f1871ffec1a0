"""
apps.organizations.models
~~~~~~~~~~~~~~~~~~~~~~~~~
Organization – tenant entity owning devices and connections and gating
membership-based permissions.
"""
import uuid

from django.conf import settings
from django.db import models
from django.db.models.functions import Lower


class Organization(models.Model):
    """
    A tenant organisation.  Members may manage the devices and connections it
    owns; system administrators may manage every organisation.

    Fields
    ------
    id
        Random UUID primary key.
    name
        Human-readable name (3–100 chars), unique across all organisations
        ignoring case (``"Acme"`` and ``"ACME"`` collide).
    is_active
        Deactivated organisations keep their members and devices but block
        new devices, connections, renames and membership changes.
    members
        Users belonging to the organisation.
    created_at / updated_at
        Automatic timestamps.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    is_active = models.BooleanField(default=True)
    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name="organizations",
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name = "Organization"
        verbose_name_plural = "Organizations"
        constraints = [
            models.UniqueConstraint(Lower("name"), name="organization_name_ci_unique"),
        ]

    def __str__(self) -> str:
        return self.name if self.is_active else f"{self.name} (inactive)"
