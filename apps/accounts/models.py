"""
apps.accounts.models
~~~~~~~~~~~~~~~~~~~~
Per-user identity state that ``django.contrib.auth`` does not track.
"""
import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone


class IdentityState(models.Model):
    """
    Lockout and session-invalidation facts for one user.

    Rows are created lazily the first time a user's lockout or security
    stamp changes; a user without a row is neither locked out nor has a
    stamp to compare against.

    Fields
    ------
    lockout_enabled
        When ``False`` the ``lockout_end`` date is ignored.
    lockout_end
        The user is locked out until this moment.  ``None`` clears the lock.
    security_stamp
        Rotated after any privilege or credential change; sessions holding an
        older stamp are considered stale.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="identity_state",
    )
    lockout_enabled = models.BooleanField(default=True)
    lockout_end = models.DateTimeField(null=True, blank=True)
    security_stamp = models.UUIDField(default=uuid.uuid4)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Identity State"
        verbose_name_plural = "Identity States"

    def is_locked(self, now=None) -> bool:
        now = now or timezone.now()
        return bool(self.lockout_enabled and self.lockout_end and self.lockout_end > now)

    def __str__(self) -> str:
        return f"identity state for user #{self.user_id}"
