"""
apps.accounts.services.identity
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Identity provider adapter over ``django.contrib.auth``.

The business-rule services never touch ``User``, ``Group`` or the session
store directly; they go through :data:`identity_provider`, which answers
"who is this user, which roles do they carry, are they locked out" and
performs the few identity mutations user administration needs.

Roles are ``auth.Group`` rows.  Lockout and the security stamp live in
:class:`~apps.accounts.models.IdentityState`.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

import structlog
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AbstractBaseUser, Group
from django.contrib.auth.password_validation import validate_password
from django.contrib.auth.tokens import default_token_generator
from django.contrib.sessions.models import Session
from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils import timezone
from django.utils.translation import gettext as _

from apps.accounts.models import IdentityState
from common.ids import parse_int

logger = structlog.get_logger(__name__)


@dataclass
class IdentityResult:
    """
    Outcome of an identity mutation.

    Attributes:
        succeeded: ``True`` iff the mutation was applied.
        errors: Human-readable reasons when it was not.
    """

    succeeded: bool
    errors: list[str] = field(default_factory=list)

    @classmethod
    def success(cls) -> "IdentityResult":
        return cls(succeeded=True)

    @classmethod
    def failed(cls, *errors: str) -> "IdentityResult":
        return cls(succeeded=False, errors=[str(e) for e in errors])

    @property
    def description(self) -> str:
        return " ".join(self.errors)


class IdentityProvider:
    """Stateless facade; one shared instance is exported as :data:`identity_provider`."""

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find_by_id(self, user_id) -> AbstractBaseUser | None:
        pk = parse_int(user_id)
        if pk is None:
            return None
        return get_user_model().objects.filter(pk=pk).first()

    def find_by_email(self, email: str | None) -> AbstractBaseUser | None:
        if not email:
            return None
        return get_user_model().objects.filter(email__iexact=email).first()

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    def get_roles(self, user) -> list[str]:
        return list(user.groups.order_by("name").values_list("name", flat=True))

    def is_in_role(self, user, role_name: str) -> bool:
        return user.groups.filter(name=role_name).exists()

    def role_exists(self, role_name: str) -> bool:
        return Group.objects.filter(name=role_name).exists()

    def ensure_role(self, role_name: str) -> Group:
        group, created = Group.objects.get_or_create(name=role_name)
        if created:
            logger.info("role_created", role=role_name)
        return group

    def add_to_role(self, user, role_name: str) -> IdentityResult:
        group = Group.objects.filter(name=role_name).first()
        if group is None:
            return IdentityResult.failed(_("Role '%(role)s' does not exist.") % {"role": role_name})
        if user.groups.filter(pk=group.pk).exists():
            return IdentityResult.failed(_("User is already in role '%(role)s'.") % {"role": role_name})
        user.groups.add(group)
        return IdentityResult.success()

    def remove_from_role(self, user, role_name: str) -> IdentityResult:
        group = user.groups.filter(name=role_name).first()
        if group is None:
            return IdentityResult.failed(_("User is not in role '%(role)s'.") % {"role": role_name})
        user.groups.remove(group)
        return IdentityResult.success()

    # ------------------------------------------------------------------
    # Lockout
    # ------------------------------------------------------------------

    def _state(self, user) -> IdentityState:
        state, _created = IdentityState.objects.get_or_create(user=user)
        return state

    def is_locked_out(self, user) -> bool:
        if not user.is_active:
            return True
        state = IdentityState.objects.filter(user=user).first()
        return state is not None and state.is_locked()

    def set_lockout_enabled(self, user, enabled: bool) -> IdentityResult:
        state = self._state(user)
        state.lockout_enabled = enabled
        state.save(update_fields=["lockout_enabled", "updated_at"])
        return IdentityResult.success()

    def set_lockout_end_date(self, user, lockout_end: datetime | None) -> IdentityResult:
        state = self._state(user)
        if lockout_end is not None and not state.lockout_enabled:
            return IdentityResult.failed(_("Lockout is not enabled for this user."))
        state.lockout_end = lockout_end
        state.save(update_fields=["lockout_end", "updated_at"])
        return IdentityResult.success()

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    def create(self, *, email: str, password: str) -> tuple[IdentityResult, AbstractBaseUser | None]:
        user_model = get_user_model()
        if user_model.objects.filter(username__iexact=email).exists():
            return IdentityResult.failed(_("Email '%(email)s' is already taken.") % {"email": email}), None

        user = user_model(username=email, email=email)
        try:
            validate_password(password, user)
        except DjangoValidationError as exc:
            return IdentityResult.failed(*exc.messages), None

        user.set_password(password)
        user.save()
        return IdentityResult.success(), user

    def check_password(self, user, password: str | None) -> bool:
        return bool(password) and user.check_password(password)

    def change_password(self, user, current_password: str | None, new_password: str) -> IdentityResult:
        if not self.check_password(user, current_password):
            return IdentityResult.failed(_("Incorrect password."))
        return self._set_password(user, new_password)

    def generate_password_reset_token(self, user) -> str:
        return default_token_generator.make_token(user)

    def reset_password(self, user, token: str, new_password: str) -> IdentityResult:
        if not default_token_generator.check_token(user, token):
            return IdentityResult.failed(_("Invalid token."))
        return self._set_password(user, new_password)

    def _set_password(self, user, new_password: str) -> IdentityResult:
        try:
            validate_password(new_password, user)
        except DjangoValidationError as exc:
            return IdentityResult.failed(*exc.messages)
        user.set_password(new_password)
        user.save(update_fields=["password"])
        return IdentityResult.success()

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def update_security_stamp(self, user) -> IdentityResult:
        """
        Rotate the user's security stamp and drop their live sessions.

        Database sessions are not indexed by user, so every unexpired session
        is decoded to find the user's own.
        """
        state = self._state(user)
        state.security_stamp = uuid.uuid4()
        state.save(update_fields=["security_stamp", "updated_at"])

        user_key = str(user.pk)
        stale = [
            session.session_key
            for session in Session.objects.filter(expire_date__gt=timezone.now())
            if session.get_decoded().get("_auth_user_id") == user_key
        ]
        if stale:
            Session.objects.filter(session_key__in=stale).delete()
        logger.info("security_stamp_updated", user_id=user_key, sessions_dropped=len(stale))
        return IdentityResult.success()


identity_provider = IdentityProvider()
