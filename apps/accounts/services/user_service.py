"""
apps.accounts.services.user_service
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
User administration: account creation, role assignment, enable/disable and
password changes.

Every operation except :func:`change_password` is restricted to active
system administrators.  Privilege or credential changes rotate the target's
security stamp so their open sessions are dropped.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone as dt_timezone

import structlog
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import transaction
from django.utils.translation import gettext as _
from django.utils.translation import gettext_lazy

from apps.accounts.services.authorization import (
    is_system_administrator,
    require_system_administrator,
    resolve_requester,
)
from apps.accounts.services.identity import identity_provider
from common.exceptions import AccessDeniedError, ConflictError, InternalError, NotFoundError, ValidationError
from common.results import ServiceResult, service_operation

logger = structlog.get_logger(__name__)

#: Lockout end used for administrative disabling ("until re-enabled").
LOCKOUT_FOREVER = datetime(9999, 12, 31, tzinfo=dt_timezone.utc)

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 100

_ADMIN_DENIED = gettext_lazy("Access denied: you are not allowed to do this or your account is disabled.")


@dataclass(frozen=True)
class UserSummary:
    id: int
    email: str
    is_locked_out: bool
    roles: list[str]


def summarize_user(user) -> UserSummary:
    return UserSummary(
        id=user.pk,
        email=user.email,
        is_locked_out=identity_provider.is_locked_out(user),
        roles=identity_provider.get_roles(user),
    )


def _get_target_user(user_id):
    user = identity_provider.find_by_id(user_id)
    if user is None:
        raise NotFoundError(_("User not found."))
    return user


def _validate_new_password(password: str | None, confirm_password: str | None) -> None:
    errors = []
    if not password:
        errors.append(_("The new password is required."))
    elif not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        errors.append(
            _("The new password must be between %(min)d and %(max)d characters.")
            % {"min": PASSWORD_MIN_LENGTH, "max": PASSWORD_MAX_LENGTH}
        )
    if password != confirm_password:
        errors.append(_("Passwords do not match."))
    if errors:
        raise ValidationError(_("Invalid data: %(errors)s") % {"errors": " ".join(errors)})


# ---------------------------------------------------------------------------
# Account lifecycle
# ---------------------------------------------------------------------------

@service_operation
def create_user(*, created_by, email: str, password: str, confirm_password: str) -> ServiceResult[int]:
    """
    Create a login account identified by *email*.

    Steps:

    1. Validate the e-mail format and password confirmation.
    2. Require an active system administrator as *created_by*.
    3. Delegate creation (and password-policy checks) to the identity
       provider.

    Returns:
        ``ServiceResult`` carrying the new user's id.
    """
    logger.info("user_create_requested", email=email, created_by=str(created_by))

    try:
        validate_email(email or "")
    except DjangoValidationError:
        raise ValidationError(_("Invalid data: %(errors)s") % {"errors": _("Invalid e-mail address.")})
    if not password:
        raise ValidationError(_("Invalid data: %(errors)s") % {"errors": _("The password is required.")})
    if password != confirm_password:
        raise ValidationError(_("Invalid data: %(errors)s") % {"errors": _("Passwords do not match.")})

    require_system_administrator(created_by, message=_ADMIN_DENIED)

    with transaction.atomic():
        result, user = identity_provider.create(email=email, password=password)
    if not result.succeeded:
        logger.error("user_create_identity_error", email=email, errors=result.errors)
        raise ValidationError(_("Error creating user: %(errors)s") % {"errors": result.description})

    logger.info("user_created", user_id=str(user.pk), email=email)
    return ServiceResult.ok(user.pk, _("User created successfully."))


@service_operation
def list_users(*, requester_id) -> ServiceResult[list[UserSummary]]:
    """Return every account with its roles and lockout state (admin only)."""
    require_system_administrator(requester_id, message=_("Access denied."))
    users = get_user_model().objects.order_by("email").prefetch_related("groups")
    return ServiceResult.ok([summarize_user(u) for u in users], _("Users loaded successfully."))


# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------

@service_operation
def add_to_role(*, requester_id, user_id, role_name: str) -> ServiceResult[bool]:
    """Grant *role_name* to a user and invalidate their sessions."""
    logger.info("role_add_requested", role=role_name, user_id=str(user_id))

    require_system_administrator(requester_id, message=_ADMIN_DENIED)
    user = _get_target_user(user_id)

    if not identity_provider.role_exists(role_name):
        raise NotFoundError(_("The specified role does not exist."))

    with transaction.atomic():
        result = identity_provider.add_to_role(user, role_name)
        if not result.succeeded:
            logger.error("role_add_failed", role=role_name, user_id=str(user_id), errors=result.errors)
            raise ConflictError(_("Error: %(errors)s") % {"errors": result.description})
        identity_provider.update_security_stamp(user)

    logger.info("role_added", role=role_name, user_id=str(user_id))
    return ServiceResult.ok(True, _("Role added successfully."))


@service_operation
def remove_from_role(*, requester_id, user_id, role_name: str) -> ServiceResult[bool]:
    """Revoke *role_name* from a user and invalidate their sessions."""
    logger.info("role_remove_requested", role=role_name, user_id=str(user_id))

    require_system_administrator(requester_id, message=_ADMIN_DENIED)
    user = _get_target_user(user_id)

    with transaction.atomic():
        result = identity_provider.remove_from_role(user, role_name)
        if not result.succeeded:
            logger.error("role_remove_failed", role=role_name, user_id=str(user_id), errors=result.errors)
            raise NotFoundError(_("Error: %(errors)s") % {"errors": result.description})
        identity_provider.update_security_stamp(user)

    logger.info("role_removed", role=role_name, user_id=str(user_id))
    return ServiceResult.ok(True, _("Role removed successfully."))


# ---------------------------------------------------------------------------
# Enable / disable
# ---------------------------------------------------------------------------

@service_operation
def disable_user(*, requester_id, user_id) -> ServiceResult[bool]:
    """Lock the user out until an administrator re-enables them."""
    logger.info("user_disable_requested", user_id=str(user_id))

    require_system_administrator(requester_id, message=_ADMIN_DENIED)
    user = _get_target_user(user_id)

    with transaction.atomic():
        identity_provider.set_lockout_enabled(user, True)
        result = identity_provider.set_lockout_end_date(user, LOCKOUT_FOREVER)
        if not result.succeeded:
            raise InternalError(_("Error: %(errors)s") % {"errors": result.description})
        identity_provider.update_security_stamp(user)

    logger.info("user_disabled", user_id=str(user_id))
    return ServiceResult.ok(True, _("User disabled successfully."))


@service_operation
def enable_user(*, requester_id, user_id) -> ServiceResult[bool]:
    """Clear the user's lockout."""
    logger.info("user_enable_requested", user_id=str(user_id))

    require_system_administrator(requester_id, message=_ADMIN_DENIED)
    user = _get_target_user(user_id)

    with transaction.atomic():
        result = identity_provider.set_lockout_end_date(user, None)
        if not result.succeeded:
            raise InternalError(_("Error: %(errors)s") % {"errors": result.description})
        identity_provider.update_security_stamp(user)

    logger.info("user_enabled", user_id=str(user_id))
    return ServiceResult.ok(True, _("User enabled successfully."))


@service_operation
def set_user_status(*, requester_id, user_id, is_locked: bool) -> ServiceResult[bool]:
    """Lock or unlock a user in one call; dispatches to disable/enable."""
    if is_locked:
        return disable_user(requester_id=requester_id, user_id=user_id)
    return enable_user(requester_id=requester_id, user_id=user_id)


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------

@service_operation
def change_password(
    *,
    requester_id,
    email: str,
    current_password: str | None,
    password: str,
    confirm_password: str,
) -> ServiceResult[bool]:
    """
    Change the password of the account identified by *email*.

    An administrator may reset anyone's password without the current one;
    any other requester may only change their own, and must supply the
    current password.
    """
    _validate_new_password(password, confirm_password)

    requester = resolve_requester(requester_id)
    user = identity_provider.find_by_email(email)
    if user is None:
        raise NotFoundError(_("User not found."))

    is_admin = is_system_administrator(requester)
    is_self = user.pk == requester.user_id
    if not is_admin and not is_self:
        raise AccessDeniedError(_("Access denied: you can only change your own password."))

    with transaction.atomic():
        if is_admin and not current_password:
            token = identity_provider.generate_password_reset_token(user)
            result = identity_provider.reset_password(user, token, password)
        else:
            result = identity_provider.change_password(user, current_password, password)
        if not result.succeeded:
            raise ValidationError(_("Error changing password: %(errors)s") % {"errors": result.description})
        identity_provider.update_security_stamp(user)

    logger.info("password_changed", user_id=str(user.pk), by_admin=is_admin and not is_self)
    return ServiceResult.ok(True, _("Password changed successfully."))
