"""
apps.organizations.services.org_service
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
All business logic for the Organizations application.

Views must call only these functions.  No business logic lives in views or
serializers.

Responsibilities
----------------
- Organization lifecycle: create, rename, activate/deactivate.  System
  administrators only; membership is never sufficient.
- Membership management: add/remove a user.  Also administrators only, which
  is stricter than the admin-or-member rule for devices and connections.
- Listings: every organization (admin) and the organizations available to a
  requester (admin → all, member → their own), the latter feeding
  :class:`~apps.organizations.state.OrganizationState`.

Every public operation returns a :class:`~common.results.ServiceResult`.
"""
from __future__ import annotations

from dataclasses import dataclass

import structlog
from django.db import IntegrityError, transaction
from django.db.models import Count
from django.utils.translation import gettext as _

from apps.accounts.services.authorization import (
    is_system_administrator,
    require_system_administrator,
    resolve_requester,
)
from apps.accounts.services.identity import identity_provider
from apps.accounts.services.user_service import UserSummary, summarize_user
from apps.organizations.models import Organization
from common.exceptions import AccessDeniedError, ConflictError, NotFoundError
from common.ids import parse_uuid
from common.results import ServiceResult, service_operation
from common.validation import check_length, ensure_valid

logger = structlog.get_logger(__name__)

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100


@dataclass(frozen=True)
class OrganizationSummary:
    id: object
    name: str
    is_active: bool
    member_count: int


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def get_organization(org_id) -> Organization:
    """
    Fetch an :class:`Organization` by id.

    Raises:
        NotFoundError: If *org_id* is malformed or no organisation matches.
    """
    pk = parse_uuid(org_id)
    org = Organization.objects.filter(pk=pk).first() if pk else None
    if org is None:
        raise NotFoundError(_("Organization not found."))
    return org


def _name_taken(name: str, *, exclude_id=None) -> bool:
    queryset = Organization.objects.filter(name__iexact=name)
    if exclude_id is not None:
        queryset = queryset.exclude(pk=exclude_id)
    return queryset.exists()


def _validate_name(name: str | None) -> None:
    errors: list[str] = []
    check_length(
        errors,
        name,
        label=_("Name"),
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
        required=True,
    )
    ensure_valid(errors)


def _summaries(queryset) -> list[OrganizationSummary]:
    rows = queryset.annotate(member_count=Count("members")).order_by("name")
    return [
        OrganizationSummary(id=o.id, name=o.name, is_active=o.is_active, member_count=o.member_count)
        for o in rows
    ]


def _require_active(org: Organization, message: str) -> None:
    if not org.is_active:
        logger.warning("organization_inactive", org_id=str(org.id))
        raise AccessDeniedError(message)


# ---------------------------------------------------------------------------
# Organization lifecycle
# ---------------------------------------------------------------------------

@service_operation
def create_organization(*, created_by, name: str) -> ServiceResult:
    """
    Create a new, active :class:`Organization`.

    Steps:

    1. Validate the name length (3–100).
    2. Require an active system administrator.
    3. Reject a name already used by any organisation, ignoring case.
    4. Persist; the ``Lower(name)`` unique index backs the pre-check.

    Returns:
        ``ServiceResult`` carrying the new organisation id.
    """
    logger.info("organization_create_requested", name=name, created_by=str(created_by))
    _validate_name(name)

    require_system_administrator(
        created_by,
        message=_("Access denied: you are not allowed to create organizations."),
    )

    if _name_taken(name):
        raise ConflictError(_("An organization with this name already exists."))

    try:
        with transaction.atomic():
            org = Organization.objects.create(name=name)
    except IntegrityError as exc:
        raise ConflictError(_("An organization with this name already exists.")) from exc

    logger.info("organization_created", org_id=str(org.id), name=org.name)
    return ServiceResult.ok(org.id, _("Organization created successfully."))


@service_operation
def rename_organization(*, requester_id, org_id, new_name: str) -> ServiceResult:
    """
    Rename an active organisation.

    An inactive organisation answers ``access_denied`` rather than
    ``not_found``.  Renaming to the organisation's own current name, in any
    casing, is not a conflict.
    """
    logger.info("organization_rename_requested", org_id=str(org_id), new_name=new_name)
    _validate_name(new_name)

    require_system_administrator(
        requester_id,
        message=_("Access denied: you are not allowed to manage organizations."),
    )

    org = get_organization(org_id)
    _require_active(org, _("Access denied: a deactivated organization cannot be renamed."))

    if _name_taken(new_name, exclude_id=org.pk):
        raise ConflictError(_("Another organization with this name already exists."))

    org.name = new_name
    try:
        with transaction.atomic():
            org.save(update_fields=["name", "updated_at"])
    except IntegrityError as exc:
        raise ConflictError(_("Another organization with this name already exists.")) from exc

    logger.info("organization_renamed", org_id=str(org.id), new_name=new_name)
    return ServiceResult.ok(True, _("Organization renamed successfully."))


@service_operation
def manage_organization_status(*, requester_id, org_id, is_enabled: bool) -> ServiceResult:
    """Activate or deactivate an organisation.  Members and devices are left untouched."""
    logger.info("organization_status_requested", org_id=str(org_id), is_enabled=is_enabled)

    require_system_administrator(
        requester_id,
        message=_("You are not allowed to do this or your account is disabled."),
    )

    org = get_organization(org_id)
    org.is_active = bool(is_enabled)
    with transaction.atomic():
        org.save(update_fields=["is_active", "updated_at"])

    if org.is_active:
        message = _("Organization enabled successfully.")
    else:
        message = _("Organization disabled successfully.")
    logger.info("organization_status_changed", org_id=str(org.id), is_active=org.is_active)
    return ServiceResult.ok(True, message)


# ---------------------------------------------------------------------------
# Membership
# ---------------------------------------------------------------------------

@service_operation
def add_user_to_organization(*, requester_id, org_id, user_id) -> ServiceResult:
    """Add an active user to an active organisation (admin only)."""
    logger.info("organization_member_add_requested", org_id=str(org_id), user_id=str(user_id))

    require_system_administrator(
        requester_id,
        message=_("Access denied: you are not allowed to do this or your account is disabled."),
    )

    org = get_organization(org_id)
    _require_active(org, _("Access denied: the organization is disabled."))

    user = identity_provider.find_by_id(user_id)
    if user is None:
        raise NotFoundError(_("User not found."))
    if identity_provider.is_locked_out(user):
        raise AccessDeniedError(_("Access denied: a disabled user cannot be added."))

    if org.members.filter(pk=user.pk).exists():
        raise ConflictError(_("The user is already a member of this organization."))

    with transaction.atomic():
        org.members.add(user)

    logger.info("organization_member_added", org_id=str(org.id), user_id=str(user.pk))
    return ServiceResult.ok(True, _("User added successfully."))


@service_operation
def remove_user_from_organization(*, requester_id, org_id, user_id) -> ServiceResult:
    """Remove a member from an active organisation (admin only)."""
    logger.info("organization_member_remove_requested", org_id=str(org_id), user_id=str(user_id))

    require_system_administrator(
        requester_id,
        message=_("Access denied: you are not allowed to do this or your account is disabled."),
    )

    org = get_organization(org_id)
    _require_active(org, _("Access denied: the organization is disabled."))

    user = identity_provider.find_by_id(user_id)
    if user is None or not org.members.filter(pk=user.pk).exists():
        raise NotFoundError(_("The user is not a member of this organization."))

    with transaction.atomic():
        org.members.remove(user)

    logger.info("organization_member_removed", org_id=str(org.id), user_id=str(user.pk))
    return ServiceResult.ok(True, _("User removed successfully."))


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------

@service_operation
def get_all_organizations(*, requester_id) -> ServiceResult:
    """Every organisation with its member count (admin only)."""
    require_system_administrator(requester_id, message=_("Access denied."))
    return ServiceResult.ok(
        _summaries(Organization.objects.all()),
        _("Organizations loaded successfully."),
    )


@service_operation
def get_organization_members(*, requester_id, org_id) -> ServiceResult:
    """Members of one organisation with their roles and lockout state (admin only)."""
    require_system_administrator(requester_id, message=_("Access denied."))
    org = get_organization(org_id)
    members: list[UserSummary] = [
        summarize_user(user) for user in org.members.order_by("email").prefetch_related("groups")
    ]
    return ServiceResult.ok(members, _("Members loaded successfully."))


@service_operation
def get_available_organizations(*, requester_id) -> ServiceResult:
    """
    Organisations the requester may pick as "current".

    Administrators see every organisation; anyone else sees only those they
    are a member of.  Inactive organisations are included and flagged.
    """
    requester = resolve_requester(requester_id, message=_("Access denied or inactive account."))

    queryset = Organization.objects.all()
    if not is_system_administrator(requester):
        queryset = queryset.filter(pk__in=requester.organization_ids)

    return ServiceResult.ok(_summaries(queryset), _("Organizations loaded successfully."))
