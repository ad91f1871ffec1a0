"""
apps.accounts.services.authorization
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
The single authorization decision reused by every mutating or listing
operation.

The predicates are pure functions over a read-only
:class:`RequesterSnapshot`; only :func:`load_requester` touches the identity
provider and the database.

Rules
-----
- A missing or locked-out requester is denied before anything else.
- Org-scoped device/connection work: system administrator OR member of the
  target organization.
- Organization lifecycle and membership management: system administrator
  only, membership is never sufficient.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field

import structlog
from django.utils.translation import gettext as _

from apps.accounts.roles import system_administrator_role
from apps.accounts.services.identity import identity_provider
from common.exceptions import AccessDeniedError
from common.ids import parse_uuid

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RequesterSnapshot:
    """
    Identity facts about the requester, captured once per operation.

    Attributes:
        user_id: Primary key of the requesting user.
        roles: Role (group) names the user carries.
        is_locked_out: Lockout/disabled flag at capture time.
        organization_ids: Organizations the user is a member of.
    """

    user_id: int
    roles: frozenset[str] = field(default_factory=frozenset)
    is_locked_out: bool = False
    organization_ids: frozenset[uuid.UUID] = field(default_factory=frozenset)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def is_system_administrator(requester: RequesterSnapshot | None) -> bool:
    return requester is not None and system_administrator_role() in requester.roles


def is_active_requester(requester: RequesterSnapshot | None) -> bool:
    return requester is not None and not requester.is_locked_out


def is_org_member(requester: RequesterSnapshot | None, org_id) -> bool:
    target = parse_uuid(org_id)
    return requester is not None and target is not None and target in requester.organization_ids


def can_manage_in_organization(requester: RequesterSnapshot | None, org_id) -> bool:
    """Admin OR member-of(*org_id*); the org-scoped mutation rule."""
    if not is_active_requester(requester):
        return False
    return is_system_administrator(requester) or is_org_member(requester, org_id)


# ---------------------------------------------------------------------------
# Snapshot loading
# ---------------------------------------------------------------------------

def load_requester(requester_id) -> RequesterSnapshot | None:
    """Build a snapshot for *requester_id*, or ``None`` if no such user exists."""
    user = identity_provider.find_by_id(requester_id)
    if user is None:
        return None
    return RequesterSnapshot(
        user_id=user.pk,
        roles=frozenset(identity_provider.get_roles(user)),
        is_locked_out=identity_provider.is_locked_out(user),
        organization_ids=frozenset(user.organizations.values_list("id", flat=True)),
    )


def resolve_requester(requester_id, *, message: str | None = None) -> RequesterSnapshot:
    """
    Return the active requester's snapshot.

    Raises:
        AccessDeniedError: If the user does not exist or is locked out.
    """
    requester = load_requester(requester_id)
    if not is_active_requester(requester):
        logger.warning("requester_rejected", requester_id=str(requester_id), found=requester is not None)
        raise AccessDeniedError(message or _("Invalid or inactive requester."))
    return requester


def require_system_administrator(requester_id, *, message: str | None = None) -> RequesterSnapshot:
    """
    Return the requester's snapshot if they are an active system administrator.

    Raises:
        AccessDeniedError: Otherwise, with *message* when given.
    """
    denied = message or _("Access denied: you are not allowed to perform this operation.")
    requester = resolve_requester(requester_id, message=denied)
    if not is_system_administrator(requester):
        raise AccessDeniedError(denied)
    return requester


def require_organization_access(requester: RequesterSnapshot, org_id, *, message: str) -> None:
    """
    Enforce admin-or-member for *org_id*.

    Raises:
        AccessDeniedError: With *message* when the rule does not hold.
    """
    if not can_manage_in_organization(requester, org_id):
        raise AccessDeniedError(message)
