"""
apps.accounts.services package.
"""
from .authorization import (  # noqa: F401
    RequesterSnapshot,
    can_manage_in_organization,
    is_active_requester,
    is_org_member,
    is_system_administrator,
    load_requester,
    require_organization_access,
    require_system_administrator,
    resolve_requester,
)
from .identity import IdentityProvider, IdentityResult, identity_provider  # noqa: F401
