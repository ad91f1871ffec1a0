"""
apps.organizations.services package.
"""
from .org_service import (  # noqa: F401
    OrganizationSummary,
    add_user_to_organization,
    create_organization,
    get_all_organizations,
    get_available_organizations,
    get_organization,
    get_organization_members,
    manage_organization_status,
    remove_user_from_organization,
    rename_organization,
)
