"""
apps.accounts.roles
~~~~~~~~~~~~~~~~~~~
Role names understood by the authorization layer.  Roles are Django
``auth.Group`` rows.
"""
from django.conf import settings

#: Role granting unrestricted cross-organization permission.
SYSTEM_ADMINISTRATOR = "SystemAdministrator"


def system_administrator_role() -> str:
    """Return the configured administrator role name."""
    return getattr(settings, "INVENTORY_SYSTEM_ADMIN_ROLE", SYSTEM_ADMINISTRATOR)
