"""
apps.accounts.services.bootstrap
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
First-setup of a fresh installation.

When no user exists yet, make sure the administrator role exists, create the
default administrator from settings and grant them the role.  An
installation that already has users is left untouched.
"""
from __future__ import annotations

from dataclasses import dataclass

import structlog
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction

from apps.accounts.roles import system_administrator_role
from apps.accounts.services.identity import identity_provider

logger = structlog.get_logger(__name__)


class BootstrapError(Exception):
    """The default administrator could not be created."""


@dataclass(frozen=True)
class BootstrapOutcome:
    performed: bool
    admin_email: str | None = None
    role_created: bool = False


def run_first_setup(*, email: str | None = None, password: str | None = None) -> BootstrapOutcome:
    """
    Perform first setup if the user table is empty.

    Raises:
        BootstrapError: If the identity provider rejects the default account.
    """
    user_model = get_user_model()
    if user_model.objects.exists():
        logger.info("first_setup_skipped", reason="users_exist")
        return BootstrapOutcome(performed=False)

    email = email or settings.INVENTORY_DEFAULT_ADMIN_EMAIL
    password = password or settings.INVENTORY_DEFAULT_ADMIN_PASSWORD
    role_name = system_administrator_role()

    with transaction.atomic():
        role_created = not identity_provider.role_exists(role_name)
        identity_provider.ensure_role(role_name)

        admin = identity_provider.find_by_email(email)
        if admin is None:
            result, admin = identity_provider.create(email=email, password=password)
            if not result.succeeded:
                logger.error("first_setup_admin_rejected", email=email, errors=result.errors)
                raise BootstrapError(f"Could not create the default administrator: {result.description}")

        if not identity_provider.is_in_role(admin, role_name):
            identity_provider.add_to_role(admin, role_name)
            identity_provider.update_security_stamp(admin)

    logger.info("first_setup_completed", email=email, role=role_name, role_created=role_created)
    return BootstrapOutcome(performed=True, admin_email=email, role_created=role_created)
