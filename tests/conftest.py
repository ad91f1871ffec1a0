"""
Shared pytest fixtures: the administrator role, users with different
privileges, two organisations and authenticated API clients.
"""
from __future__ import annotations

import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from rest_framework.test import APIClient

from apps.accounts.roles import system_administrator_role
from apps.organizations.models import Organization

PASSWORD = "s3cret-pass"


def _create_user(email: str, *, admin: bool = False, password: str = PASSWORD):
    user = get_user_model().objects.create_user(username=email, email=email, password=password)
    if admin:
        group, _ = Group.objects.get_or_create(name=system_administrator_role())
        user.groups.add(group)
    return user


@pytest.fixture
def make_user(db):
    """Factory: ``make_user(email, admin=False, password=PASSWORD)``."""
    return _create_user


@pytest.fixture
def user_password() -> str:
    """Password every fixture user is created with."""
    return PASSWORD


@pytest.fixture
def admin_role(db) -> Group:
    group, _ = Group.objects.get_or_create(name=system_administrator_role())
    return group


@pytest.fixture
def admin(admin_role):
    """An active system administrator."""
    return _create_user("admin@docunet.local", admin=True)


@pytest.fixture
def member(db):
    """A plain user; tests add them to organisations as needed."""
    return _create_user("member@docunet.local")


@pytest.fixture
def outsider(db):
    """A plain user who belongs to no organisation."""
    return _create_user("outsider@docunet.local")


@pytest.fixture
def org1(db) -> Organization:
    return Organization.objects.create(name="Org 1")


@pytest.fixture
def org2(db) -> Organization:
    return Organization.objects.create(name="Org 2")


@pytest.fixture
def api_client() -> APIClient:
    """Return an unauthenticated DRF APIClient."""
    return APIClient()


@pytest.fixture
def admin_client(admin) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=admin)
    return client


@pytest.fixture
def member_client(member) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=member)
    return client
