"""
tests.test_user_service
~~~~~~~~~~~~~~~~~~~~~~~
User administration: creation, roles, lockout and password changes.
"""
from __future__ import annotations

import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.contrib.sessions.backends.db import SessionStore
from django.contrib.sessions.models import Session

from apps.accounts.models import IdentityState
from apps.accounts.roles import system_administrator_role
from apps.accounts.services import identity_provider
from apps.accounts.services import user_service


def stamp_of(user):
    state = IdentityState.objects.filter(user=user).first()
    return state.security_stamp if state else None


@pytest.mark.django_db
class TestCreateUser:

    def test_admin_creates_user(self, admin):
        result = user_service.create_user(
            created_by=admin.pk, email="new@docunet.local", password="abcdef", confirm_password="abcdef",
        )
        assert result.success
        user = get_user_model().objects.get(pk=result.data)
        assert user.email == "new@docunet.local"
        assert user.check_password("abcdef")

    def test_non_admin_is_denied(self, member):
        result = user_service.create_user(
            created_by=member.pk, email="new@docunet.local", password="abcdef", confirm_password="abcdef",
        )
        assert result.code == "access_denied"
        assert not get_user_model().objects.filter(email="new@docunet.local").exists()

    def test_password_mismatch(self, admin):
        result = user_service.create_user(
            created_by=admin.pk, email="new@docunet.local", password="abcdef", confirm_password="abcdeg",
        )
        assert result.code == "validation_error"

    def test_invalid_email(self, admin):
        result = user_service.create_user(
            created_by=admin.pk, email="not-an-email", password="abcdef", confirm_password="abcdef",
        )
        assert result.code == "validation_error"

    def test_duplicate_email_reports_identity_error(self, admin, member):
        result = user_service.create_user(
            created_by=admin.pk, email="MEMBER@docunet.local", password="abcdef", confirm_password="abcdef",
        )
        assert not result.success
        assert "already taken" in result.message

    def test_password_policy_is_enforced(self, admin):
        result = user_service.create_user(
            created_by=admin.pk, email="new@docunet.local", password="abc", confirm_password="abc",
        )
        assert result.code == "validation_error"


@pytest.mark.django_db
class TestSecurityStamp:

    def test_rotation_drops_only_the_users_sessions(self, member, outsider):
        for user in (member, member, outsider):
            store = SessionStore()
            store["_auth_user_id"] = str(user.pk)
            store.create()

        result = identity_provider.update_security_stamp(member)

        assert result.succeeded
        remaining = [s.get_decoded()["_auth_user_id"] for s in Session.objects.all()]
        assert remaining == [str(outsider.pk)]


@pytest.mark.django_db
class TestRoles:

    def test_add_role_rotates_stamp(self, admin, member):
        identity_provider.update_security_stamp(member)
        before = stamp_of(member)

        result = user_service.add_to_role(
            requester_id=admin.pk, user_id=member.pk, role_name=system_administrator_role(),
        )
        assert result.success
        assert identity_provider.is_in_role(member, system_administrator_role())
        assert stamp_of(member) != before

    def test_remove_role(self, admin, make_user):
        other = make_user("other-admin@docunet.local", admin=True)
        result = user_service.remove_from_role(
            requester_id=admin.pk, user_id=other.pk, role_name=system_administrator_role(),
        )
        assert result.success
        assert identity_provider.get_roles(other) == []
        assert stamp_of(other) is not None

    def test_missing_role_is_not_found(self, admin, member):
        result = user_service.add_to_role(requester_id=admin.pk, user_id=member.pk, role_name="Auditor")
        assert result.code == "not_found"

    def test_adding_existing_role_conflicts(self, admin, member, admin_role):
        member.groups.add(admin_role)
        result = user_service.add_to_role(
            requester_id=admin.pk, user_id=member.pk, role_name=admin_role.name,
        )
        assert result.code == "conflict"

    def test_removing_absent_role_is_not_found(self, admin, member):
        Group.objects.create(name="Auditor")
        result = user_service.remove_from_role(requester_id=admin.pk, user_id=member.pk, role_name="Auditor")
        assert result.code == "not_found"

    def test_non_admin_cannot_grant(self, member, outsider, admin_role):
        result = user_service.add_to_role(
            requester_id=member.pk, user_id=outsider.pk, role_name=admin_role.name,
        )
        assert result.code == "access_denied"

    def test_unknown_target_user(self, admin):
        result = user_service.add_to_role(
            requester_id=admin.pk, user_id=555555, role_name=system_administrator_role(),
        )
        assert result.code == "not_found"


@pytest.mark.django_db
class TestLockout:

    def test_disable_then_enable(self, admin, member):
        assert user_service.disable_user(requester_id=admin.pk, user_id=member.pk).success
        assert identity_provider.is_locked_out(member)

        assert user_service.enable_user(requester_id=admin.pk, user_id=member.pk).success
        assert not identity_provider.is_locked_out(member)

    def test_set_user_status_dispatches(self, admin, member):
        locked = user_service.set_user_status(requester_id=admin.pk, user_id=member.pk, is_locked=True)
        assert locked.success
        assert "disabled" in locked.message
        unlocked = user_service.set_user_status(requester_id=admin.pk, user_id=member.pk, is_locked=False)
        assert "enabled" in unlocked.message

    def test_disabled_admin_loses_privileges(self, admin, make_user):
        other = make_user("other-admin@docunet.local", admin=True)
        user_service.disable_user(requester_id=admin.pk, user_id=other.pk)
        result = user_service.list_users(requester_id=other.pk)
        assert result.code == "access_denied"

    def test_listing_reports_lockout_and_roles(self, admin, member):
        user_service.disable_user(requester_id=admin.pk, user_id=member.pk)
        users = {u.email: u for u in user_service.list_users(requester_id=admin.pk).data}
        assert users["member@docunet.local"].is_locked_out is True
        assert users["admin@docunet.local"].roles == [system_administrator_role()]


@pytest.mark.django_db
class TestChangePassword:

    def test_user_changes_own_password(self, member, user_password):
        result = user_service.change_password(
            requester_id=member.pk, email=member.email, current_password=user_password,
            password="brand-new", confirm_password="brand-new",
        )
        assert result.success
        member.refresh_from_db()
        assert member.check_password("brand-new")

    def test_wrong_current_password(self, member):
        result = user_service.change_password(
            requester_id=member.pk, email=member.email, current_password="guess",
            password="brand-new", confirm_password="brand-new",
        )
        assert result.code == "validation_error"

    def test_admin_resets_without_current_password(self, admin, member):
        result = user_service.change_password(
            requester_id=admin.pk, email=member.email, current_password=None,
            password="reset-123", confirm_password="reset-123",
        )
        assert result.success
        member.refresh_from_db()
        assert member.check_password("reset-123")

    def test_user_cannot_change_someone_else(self, member, outsider, user_password):
        result = user_service.change_password(
            requester_id=member.pk, email=outsider.email, current_password=user_password,
            password="brand-new", confirm_password="brand-new",
        )
        assert result.code == "access_denied"

    def test_confirmation_must_match(self, member, user_password):
        result = user_service.change_password(
            requester_id=member.pk, email=member.email, current_password=user_password,
            password="brand-new", confirm_password="brand-old",
        )
        assert result.code == "validation_error"
