"""
tests.test_org_service
~~~~~~~~~~~~~~~~~~~~~~
Organization lifecycle, membership and listings.
"""
from __future__ import annotations

import uuid

import pytest

from apps.inventory.models import Device, DeviceType
from apps.organizations.models import Organization
from apps.organizations.services import org_service
from apps.accounts.services import user_service


@pytest.mark.django_db
class TestCreateOrganization:

    def test_admin_creates_active_organization(self, admin):
        result = org_service.create_organization(created_by=admin.pk, name="Acme Networks")
        assert result.success
        org = Organization.objects.get(pk=result.data)
        assert org.name == "Acme Networks"
        assert org.is_active

    def test_duplicate_name_ignoring_case_conflicts(self, admin, org1):
        result = org_service.create_organization(created_by=admin.pk, name="ORG 1")
        assert not result.success
        assert result.code == "conflict"
        assert "already exists" in result.message
        assert Organization.objects.count() == 1

    @pytest.mark.parametrize("name", ["", "ab", "x" * 101])
    def test_name_length_is_validated(self, admin, name):
        result = org_service.create_organization(created_by=admin.pk, name=name)
        assert result.code == "validation_error"

    def test_unique_index_reports_conflict_when_precheck_misses(self, admin, org1, monkeypatch):
        monkeypatch.setattr(org_service, "_name_taken", lambda *args, **kwargs: False)
        result = org_service.create_organization(created_by=admin.pk, name="ORG 1")
        assert result.code == "conflict"
        assert Organization.objects.count() == 1

    def test_member_cannot_create(self, member, org1):
        org1.members.add(member)
        result = org_service.create_organization(created_by=member.pk, name="Member Org")
        assert result.code == "access_denied"
        assert not Organization.objects.filter(name="Member Org").exists()


@pytest.mark.django_db
class TestRenameOrganization:

    def test_rename(self, admin, org1):
        result = org_service.rename_organization(requester_id=admin.pk, org_id=org1.id, new_name="Renamed")
        assert result.success
        org1.refresh_from_db()
        assert org1.name == "Renamed"

    def test_rename_to_own_name_is_not_a_conflict(self, admin, org1):
        assert org_service.rename_organization(requester_id=admin.pk, org_id=org1.id, new_name="Org 1").success
        assert org_service.rename_organization(requester_id=admin.pk, org_id=org1.id, new_name="ORG 1").success

    def test_rename_to_other_org_name_conflicts(self, admin, org1, org2):
        result = org_service.rename_organization(requester_id=admin.pk, org_id=org1.id, new_name="org 2")
        assert result.code == "conflict"

    def test_inactive_organization_is_access_denied_not_not_found(self, admin, org1):
        org1.is_active = False
        org1.save()
        result = org_service.rename_organization(requester_id=admin.pk, org_id=org1.id, new_name="Whatever")
        assert result.code == "access_denied"

    def test_unique_index_reports_conflict_on_rename(self, admin, org1, org2, monkeypatch):
        monkeypatch.setattr(org_service, "_name_taken", lambda *args, **kwargs: False)
        result = org_service.rename_organization(requester_id=admin.pk, org_id=org1.id, new_name="org 2")
        assert result.code == "conflict"
        org1.refresh_from_db()
        assert org1.name == "Org 1"

    def test_unknown_organization(self, admin):
        result = org_service.rename_organization(requester_id=admin.pk, org_id=uuid.uuid4(), new_name="Whatever")
        assert result.code == "not_found"


@pytest.mark.django_db
class TestOrganizationStatus:

    def test_deactivation_keeps_devices_and_blocks_new_ones(self, admin, org1):
        from apps.inventory.services import create_device, list_devices

        Device.objects.create(name="Core", type=DeviceType.ROUTER, organization=org1)
        result = org_service.manage_organization_status(requester_id=admin.pk, org_id=org1.id, is_enabled=False)
        assert result.success
        assert "disabled" in result.message

        blocked = create_device(requester_id=admin.pk, name="Edge", type=DeviceType.SWITCH, organization_id=org1.id)
        assert blocked.code == "access_denied"

        listed = list_devices(requester_id=admin.pk)
        assert [d.name for d in listed.data] == ["Core"]

    def test_reenable(self, admin, org1):
        org1.is_active = False
        org1.save()
        result = org_service.manage_organization_status(requester_id=admin.pk, org_id=org1.id, is_enabled=True)
        assert result.success
        org1.refresh_from_db()
        assert org1.is_active


@pytest.mark.django_db
class TestMembership:

    def test_add_and_remove_member(self, admin, member, org1):
        assert org_service.add_user_to_organization(requester_id=admin.pk, org_id=org1.id, user_id=member.pk).success
        assert org1.members.filter(pk=member.pk).exists()

        assert org_service.remove_user_from_organization(
            requester_id=admin.pk, org_id=org1.id, user_id=member.pk
        ).success
        assert not org1.members.filter(pk=member.pk).exists()

    def test_adding_twice_conflicts(self, admin, member, org1):
        org1.members.add(member)
        result = org_service.add_user_to_organization(requester_id=admin.pk, org_id=org1.id, user_id=member.pk)
        assert result.code == "conflict"

    def test_removing_non_member_is_not_found(self, admin, member, org1):
        result = org_service.remove_user_from_organization(requester_id=admin.pk, org_id=org1.id, user_id=member.pk)
        assert result.code == "not_found"

    def test_locked_out_user_cannot_be_added(self, admin, member, org1):
        user_service.disable_user(requester_id=admin.pk, user_id=member.pk)
        result = org_service.add_user_to_organization(requester_id=admin.pk, org_id=org1.id, user_id=member.pk)
        assert result.code == "access_denied"

    def test_inactive_organization_rejects_members(self, admin, member, org1):
        org1.is_active = False
        org1.save()
        result = org_service.add_user_to_organization(requester_id=admin.pk, org_id=org1.id, user_id=member.pk)
        assert result.code == "access_denied"

    def test_unknown_user(self, admin, org1):
        result = org_service.add_user_to_organization(requester_id=admin.pk, org_id=org1.id, user_id=424242)
        assert result.code == "not_found"

    def test_members_cannot_manage_membership(self, member, outsider, org1):
        org1.members.add(member)
        result = org_service.add_user_to_organization(requester_id=member.pk, org_id=org1.id, user_id=outsider.pk)
        assert result.code == "access_denied"
        assert not org1.members.filter(pk=outsider.pk).exists()

    def test_member_listing(self, admin, member, org1):
        org1.members.add(member)
        result = org_service.get_organization_members(requester_id=admin.pk, org_id=org1.id)
        assert [m.email for m in result.data] == ["member@docunet.local"]
        assert result.data[0].is_locked_out is False


@pytest.mark.django_db
class TestListings:

    def test_admin_sees_every_organization(self, admin, org1, org2):
        result = org_service.get_available_organizations(requester_id=admin.pk)
        assert {o.id for o in result.data} == {org1.id, org2.id}

    def test_member_sees_only_own_organizations(self, member, org1, org2):
        org2.members.add(member)
        result = org_service.get_available_organizations(requester_id=member.pk)
        assert [o.id for o in result.data] == [org2.id]
        assert result.data[0].member_count == 1

    def test_all_organizations_is_admin_only(self, admin, member, org1):
        assert len(org_service.get_all_organizations(requester_id=admin.pk).data) == 1
        assert org_service.get_all_organizations(requester_id=member.pk).code == "access_denied"

    def test_locked_requester_gets_nothing(self, admin, org1, make_user):
        other_admin = make_user("second-admin@docunet.local", admin=True)
        user_service.disable_user(requester_id=admin.pk, user_id=other_admin.pk)
        result = org_service.get_available_organizations(requester_id=other_admin.pk)
        assert not result.success
        assert result.data is None
