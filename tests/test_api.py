"""
tests.test_api
~~~~~~~~~~~~~~
HTTP surface: authentication, envelope shape and status mapping, the
topology endpoint, health probe and the bootstrap command.
"""
from __future__ import annotations

import io
import uuid

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command
from rest_framework import status

from apps.accounts.roles import system_administrator_role
from apps.accounts.services import identity_provider
from apps.inventory.models import Connection, Device, DeviceType
from apps.organizations.models import Organization

ORGANIZATIONS_URL = "/api/v1/organizations/"
CURRENT_ORGANIZATION_URL = "/api/v1/organizations/current/"
DEVICES_URL = "/api/v1/devices/"
CONNECTIONS_URL = "/api/v1/connections/"
USERS_URL = "/api/v1/users/"
TOPOLOGY_URL = "/api/v1/topology/"


def device_url(device_id) -> str:
    return f"{DEVICES_URL}{device_id}/"


@pytest.mark.django_db
class TestAuthentication:

    @pytest.mark.parametrize("url", [ORGANIZATIONS_URL, DEVICES_URL, CONNECTIONS_URL, USERS_URL, TOPOLOGY_URL])
    def test_anonymous_requests_are_rejected(self, api_client, url):
        resp = api_client.get(url)
        assert resp.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestOrganizationEndpoints:

    def test_create_organization_201(self, admin_client):
        resp = admin_client.post(ORGANIZATIONS_URL, data={"name": "Acme"}, format="json")
        assert resp.status_code == status.HTTP_201_CREATED
        body = resp.json()
        assert body["success"] is True
        assert body["code"] == ""
        assert Organization.objects.filter(pk=body["data"]).exists()

    def test_duplicate_organization_409(self, admin_client, org1):
        resp = admin_client.post(ORGANIZATIONS_URL, data={"name": "org 1"}, format="json")
        assert resp.status_code == status.HTTP_409_CONFLICT
        assert resp.json()["code"] == "conflict"

    def test_member_cannot_create_403(self, member_client):
        resp = member_client.post(ORGANIZATIONS_URL, data={"name": "Acme"}, format="json")
        assert resp.status_code == status.HTTP_403_FORBIDDEN
        assert resp.json()["success"] is False

    def test_short_name_422(self, admin_client):
        resp = admin_client.post(ORGANIZATIONS_URL, data={"name": "ab"}, format="json")
        assert resp.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_member_listing_is_scoped(self, member, member_client, org1, org2):
        org1.members.add(member)
        resp = member_client.get(ORGANIZATIONS_URL)
        assert resp.status_code == status.HTTP_200_OK
        assert [o["name"] for o in resp.json()["data"]] == ["Org 1"]

    def test_add_member_endpoint(self, admin_client, member, org1):
        resp = admin_client.post(
            f"{ORGANIZATIONS_URL}{org1.id}/members/", data={"user_id": member.pk}, format="json",
        )
        assert resp.status_code == status.HTTP_200_OK
        assert org1.members.filter(pk=member.pk).exists()

    def test_current_organization_selection(self, admin_client, org1, org2):
        resp = admin_client.get(CURRENT_ORGANIZATION_URL)
        assert resp.status_code == status.HTTP_200_OK
        assert len(resp.json()["available_organizations"]) == 2

        resp = admin_client.put(CURRENT_ORGANIZATION_URL, data={"organization_id": str(org2.id)}, format="json")
        assert resp.status_code == status.HTTP_200_OK
        assert resp.json()["current_organization"]["id"] == str(org2.id)

        resp = admin_client.get(CURRENT_ORGANIZATION_URL)
        assert resp.json()["current_organization"]["id"] == str(org2.id)

    def test_selecting_unavailable_organization_404(self, member_client, org1):
        resp = member_client.put(CURRENT_ORGANIZATION_URL, data={"organization_id": str(org1.id)}, format="json")
        assert resp.status_code == status.HTTP_404_NOT_FOUND
        assert resp.json()["code"] == "not_found"


@pytest.mark.django_db
class TestInventoryEndpoints:

    def test_device_lifecycle(self, member, member_client, org1):
        org1.members.add(member)
        resp = member_client.post(
            DEVICES_URL,
            data={"name": "Core Router", "type": DeviceType.ROUTER, "organization_id": str(org1.id)},
            format="json",
        )
        assert resp.status_code == status.HTTP_201_CREATED
        device_id = resp.json()["data"]

        resp = member_client.patch(device_url(device_id), data={"ip_address": "10.0.0.1"}, format="json")
        assert resp.status_code == status.HTTP_200_OK
        assert Device.objects.get(pk=device_id).ip_address == "10.0.0.1"

        listing = member_client.get(DEVICES_URL).json()["data"]
        assert listing[0]["organization_name"] == "Org 1"

        resp = member_client.delete(device_url(device_id))
        assert resp.status_code == status.HTTP_200_OK
        assert not Device.objects.exists()

    def test_malformed_body_400(self, admin_client):
        resp = admin_client.post(DEVICES_URL, data={"name": "Router"}, format="json")
        assert resp.status_code == status.HTTP_400_BAD_REQUEST

    def test_self_loop_400(self, admin_client, org1):
        device = Device.objects.create(name="Core", type=DeviceType.ROUTER, organization=org1)
        resp = admin_client.post(
            CONNECTIONS_URL,
            data={
                "source_device_id": str(device.id),
                "destination_device_id": str(device.id),
                "type": "Ethernet",
                "organization_id": str(org1.id),
            },
            format="json",
        )
        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.json()["code"] == "invalid_operation"
        assert not Connection.objects.exists()

    def test_deleting_referenced_device_500(self, admin_client, org1):
        a = Device.objects.create(name="DevA", type=DeviceType.ROUTER, organization=org1)
        b = Device.objects.create(name="DevB", type=DeviceType.SWITCH, organization=org1)
        Connection.objects.create(source_device=a, destination_device=b, type="Ethernet", organization=org1)
        resp = admin_client.delete(device_url(a.id))
        assert resp.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert resp.json()["code"] == "internal_error"

    def test_unknown_device_404(self, admin_client):
        resp = admin_client.delete(device_url(uuid.uuid4()))
        assert resp.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestTopologyEndpoint:

    @pytest.fixture
    def linked(self, org1):
        a = Device.objects.create(name="DevA", type=DeviceType.ROUTER, organization=org1)
        b = Device.objects.create(name="DevB", type=DeviceType.SWITCH, organization=org1)
        c = Connection.objects.create(
            source_device=a, destination_device=b, type="Ethernet", speed="1 Gbps", organization=org1,
        )
        return a, b, c

    def test_nodes_carry_positions(self, admin_client, org1, linked):
        resp = admin_client.get(TOPOLOGY_URL, {"organization_id": str(org1.id)})
        assert resp.status_code == status.HTTP_200_OK
        data = resp.json()["data"]
        assert data["container"] == "topology"
        assert len(data["elements"]["nodes"]) == 2
        assert all({"x", "y"} <= set(n["position"]) for n in data["elements"]["nodes"])
        assert data["elements"]["edges"][0]["data"]["label"] == "1 Gbps"

    def test_focus(self, admin_client, org1, linked):
        _, b, _ = linked
        resp = admin_client.get(TOPOLOGY_URL, {"organization_id": str(org1.id), "focus": str(b.id)})
        data = resp.json()["data"]
        assert data["selected"] == [str(b.id)]
        assert data["viewport"]["zoom"] == 1.5

    def test_non_member_sees_empty_graph(self, member_client, org1, linked):
        resp = member_client.get(TOPOLOGY_URL, {"organization_id": str(org1.id)})
        assert resp.status_code == status.HTTP_200_OK
        assert resp.json()["data"]["elements"] == {"nodes": [], "edges": []}

    def test_organization_id_is_required(self, admin_client):
        resp = admin_client.get(TOPOLOGY_URL)
        assert resp.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestUserEndpoints:

    def test_admin_creates_user_201(self, admin_client):
        resp = admin_client.post(
            USERS_URL,
            data={"email": "new@docunet.local", "password": "abcdef", "confirm_password": "abcdef"},
            format="json",
        )
        assert resp.status_code == status.HTTP_201_CREATED
        assert get_user_model().objects.filter(pk=resp.json()["data"]).exists()

    def test_lock_user(self, admin_client, member):
        resp = admin_client.put(f"{USERS_URL}{member.pk}/status/", data={"is_locked": True}, format="json")
        assert resp.status_code == status.HTTP_200_OK
        assert identity_provider.is_locked_out(member)


@pytest.mark.django_db
class TestHealth:

    def test_health_reports_db_and_role(self, api_client, admin_role):
        resp = api_client.get("/health/")
        assert resp.status_code == status.HTTP_200_OK
        assert resp.json() == {"status": "ok", "db": "ok", "admin_role": "ok"}

    def test_missing_role_does_not_degrade(self, api_client, db):
        resp = api_client.get("/health/")
        assert resp.status_code == status.HTTP_200_OK
        assert resp.json()["admin_role"] == "missing"


@pytest.mark.django_db
class TestBootstrapCommand:

    def test_first_setup_creates_admin(self):
        out = io.StringIO()
        call_command("bootstrap_admin", "--email", "root@docunet.local", "--password", "first-pass", stdout=out)

        admin = get_user_model().objects.get(email="root@docunet.local")
        assert identity_provider.is_in_role(admin, system_administrator_role())
        assert admin.check_password("first-pass")
        assert "root@docunet.local" in out.getvalue()

    def test_skipped_when_users_exist(self, member):
        out = io.StringIO()
        call_command("bootstrap_admin", stdout=out)

        assert get_user_model().objects.count() == 1
        assert identity_provider.role_exists(system_administrator_role())
        assert "skipped" in out.getvalue()
