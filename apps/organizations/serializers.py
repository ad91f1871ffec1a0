"""
apps.organizations.serializers
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
I/O-only serializers for the Organizations API.
No business logic; shape validation only.  Length and uniqueness rules live
in :mod:`apps.organizations.services.org_service`.
"""
from rest_framework import serializers


# ---------------------------------------------------------------------------
# Organization
# ---------------------------------------------------------------------------

class OrganizationCreateSerializer(serializers.Serializer):
    """Validates POST /organizations/ request body."""

    name = serializers.CharField(allow_blank=True, trim_whitespace=False)


class OrganizationRenameSerializer(serializers.Serializer):
    """Validates PUT /organizations/{id}/ request body."""

    new_name = serializers.CharField(allow_blank=True, trim_whitespace=False)


class OrganizationStatusSerializer(serializers.Serializer):
    """Validates PUT /organizations/{id}/status/ request body."""

    is_enabled = serializers.BooleanField()


# ---------------------------------------------------------------------------
# Membership
# ---------------------------------------------------------------------------

class OrganizationMemberSerializer(serializers.Serializer):
    """Validates POST /organizations/{id}/members/ request body."""

    user_id = serializers.IntegerField()



class OrganizationSelectSerializer(serializers.Serializer):
    """Validates PUT /organizations/current/ request body."""

    organization_id = serializers.UUIDField()
