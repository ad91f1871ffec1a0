"""
apps.inventory.serializers
~~~~~~~~~~~~~~~~~~~~~~~~~~
I/O-only serializers for the device and connection endpoints.

Lengths and enumerations are validated by the services so that callers
outside HTTP get the same answers; these serializers only check shape.
Update serializers are fully partial: an omitted field stays unchanged.
"""
from rest_framework import serializers

from apps.inventory.services import ConnectionPatch, DevicePatch


# ---------------------------------------------------------------------------
# Devices
# ---------------------------------------------------------------------------

class DeviceCreateSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True, trim_whitespace=False)
    type = serializers.CharField()
    organization_id = serializers.UUIDField()
    ip_address = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class DeviceUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    type = serializers.CharField(required=False)
    ip_address = serializers.CharField(required=False, allow_blank=True)

    def to_patch(self) -> DevicePatch:
        return DevicePatch(**self.validated_data)


# ---------------------------------------------------------------------------
# Connections
# ---------------------------------------------------------------------------

class ConnectionCreateSerializer(serializers.Serializer):
    source_device_id = serializers.UUIDField()
    destination_device_id = serializers.UUIDField()
    type = serializers.CharField()
    organization_id = serializers.UUIDField()
    source_interface = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    destination_interface = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    speed = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ConnectionUpdateSerializer(serializers.Serializer):
    source_device_id = serializers.UUIDField(required=False)
    destination_device_id = serializers.UUIDField(required=False)
    type = serializers.CharField(required=False)
    source_interface = serializers.CharField(required=False, allow_blank=True)
    destination_interface = serializers.CharField(required=False, allow_blank=True)
    speed = serializers.CharField(required=False, allow_blank=True)

    def to_patch(self) -> ConnectionPatch:
        return ConnectionPatch(**self.validated_data)


class InventoryListQuerySerializer(serializers.Serializer):
    """Optional ``?organization_id=`` filter on listings."""

    organization_id = serializers.UUIDField(required=False)
