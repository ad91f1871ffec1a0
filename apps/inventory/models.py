"""
apps.inventory.models
~~~~~~~~~~~~~~~~~~~~~
Devices and the connections between them, both owned by an
:class:`~apps.organizations.models.Organization`.

Models
------
Device
    A network asset.  Name unique per organisation, ignoring case.

Connection
    A directed link between two devices of the same organisation.  Device
    foreign keys are ``PROTECT``: a device cannot be deleted while a
    connection still references it.
"""
import uuid

from django.db import models
from django.db.models import F, Q
from django.db.models.functions import Lower

from apps.organizations.models import Organization


class DeviceType(models.TextChoices):
    ROUTER = "Router", "Router"
    SWITCH = "Switch", "Switch"
    MODEM = "Modem", "Modem"
    SERVER = "Server", "Server"
    PC = "PC", "Desktop / PC"
    NOTEBOOK = "Notebook", "Notebook"
    ACCESS_POINT = "AccessPoint", "Access Point (AP)"
    WIFI_ROUTER = "WifiRouter", "Wi-Fi Router"
    PRINTER = "Printer", "Printer"
    SPECS = "Specs", "Specs / Other"


class ConnectionType(models.TextChoices):
    ETHERNET = "Ethernet", "Ethernet (cable)"
    FIBER = "Fiber", "Optical fiber"
    WIRELESS = "Wireless", "Wireless (Wi-Fi)"
    RADIO = "Radio", "Radio (point-to-point)"
    VPN = "VPN", "VPN / tunnel"
    SERIAL = "Serial", "Serial / console"
    OTHER = "Other", "Other"


class ConnectionSpeed(models.TextChoices):
    """Suggested values for the free-text ``Connection.speed`` field."""

    ETHERNET_10M = "10 Mbps", "10 Mbps (Ethernet)"
    FAST_ETHERNET_100M = "100 Mbps", "100 Mbps (Fast Ethernet)"
    GIGABIT_1G = "1 Gbps", "1 Gbps (Gigabit)"
    MULTI_GIGABIT_2_5G = "2.5 Gbps", "2.5 Gbps"
    MULTI_GIGABIT_5G = "5 Gbps", "5 Gbps"
    TEN_GIGABIT_10G = "10 Gbps", "10 Gbps"
    TWENTY_FIVE_GIGABIT_25G = "25 Gbps", "25 Gbps"
    FORTY_GIGABIT_40G = "40 Gbps", "40 Gbps"
    FIFTY_GIGABIT_50G = "50 Gbps", "50 Gbps"
    HUNDRED_GIGABIT_100G = "100 Gbps", "100 Gbps"


class Device(models.Model):
    """
    A network asset (router, switch, server …) belonging to exactly one
    organisation.

    ``ip_address`` is free text (≤ 50 chars, IPv4/IPv6/hostname …) and is
    stored as NULL when absent.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    type = models.CharField(max_length=20, choices=DeviceType.choices)
    ip_address = models.CharField(max_length=50, null=True, blank=True)
    organization = models.ForeignKey(
        Organization,
        on_delete=models.CASCADE,
        related_name="devices",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "name"]
        verbose_name = "Device"
        verbose_name_plural = "Devices"
        constraints = [
            models.UniqueConstraint(
                F("organization"),
                Lower("name"),
                name="device_name_per_organization_ci_unique",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} [{self.type}]"


class Connection(models.Model):
    """
    A directed link record between two devices, carrying the physical or
    logical metadata (type, speed, interface names on each side).

    Both devices must belong to ``organization``; the service layer enforces
    it and the database rejects self-loops.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    source_device = models.ForeignKey(
        Device,
        on_delete=models.PROTECT,
        related_name="outgoing_connections",
    )
    source_interface = models.CharField(
        max_length=50,
        null=True,
        blank=True,
        help_text="Interface on the source device, e.g. 'eth0' or 'Gi0/1'.",
    )
    destination_device = models.ForeignKey(
        Device,
        on_delete=models.PROTECT,
        related_name="incoming_connections",
    )
    destination_interface = models.CharField(
        max_length=50,
        null=True,
        blank=True,
        help_text="Interface on the destination device, e.g. 'sfp-sfpplus1'.",
    )
    type = models.CharField(max_length=20, choices=ConnectionType.choices)
    speed = models.CharField(max_length=50, null=True, blank=True)
    organization = models.ForeignKey(
        Organization,
        on_delete=models.CASCADE,
        related_name="connections",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]
        verbose_name = "Connection"
        verbose_name_plural = "Connections"
        constraints = [
            models.CheckConstraint(
                condition=~Q(source_device=F("destination_device")),
                name="connection_not_self_loop",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.source_device_id} -> {self.destination_device_id} [{self.type}]"
