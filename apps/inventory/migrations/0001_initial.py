import uuid

import django.db.models.deletion
import django.db.models.functions.text
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("organizations", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Device",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=100)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("Router", "Router"),
                            ("Switch", "Switch"),
                            ("Modem", "Modem"),
                            ("Server", "Server"),
                            ("PC", "Desktop / PC"),
                            ("Notebook", "Notebook"),
                            ("AccessPoint", "Access Point (AP)"),
                            ("WifiRouter", "Wi-Fi Router"),
                            ("Printer", "Printer"),
                            ("Specs", "Specs / Other"),
                        ],
                        max_length=20,
                    ),
                ),
                ("ip_address", models.CharField(blank=True, max_length=50, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "organization",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="devices",
                        to="organizations.organization",
                    ),
                ),
            ],
            options={
                "verbose_name": "Device",
                "verbose_name_plural": "Devices",
                "ordering": ["created_at", "name"],
            },
        ),
        migrations.CreateModel(
            name="Connection",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "source_interface",
                    models.CharField(
                        blank=True,
                        help_text="Interface on the source device, e.g. 'eth0' or 'Gi0/1'.",
                        max_length=50,
                        null=True,
                    ),
                ),
                (
                    "destination_interface",
                    models.CharField(
                        blank=True,
                        help_text="Interface on the destination device, e.g. 'sfp-sfpplus1'.",
                        max_length=50,
                        null=True,
                    ),
                ),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("Ethernet", "Ethernet (cable)"),
                            ("Fiber", "Optical fiber"),
                            ("Wireless", "Wireless (Wi-Fi)"),
                            ("Radio", "Radio (point-to-point)"),
                            ("VPN", "VPN / tunnel"),
                            ("Serial", "Serial / console"),
                            ("Other", "Other"),
                        ],
                        max_length=20,
                    ),
                ),
                ("speed", models.CharField(blank=True, max_length=50, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "destination_device",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="incoming_connections",
                        to="inventory.device",
                    ),
                ),
                (
                    "organization",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="connections",
                        to="organizations.organization",
                    ),
                ),
                (
                    "source_device",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="outgoing_connections",
                        to="inventory.device",
                    ),
                ),
            ],
            options={
                "verbose_name": "Connection",
                "verbose_name_plural": "Connections",
                "ordering": ["created_at"],
            },
        ),
        migrations.AddConstraint(
            model_name="device",
            constraint=models.UniqueConstraint(
                models.F("organization"),
                django.db.models.functions.text.Lower("name"),
                name="device_name_per_organization_ci_unique",
            ),
        ),
        migrations.AddConstraint(
            model_name="connection",
            constraint=models.CheckConstraint(
                condition=models.Q(("source_device", models.F("destination_device")), _negated=True),
                name="connection_not_self_loop",
            ),
        ),
    ]
