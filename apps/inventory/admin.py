"""
apps.inventory.admin
"""
from django.contrib import admin

from .models import Connection, Device


@admin.register(Device)
class DeviceAdmin(admin.ModelAdmin):
    list_display = ["name", "type", "ip_address", "organization", "created_at"]
    list_filter = ["type", "organization"]
    search_fields = ["name", "ip_address"]
    readonly_fields = ["id", "created_at", "updated_at"]
    ordering = ["organization__name", "name"]


@admin.register(Connection)
class ConnectionAdmin(admin.ModelAdmin):
    list_display = [
        "id",
        "source_device",
        "source_interface",
        "destination_device",
        "destination_interface",
        "type",
        "speed",
        "organization",
    ]
    list_filter = ["type", "organization"]
    search_fields = ["source_device__name", "destination_device__name"]
    readonly_fields = ["id", "created_at", "updated_at"]
