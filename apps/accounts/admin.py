"""
apps.accounts.admin
"""
from django.contrib import admin

from .models import IdentityState


@admin.register(IdentityState)
class IdentityStateAdmin(admin.ModelAdmin):
    list_display = ["user", "lockout_enabled", "lockout_end", "updated_at"]
    list_filter = ["lockout_enabled"]
    search_fields = ["user__email"]
    readonly_fields = ["security_stamp", "updated_at"]
