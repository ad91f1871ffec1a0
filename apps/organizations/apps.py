"""
apps.organizations.apps

Tenants: every device and connection belongs to exactly one organisation.
"""
from django.apps import AppConfig


class OrganizationsConfig(AppConfig):
    name = "apps.organizations"
    label = "organizations"
    verbose_name = "Organizations"
