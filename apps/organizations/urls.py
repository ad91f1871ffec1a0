"""
apps.organizations.urls
~~~~~~~~~~~~~~~~~~~~~~~
URL routing for the Organizations application.
Mounted at /api/v1/ by the root URLconf.
"""
from django.urls import path

from .views import (
    CurrentOrganizationView,
    OrganizationAllView,
    OrganizationDetailView,
    OrganizationListCreateView,
    OrganizationMemberDetailView,
    OrganizationMembersView,
    OrganizationStatusView,
)

urlpatterns = [
    # GET/POST /api/v1/organizations/
    path(
        "organizations/",
        OrganizationListCreateView.as_view(),
        name="organization-list",
    ),
    # GET /api/v1/organizations/all/
    path(
        "organizations/all/",
        OrganizationAllView.as_view(),
        name="organization-all",
    ),
    # GET/PUT /api/v1/organizations/current/
    path(
        "organizations/current/",
        CurrentOrganizationView.as_view(),
        name="organization-current",
    ),
    # PUT /api/v1/organizations/<org_id>/
    path(
        "organizations/<str:org_id>/",
        OrganizationDetailView.as_view(),
        name="organization-detail",
    ),
    # PUT /api/v1/organizations/<org_id>/status/
    path(
        "organizations/<str:org_id>/status/",
        OrganizationStatusView.as_view(),
        name="organization-status",
    ),
    # GET/POST /api/v1/organizations/<org_id>/members/
    path(
        "organizations/<str:org_id>/members/",
        OrganizationMembersView.as_view(),
        name="organization-members",
    ),
    # DELETE /api/v1/organizations/<org_id>/members/<user_id>/
    path(
        "organizations/<str:org_id>/members/<int:user_id>/",
        OrganizationMemberDetailView.as_view(),
        name="organization-member-detail",
    ),
]
