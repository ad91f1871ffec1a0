"""
apps.organizations.views
~~~~~~~~~~~~~~~~~~~~~~~~~
Thin DRF API views for the Organizations application.
All business logic is delegated to
:mod:`apps.organizations.services.org_service`; the requester is always the
authenticated user.

Endpoints
---------
GET    /organizations/                         – Organisations available to the requester
POST   /organizations/                         – Create organisation (admin)
GET    /organizations/all/                     – Every organisation (admin)
GET    /organizations/current/                 – Current organisation of this session
PUT    /organizations/current/                 – Select the current organisation
PUT    /organizations/{id}/                    – Rename (admin)
PUT    /organizations/{id}/status/             – Enable / disable (admin)
GET    /organizations/{id}/members/            – List members (admin)
POST   /organizations/{id}/members/            – Add member (admin)
DELETE /organizations/{id}/members/{user_id}/  – Remove member (admin)
"""
from __future__ import annotations

import dataclasses

from django.utils.translation import gettext as _
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.organizations.services import org_service
from apps.organizations.state import OrganizationState
from common.responses import result_response
from common.serializers import ServiceResultSerializer
from .serializers import (
    OrganizationCreateSerializer,
    OrganizationMemberSerializer,
    OrganizationRenameSerializer,
    OrganizationSelectSerializer,
    OrganizationStatusSerializer,
)

_DENIED = OpenApiResponse(description="Requester is not an active system administrator.")
_NOT_FOUND = OpenApiResponse(description="Organisation not found.")


class OrganizationListCreateView(APIView):
    """GET/POST /organizations/"""

    @extend_schema(
        summary="List Available Organisations",
        description=(
            "Administrators receive every organisation; anyone else only the "
            "organisations they are a member of."
        ),
        responses={200: ServiceResultSerializer, 403: ServiceResultSerializer},
        tags=["Organizations"],
    )
    def get(self, request: Request) -> Response:
        result = org_service.get_available_organizations(requester_id=request.user.pk)
        return result_response(result)

    @extend_schema(
        summary="Create Organisation",
        description="Creates a new active organisation.  Names are unique ignoring case.",
        request=OrganizationCreateSerializer,
        responses={
            201: ServiceResultSerializer,
            403: _DENIED,
            409: OpenApiResponse(description="An organisation with that name already exists."),
            422: OpenApiResponse(description="Name shorter than 3 or longer than 100 characters."),
        },
        tags=["Organizations"],
    )
    def post(self, request: Request) -> Response:
        serializer = OrganizationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = org_service.create_organization(
            created_by=request.user.pk,
            name=serializer.validated_data["name"],
        )
        return result_response(result, success_status=status.HTTP_201_CREATED)


class OrganizationAllView(APIView):
    """GET /organizations/all/ – full listing for administrators."""

    @extend_schema(
        summary="List All Organisations",
        responses={200: ServiceResultSerializer, 403: _DENIED},
        tags=["Organizations"],
    )
    def get(self, request: Request) -> Response:
        return result_response(org_service.get_all_organizations(requester_id=request.user.pk))


class CurrentOrganizationView(APIView):
    """GET/PUT /organizations/current/ – per-session organisation selection."""

    @staticmethod
    def _render(state: OrganizationState) -> Response:
        current = state.current_organization
        return Response(
            {
                "current_organization": dataclasses.asdict(current) if current else None,
                "available_organizations": [dataclasses.asdict(o) for o in state.available_organizations],
            },
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        summary="Get Current Organisation",
        description=(
            "Returns the organisation selected in this session.  A selection "
            "that is no longer available falls back to the first available one."
        ),
        tags=["Organizations"],
    )
    def get(self, request: Request) -> Response:
        state = OrganizationState.from_session(request.session, request.user.pk)
        state.save_to_session(request.session)
        return self._render(state)

    @extend_schema(
        summary="Select Current Organisation",
        request=OrganizationSelectSerializer,
        responses={200: OpenApiResponse(description="Selection stored."), 404: _NOT_FOUND},
        tags=["Organizations"],
    )
    def put(self, request: Request) -> Response:
        serializer = OrganizationSelectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        state = OrganizationState.from_session(request.session, request.user.pk)
        if not state.select(serializer.validated_data["organization_id"]):
            return Response(
                {
                    "success": False,
                    "data": None,
                    "message": _("Organization not available."),
                    "code": "not_found",
                },
                status=status.HTTP_404_NOT_FOUND,
            )
        state.save_to_session(request.session)
        return self._render(state)


class OrganizationDetailView(APIView):
    """PUT /organizations/{id}/ – rename."""

    @extend_schema(
        summary="Rename Organisation",
        request=OrganizationRenameSerializer,
        responses={
            200: ServiceResultSerializer,
            403: OpenApiResponse(description="Not an administrator, or the organisation is disabled."),
            404: _NOT_FOUND,
            409: OpenApiResponse(description="Another organisation already uses that name."),
        },
        tags=["Organizations"],
    )
    def put(self, request: Request, org_id: str) -> Response:
        serializer = OrganizationRenameSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = org_service.rename_organization(
            requester_id=request.user.pk,
            org_id=org_id,
            new_name=serializer.validated_data["new_name"],
        )
        return result_response(result)


class OrganizationStatusView(APIView):
    """PUT /organizations/{id}/status/ – enable or disable."""

    @extend_schema(
        summary="Enable / Disable Organisation",
        request=OrganizationStatusSerializer,
        responses={200: ServiceResultSerializer, 403: _DENIED, 404: _NOT_FOUND},
        tags=["Organizations"],
    )
    def put(self, request: Request, org_id: str) -> Response:
        serializer = OrganizationStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = org_service.manage_organization_status(
            requester_id=request.user.pk,
            org_id=org_id,
            is_enabled=serializer.validated_data["is_enabled"],
        )
        return result_response(result)


class OrganizationMembersView(APIView):
    """GET/POST /organizations/{id}/members/"""

    @extend_schema(
        summary="List Members",
        responses={200: ServiceResultSerializer, 403: _DENIED, 404: _NOT_FOUND},
        tags=["Organizations"],
    )
    def get(self, request: Request, org_id: str) -> Response:
        result = org_service.get_organization_members(requester_id=request.user.pk, org_id=org_id)
        return result_response(result)

    @extend_schema(
        summary="Add Member",
        request=OrganizationMemberSerializer,
        responses={
            200: ServiceResultSerializer,
            403: OpenApiResponse(description="Not an administrator, organisation disabled or user locked out."),
            404: OpenApiResponse(description="Organisation or user not found."),
            409: OpenApiResponse(description="The user is already a member."),
        },
        tags=["Organizations"],
    )
    def post(self, request: Request, org_id: str) -> Response:
        serializer = OrganizationMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = org_service.add_user_to_organization(
            requester_id=request.user.pk,
            org_id=org_id,
            user_id=serializer.validated_data["user_id"],
        )
        return result_response(result)


class OrganizationMemberDetailView(APIView):
    """DELETE /organizations/{id}/members/{user_id}/"""

    @extend_schema(
        summary="Remove Member",
        responses={
            200: ServiceResultSerializer,
            403: _DENIED,
            404: OpenApiResponse(description="Organisation not found or user is not a member."),
        },
        tags=["Organizations"],
    )
    def delete(self, request: Request, org_id: str, user_id: int) -> Response:
        result = org_service.remove_user_from_organization(
            requester_id=request.user.pk,
            org_id=org_id,
            user_id=user_id,
        )
        return result_response(result)
