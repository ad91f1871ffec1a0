"""
apps.inventory.views
~~~~~~~~~~~~~~~~~~~~
Thin DRF API views for devices and connections.
All business logic is delegated to :mod:`apps.inventory.services`.

Endpoints
---------
GET    /devices/                 – Devices visible to the requester
POST   /devices/                 – Create device
PATCH  /devices/{id}/            – Partial update
DELETE /devices/{id}/            – Delete (fails while connections reference it)
GET    /connections/             – Connections visible to the requester
POST   /connections/             – Create connection
PATCH  /connections/{id}/        – Partial update
DELETE /connections/{id}/        – Delete
"""
from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.inventory import services
from common.responses import result_response
from common.serializers import ServiceResultSerializer
from .serializers import (
    ConnectionCreateSerializer,
    ConnectionUpdateSerializer,
    DeviceCreateSerializer,
    DeviceUpdateSerializer,
    InventoryListQuerySerializer,
)

_ORG_FILTER = OpenApiParameter(
    name="organization_id",
    type=str,
    required=False,
    description="Only return rows of this organisation.",
)
_DENIED = OpenApiResponse(description="Requester is neither an administrator nor a member of the organisation.")


def _organization_filter(request: Request):
    query = InventoryListQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    return query.validated_data.get("organization_id")


# ---------------------------------------------------------------------------
# Devices
# ---------------------------------------------------------------------------

class DeviceListCreateView(APIView):
    """GET/POST /devices/"""

    @extend_schema(
        summary="List Devices",
        parameters=[_ORG_FILTER],
        responses={200: ServiceResultSerializer, 403: ServiceResultSerializer},
        tags=["Devices"],
    )
    def get(self, request: Request) -> Response:
        result = services.list_devices(
            requester_id=request.user.pk,
            organization_id=_organization_filter(request),
        )
        return result_response(result)

    @extend_schema(
        summary="Create Device",
        request=DeviceCreateSerializer,
        responses={
            201: ServiceResultSerializer,
            403: _DENIED,
            404: OpenApiResponse(description="Organisation not found."),
            409: OpenApiResponse(description="A device with that name already exists in the organisation."),
            422: OpenApiResponse(description="Invalid name, IP address or device type."),
        },
        tags=["Devices"],
    )
    def post(self, request: Request) -> Response:
        serializer = DeviceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        vd = serializer.validated_data
        result = services.create_device(
            requester_id=request.user.pk,
            name=vd["name"],
            type=vd["type"],
            organization_id=vd["organization_id"],
            ip_address=vd.get("ip_address"),
        )
        return result_response(result, success_status=status.HTTP_201_CREATED)


class DeviceDetailView(APIView):
    """PATCH/DELETE /devices/{id}/"""

    @extend_schema(
        summary="Update Device",
        description="Only supplied fields change.  An empty ``ip_address`` clears it.",
        request=DeviceUpdateSerializer,
        responses={200: ServiceResultSerializer, 403: _DENIED, 404: ServiceResultSerializer, 409: ServiceResultSerializer},
        tags=["Devices"],
    )
    def patch(self, request: Request, device_id: str) -> Response:
        serializer = DeviceUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.update_device(
            requester_id=request.user.pk,
            device_id=device_id,
            patch=serializer.to_patch(),
        )
        return result_response(result)

    @extend_schema(
        summary="Delete Device",
        responses={
            200: ServiceResultSerializer,
            403: _DENIED,
            404: ServiceResultSerializer,
            500: OpenApiResponse(description="The device is still used by connections."),
        },
        tags=["Devices"],
    )
    def delete(self, request: Request, device_id: str) -> Response:
        result = services.delete_device(requester_id=request.user.pk, device_id=device_id)
        return result_response(result)


# ---------------------------------------------------------------------------
# Connections
# ---------------------------------------------------------------------------

class ConnectionListCreateView(APIView):
    """GET/POST /connections/"""

    @extend_schema(
        summary="List Connections",
        parameters=[_ORG_FILTER],
        responses={200: ServiceResultSerializer, 403: ServiceResultSerializer},
        tags=["Connections"],
    )
    def get(self, request: Request) -> Response:
        result = services.list_connections(
            requester_id=request.user.pk,
            organization_id=_organization_filter(request),
        )
        return result_response(result)

    @extend_schema(
        summary="Create Connection",
        request=ConnectionCreateSerializer,
        responses={
            201: ServiceResultSerializer,
            400: OpenApiResponse(description="Self-loop, or devices from different organisations."),
            403: _DENIED,
            404: OpenApiResponse(description="One or both devices not found."),
        },
        tags=["Connections"],
    )
    def post(self, request: Request) -> Response:
        serializer = ConnectionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        vd = serializer.validated_data
        result = services.create_connection(
            requester_id=request.user.pk,
            source_device_id=vd["source_device_id"],
            destination_device_id=vd["destination_device_id"],
            type=vd["type"],
            organization_id=vd["organization_id"],
            source_interface=vd.get("source_interface"),
            destination_interface=vd.get("destination_interface"),
            speed=vd.get("speed"),
        )
        return result_response(result, success_status=status.HTTP_201_CREATED)


class ConnectionDetailView(APIView):
    """PATCH/DELETE /connections/{id}/"""

    @extend_schema(
        summary="Update Connection",
        description=(
            "Only supplied fields change.  Changing an endpoint re-checks that "
            "both devices belong to the connection's organisation."
        ),
        request=ConnectionUpdateSerializer,
        responses={200: ServiceResultSerializer, 400: ServiceResultSerializer, 403: _DENIED, 404: ServiceResultSerializer},
        tags=["Connections"],
    )
    def patch(self, request: Request, connection_id: str) -> Response:
        serializer = ConnectionUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.update_connection(
            requester_id=request.user.pk,
            connection_id=connection_id,
            patch=serializer.to_patch(),
        )
        return result_response(result)

    @extend_schema(
        summary="Delete Connection",
        responses={200: ServiceResultSerializer, 403: _DENIED, 404: ServiceResultSerializer},
        tags=["Connections"],
    )
    def delete(self, request: Request, connection_id: str) -> Response:
        result = services.delete_connection(requester_id=request.user.pk, connection_id=connection_id)
        return result_response(result)
