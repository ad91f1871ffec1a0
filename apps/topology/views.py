"""
apps.topology.views
~~~~~~~~~~~~~~~~~~~
GET /topology/?organization_id=<uuid>[&focus=<element id>]

Builds the graph of one organisation from the requester's device and
connection listings, lays it out and returns the controller state
(elements with positions, selection, viewport).  Scoping is whatever the
inventory services allow; the topology code itself authorizes nothing.
"""
from __future__ import annotations

from django.conf import settings
from django.utils.translation import gettext as _
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.inventory import services
from apps.topology.controller import TopologyController
from apps.topology.graph import build_elements
from apps.topology.layout import LayoutOptions
from common.responses import result_response
from common.results import ServiceResult
from .serializers import TopologyQuerySerializer


class TopologyView(APIView):
    """GET /topology/ – laid-out graph for one organisation."""

    @extend_schema(
        summary="Get Topology",
        description=(
            "Returns Cytoscape-compatible node and edge elements for the "
            "devices and connections of one organisation visible to the "
            "requester, with breadth-first positions.  ``focus`` selects and "
            "centres an element."
        ),
        parameters=[
            OpenApiParameter(name="organization_id", type=str, required=True),
            OpenApiParameter(name="focus", type=str, required=False),
        ],
        responses={
            200: OpenApiResponse(description="Graph elements, selection and viewport."),
            403: OpenApiResponse(description="Invalid or inactive requester."),
        },
        tags=["Topology"],
    )
    def get(self, request: Request) -> Response:
        query = TopologyQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        org_id = query.validated_data["organization_id"]

        devices = services.list_devices(requester_id=request.user.pk, organization_id=org_id)
        if not devices.success:
            return result_response(devices)
        connections = services.list_connections(requester_id=request.user.pk, organization_id=org_id)
        if not connections.success:
            return result_response(connections)

        nodes, edges = build_elements(devices.data, connections.data)

        container_id = settings.TOPOLOGY_CONTAINER_ID
        controller = TopologyController(containers=[container_id], options=LayoutOptions.from_settings())
        controller.init(container_id, nodes, edges)
        focus = query.validated_data.get("focus")
        if focus:
            controller.focus(focus)

        return result_response(
            ServiceResult.ok(controller.to_dict(), _("Topology loaded successfully.")),
            success_status=status.HTTP_200_OK,
        )
