"""
apps.inventory.urls
~~~~~~~~~~~~~~~~~~~
URL routing for devices and connections.
Mounted at /api/v1/ by the root URLconf.
"""
from django.urls import path

from .views import (
    ConnectionDetailView,
    ConnectionListCreateView,
    DeviceDetailView,
    DeviceListCreateView,
)

urlpatterns = [
    # GET/POST /api/v1/devices/
    path("devices/", DeviceListCreateView.as_view(), name="device-list"),
    # PATCH/DELETE /api/v1/devices/<device_id>/
    path("devices/<str:device_id>/", DeviceDetailView.as_view(), name="device-detail"),
    # GET/POST /api/v1/connections/
    path("connections/", ConnectionListCreateView.as_view(), name="connection-list"),
    # PATCH/DELETE /api/v1/connections/<connection_id>/
    path(
        "connections/<str:connection_id>/",
        ConnectionDetailView.as_view(),
        name="connection-detail",
    ),
]
