"""
apps.topology.urls
~~~~~~~~~~~~~~~~~~
Mounted at /api/v1/ by the root URLconf.
"""
from django.urls import path

from .views import TopologyView

urlpatterns = [
    # GET /api/v1/topology/?organization_id=<uuid>
    path("topology/", TopologyView.as_view(), name="topology"),
]
