"""
apps.topology.serializers
~~~~~~~~~~~~~~~~~~~~~~~~~
Query-string validation for the topology endpoint.
"""
from rest_framework import serializers


class TopologyQuerySerializer(serializers.Serializer):
    organization_id = serializers.UUIDField()
    focus = serializers.CharField(required=False, allow_blank=False)
