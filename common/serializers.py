"""
common.serializers
~~~~~~~~~~~~~~~~~~
Response shapes shared by every API app (OpenAPI documentation only).
"""
from rest_framework import serializers


class ServiceResultSerializer(serializers.Serializer):
    """Envelope returned by every endpoint: ``{success, data, message, code}``."""

    success = serializers.BooleanField()
    data = serializers.JSONField(allow_null=True)
    message = serializers.CharField()
    code = serializers.CharField(allow_blank=True)
