"""
common.responses
~~~~~~~~~~~~~~~~
Rendering of :class:`~common.results.ServiceResult` envelopes as DRF
responses.  Views call :func:`result_response` and nothing else.
"""
from __future__ import annotations

import dataclasses

from rest_framework import status
from rest_framework.response import Response

from common.exceptions import STATUS_BY_CODE
from common.results import ServiceResult


def to_primitive(value):
    """Convert summary dataclasses (and lists of them) into plain dicts."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (list, tuple)):
        return [to_primitive(item) for item in value]
    return value


def result_response(result: ServiceResult, *, success_status: int = status.HTTP_200_OK) -> Response:
    """
    Render *result* as ``{success, data, message, code}``.

    Failed results use the HTTP status of their error code; an unknown code
    falls back to 400.
    """
    payload = result.to_dict()
    payload["data"] = to_primitive(result.data)
    if result.success:
        return Response(payload, status=success_status)
    return Response(payload, status=STATUS_BY_CODE.get(result.code, status.HTTP_400_BAD_REQUEST))
