"""
apps.topology.graph
~~~~~~~~~~~~~~~~~~~
Turns device and connection listings into graph elements in the
Cytoscape.js JSON shape (``{"group": ..., "data": {...}}``).

Node data
    ``id``, ``label``, ``ip`` (secondary line, optional), ``icon`` (SVG),
    ``color``, ``sortWeight`` (optional).

Edge data
    ``id``, ``source``, ``target``, ``color``, ``label`` (speed, optional),
    ``sourcePort`` / ``targetPort`` (interface names drawn near each end).

No authorization happens here: the input is already scoped by the
inventory services.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping

import structlog

from apps.inventory.constants import DEVICE_SORT_WEIGHTS, connection_color, device_color, device_icon

logger = structlog.get_logger(__name__)

Element = dict[str, Any]


def _field(item, name: str):
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


def build_node(device, *, sort_weight: int | None = None) -> Element:
    """One node for one device summary (or mapping with the same fields)."""
    device_type = _field(device, "type")
    if sort_weight is None:
        sort_weight = DEVICE_SORT_WEIGHTS.get(device_type)
    data = {
        "id": str(_field(device, "id")),
        "label": _field(device, "name"),
        "ip": _field(device, "ip_address") or None,
        "icon": device_icon(device_type),
        "color": device_color(device_type),
        "sortWeight": sort_weight,
    }
    return {"group": "nodes", "data": _compact(data)}


def build_edge(connection) -> Element:
    """One directed edge for one connection summary."""
    data = {
        "id": str(_field(connection, "id")),
        "source": str(_field(connection, "source_device_id")),
        "target": str(_field(connection, "destination_device_id")),
        "color": connection_color(_field(connection, "type")),
        "label": _field(connection, "speed") or None,
        "sourcePort": _field(connection, "source_interface") or None,
        "targetPort": _field(connection, "destination_interface") or None,
    }
    return {"group": "edges", "data": _compact(data)}


def build_elements(
    devices: Iterable,
    connections: Iterable,
    *,
    sort_weights: Mapping[str, int] | None = None,
) -> tuple[list[Element], list[Element]]:
    """
    Build ``(nodes, edges)`` for the given listings.

    *sort_weights* maps a device id to an explicit sibling weight and takes
    precedence over the device-type default.  Edges whose endpoints are not
    among *devices* are dropped.
    """
    weights = {str(k): v for k, v in (sort_weights or {}).items()}

    nodes = [build_node(d, sort_weight=weights.get(str(_field(d, "id")))) for d in devices]
    node_ids = {n["data"]["id"] for n in nodes}

    edges: list[Element] = []
    for connection in connections:
        edge = build_edge(connection)
        if edge["data"]["source"] not in node_ids or edge["data"]["target"] not in node_ids:
            logger.warning(
                "topology_edge_dropped",
                connection_id=edge["data"]["id"],
                source=edge["data"]["source"],
                target=edge["data"]["target"],
            )
            continue
        edges.append(edge)

    return nodes, edges
