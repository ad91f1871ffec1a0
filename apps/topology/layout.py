"""
apps.topology.layout
~~~~~~~~~~~~~~~~~~~~
Directed breadth-first layout.

Roots are the nodes without incoming edges, in input (store) order.  Nodes a
traversal never reaches, for example members of a cycle, start a new tree
from the first unreached node.  Each BFS depth becomes a row; rows are
centred on the widest one.  Siblings in a row are ordered by ``sortWeight``
when any of them carries one, otherwise input order is kept.

Positions are spaced by ``spacing_factor × node_size`` and offset by
``padding``, so large graphs spread out instead of overlapping.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Iterable

Position = dict[str, float]


@dataclass(frozen=True)
class LayoutOptions:
    padding: float = 100.0
    spacing_factor: float = 2.6
    node_size: float = 55.0
    focus_zoom: float = 1.5

    @property
    def cell(self) -> float:
        return self.node_size * self.spacing_factor

    @classmethod
    def from_settings(cls) -> "LayoutOptions":
        """Read ``settings.TOPOLOGY_LAYOUT``; missing keys keep their defaults."""
        from django.conf import settings

        conf = getattr(settings, "TOPOLOGY_LAYOUT", {}) or {}
        defaults = cls()
        return cls(
            padding=float(conf.get("PADDING", defaults.padding)),
            spacing_factor=float(conf.get("SPACING_FACTOR", defaults.spacing_factor)),
            node_size=float(conf.get("NODE_SIZE", defaults.node_size)),
            focus_zoom=float(conf.get("FOCUS_ZOOM", defaults.focus_zoom)),
        )


def _levels(node_ids: list[str], edges: Iterable[dict[str, Any]]) -> list[list[str]]:
    children: dict[str, list[str]] = {node_id: [] for node_id in node_ids}
    has_parent: set[str] = set()
    for edge in edges:
        data = edge["data"]
        source, target = data["source"], data["target"]
        if source in children and target in children and source != target:
            children[source].append(target)
            has_parent.add(target)

    depth: dict[str, int] = {}

    def walk(roots: list[str]) -> None:
        queue = deque()
        for root in roots:
            if root not in depth:
                depth[root] = 0
                queue.append(root)
        while queue:
            current = queue.popleft()
            for child in children[current]:
                if child not in depth:
                    depth[child] = depth[current] + 1
                    queue.append(child)

    walk([n for n in node_ids if n not in has_parent])
    for node_id in node_ids:
        if node_id not in depth:
            walk([node_id])

    levels: list[list[str]] = []
    for node_id in node_ids:
        d = depth[node_id]
        while len(levels) <= d:
            levels.append([])
        levels[d].append(node_id)
    return levels


def breadthfirst(
    nodes: list[dict[str, Any]],
    edges: list[dict[str, Any]],
    options: LayoutOptions | None = None,
) -> dict[str, Position]:
    """
    Compute ``{node_id: {"x": .., "y": ..}}`` for *nodes*.

    Args:
        nodes: Node elements as produced by :func:`apps.topology.graph.build_elements`.
        edges: Edge elements; edges to unknown nodes and self-loops are ignored.
        options: Spacing parameters, defaults when omitted.
    """
    options = options or LayoutOptions()
    if not nodes:
        return {}

    weights = {n["data"]["id"]: n["data"].get("sortWeight") for n in nodes}
    levels = _levels([n["data"]["id"] for n in nodes], edges)

    for row in levels:
        if any(weights[node_id] is not None for node_id in row):
            # stable sort: unweighted siblings keep input order
            row.sort(key=lambda node_id: weights[node_id] if weights[node_id] is not None else 0)

    widest = max(len(row) for row in levels)
    cell = options.cell
    positions: dict[str, Position] = {}
    for depth, row in enumerate(levels):
        offset = (widest - len(row)) / 2
        for column, node_id in enumerate(row):
            positions[node_id] = {
                "x": options.padding + (column + offset) * cell,
                "y": options.padding + depth * cell,
            }
    return positions


def bounding_box(positions: dict[str, Position]) -> dict[str, float]:
    """``{"x1", "y1", "x2", "y2"}`` around *positions*; all zero when empty."""
    if not positions:
        return {"x1": 0.0, "y1": 0.0, "x2": 0.0, "y2": 0.0}
    xs = [p["x"] for p in positions.values()]
    ys = [p["y"] for p in positions.values()]
    return {"x1": min(xs), "y1": min(ys), "x2": max(xs), "y2": max(ys)}
