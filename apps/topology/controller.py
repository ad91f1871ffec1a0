"""
apps.topology.controller
~~~~~~~~~~~~~~~~~~~~~~~~
Interactive topology view: one graph instance bound to a container, with a
single-selection model and a focus operation.

Lifecycle
---------
``init`` always tears the previous instance down (elements, selection and
listeners) before building the new one, so re-initialising with a fresh
dataset never leaks handlers or duplicates elements.  Edges whose endpoints are
not among the nodes are dropped with a warning.  ``destroy`` is safe to
call at any time.

Events
------
A tap on a node or edge selects it exclusively and emits a
:class:`SelectionEvent` to the ``on_select`` callback.  A tap on the empty
canvas clears the selection and emits ``SelectionEvent(kind=None)``.
``focus`` selects and centres an element without emitting anything.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

import structlog

from apps.topology.layout import LayoutOptions, Position, bounding_box, breadthfirst

logger = structlog.get_logger(__name__)

NODE = "node"
EDGE = "edge"


@dataclass(frozen=True)
class SelectionEvent:
    """
    What the user selected.

    ``kind`` is ``"node"``, ``"edge"`` or ``None`` (background tap).  The
    payload repeats ``kind`` and carries ``id`` and ``label`` plus ``ip`` for
    nodes, or ``source``/``target``/``sourceInterface``/``targetInterface``
    for edges; absent optional fields are omitted.
    """

    kind: str | None
    payload: dict[str, Any] | None = None


SelectHandler = Callable[[SelectionEvent], None]


@dataclass
class Listener:
    event: str
    selector: str | None
    handler: Callable[[Any], None]


@dataclass
class RenderInstance:
    """A built graph: elements by id, positions, selection and viewport."""

    container_id: str
    nodes: dict[str, dict[str, Any]]
    edges: dict[str, dict[str, Any]]
    positions: dict[str, Position]
    viewport: dict[str, Any]
    selected: set[str] = field(default_factory=set)
    listeners: list[Listener] = field(default_factory=list)

    def on(self, event: str, selector: str | None, handler: Callable[[Any], None]) -> None:
        self.listeners.append(Listener(event, selector, handler))

    def emit(self, event: str, selector: str | None, target: Any) -> None:
        for listener in list(self.listeners):
            if listener.event == event and listener.selector == selector:
                listener.handler(target)

    def get_element(self, element_id: str) -> tuple[str, dict[str, Any]] | None:
        if element_id in self.nodes:
            return NODE, self.nodes[element_id]
        if element_id in self.edges:
            return EDGE, self.edges[element_id]
        return None

    def select_only(self, element_id: str | None) -> None:
        self.selected.clear()
        if element_id is not None:
            self.selected.add(element_id)

    def center_of(self, element_id: str) -> Position:
        if element_id in self.positions:
            return dict(self.positions[element_id])
        data = self.edges[element_id]["data"]
        source, target = self.positions[data["source"]], self.positions[data["target"]]
        return {"x": (source["x"] + target["x"]) / 2, "y": (source["y"] + target["y"]) / 2}

    def destroy(self) -> None:
        self.listeners.clear()
        self.selected.clear()
        self.nodes.clear()
        self.edges.clear()
        self.positions.clear()


def _payload(kind: str, data: dict[str, Any]) -> dict[str, Any]:
    if kind == NODE:
        payload = {"kind": NODE, "id": data["id"], "label": data.get("label"), "ip": data.get("ip")}
    else:
        payload = {
            "kind": EDGE,
            "id": data["id"],
            "label": data.get("label"),
            "source": data.get("source"),
            "target": data.get("target"),
            "sourceInterface": data.get("sourcePort"),
            "targetInterface": data.get("targetPort"),
        }
    return {key: value for key, value in payload.items() if value is not None or key == "label"}


class TopologyController:
    """
    Drives one topology view.

    Args:
        containers: Ids of the containers the view may be mounted in.
            ``init`` with any other id logs an error and builds nothing.
        options: Layout and focus parameters.
    """

    def __init__(self, containers: Iterable[str] = (), options: LayoutOptions | None = None) -> None:
        self.containers = set(containers)
        self.options = options or LayoutOptions()
        self.instance: RenderInstance | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init(
        self,
        container_id: str,
        nodes: list[dict[str, Any]],
        edges: list[dict[str, Any]],
        on_select: SelectHandler | None = None,
    ) -> bool:
        """
        Build a fresh instance for *nodes* and *edges*.

        Returns:
            ``True`` iff an instance was built.
        """
        self.destroy()

        if container_id not in self.containers:
            logger.error("topology_container_not_found", container_id=container_id)
            return False

        node_ids = {n["data"]["id"] for n in nodes}
        kept_edges = []
        for edge in edges:
            data = edge["data"]
            if data.get("source") not in node_ids or data.get("target") not in node_ids:
                logger.warning(
                    "topology_edge_dropped",
                    edge_id=data.get("id"),
                    source=data.get("source"),
                    target=data.get("target"),
                )
                continue
            kept_edges.append(edge)
        edges = kept_edges

        positions = breadthfirst(nodes, edges, self.options)
        box = bounding_box(positions)
        instance = RenderInstance(
            container_id=container_id,
            nodes={n["data"]["id"]: n for n in nodes},
            edges={e["data"]["id"]: e for e in edges},
            positions=positions,
            viewport={
                "zoom": 1.0,
                "center": {"x": (box["x1"] + box["x2"]) / 2, "y": (box["y1"] + box["y2"]) / 2},
            },
        )

        if on_select is not None:
            def on_element(target: tuple[str, dict[str, Any]]) -> None:
                kind, element = target
                instance.select_only(element["data"]["id"])
                on_select(SelectionEvent(kind, _payload(kind, element["data"])))

            def on_background(_target: Any) -> None:
                instance.select_only(None)
                on_select(SelectionEvent(None, None))

            instance.on("tap", NODE, on_element)
            instance.on("tap", EDGE, on_element)
            instance.on("tap", None, on_background)

        self.instance = instance
        logger.info(
            "topology_initialized",
            container_id=container_id,
            nodes=len(instance.nodes),
            edges=len(instance.edges),
        )
        return True

    def destroy(self) -> None:
        if self.instance is not None:
            self.instance.destroy()
            self.instance = None

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    def tap(self, element_id: str) -> None:
        """Simulate a click on the element *element_id*; unknown ids are ignored."""
        if self.instance is None:
            return
        found = self.instance.get_element(element_id)
        if found is None:
            return
        self.instance.emit("tap", found[0], found)

    def tap_background(self) -> None:
        """Simulate a click on the empty canvas."""
        if self.instance is not None:
            self.instance.emit("tap", None, self.instance)

    def focus(self, element_id: str) -> bool:
        """
        Select *element_id*, centre the viewport on it and zoom to the focus
        level.  No selection event is emitted.
        """
        if self.instance is None or self.instance.get_element(element_id) is None:
            return False
        self.instance.select_only(element_id)
        self.instance.viewport = {
            "zoom": self.options.focus_zoom,
            "center": self.instance.center_of(element_id),
        }
        return True

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def selected(self) -> set[str]:
        return set(self.instance.selected) if self.instance else set()

    def to_dict(self) -> dict[str, Any]:
        """Serialisable view state: elements with positions, selection, viewport."""
        if self.instance is None:
            return {"container": None, "elements": {"nodes": [], "edges": []}, "selected": [], "viewport": None}
        instance = self.instance
        nodes = [
            {**node, "position": dict(instance.positions[node_id])}
            for node_id, node in instance.nodes.items()
        ]
        return {
            "container": instance.container_id,
            "elements": {"nodes": nodes, "edges": list(instance.edges.values())},
            "selected": sorted(instance.selected),
            "viewport": dict(instance.viewport),
        }
