"""
tests.test_topology
~~~~~~~~~~~~~~~~~~~
Graph elements, breadth-first layout and the interactive controller.

No database access: the inputs are plain mappings shaped like the
inventory listings.
"""
from __future__ import annotations

import pytest

from apps.inventory.models import ConnectionType, DeviceType
from apps.topology.controller import EDGE, NODE, SelectionEvent, TopologyController
from apps.topology.graph import build_elements
from apps.topology.layout import LayoutOptions, bounding_box, breadthfirst

CONTAINER = "topology"


def device(device_id, name, device_type=DeviceType.ROUTER, ip=None):
    return {"id": device_id, "name": name, "type": device_type, "ip_address": ip}


def connection(connection_id, source, destination, *, speed=None, source_interface=None, destination_interface=None):
    return {
        "id": connection_id,
        "source_device_id": source,
        "destination_device_id": destination,
        "type": ConnectionType.ETHERNET,
        "speed": speed,
        "source_interface": source_interface,
        "destination_interface": destination_interface,
    }


@pytest.fixture
def small_graph():
    """Two devices and one link: R1 --(1 Gbps, eth0/eth1)--> S1."""
    return build_elements(
        [device("r1", "Core Router", ip="10.0.0.1"), device("s1", "Edge Switch", DeviceType.SWITCH)],
        [connection("c1", "r1", "s1", speed="1 Gbps", source_interface="eth0", destination_interface="eth1")],
    )


@pytest.fixture
def controller():
    return TopologyController(containers=[CONTAINER])


class TestBuildElements:

    def test_node_and_edge_data(self, small_graph):
        nodes, edges = small_graph
        router = nodes[0]["data"]
        assert nodes[0]["group"] == "nodes"
        assert router["id"] == "r1"
        assert router["label"] == "Core Router"
        assert router["ip"] == "10.0.0.1"
        assert router["sortWeight"] == 1
        assert router["icon"].startswith("<svg")
        assert "ip" not in nodes[1]["data"]

        edge = edges[0]["data"]
        assert edges[0]["group"] == "edges"
        assert (edge["source"], edge["target"]) == ("r1", "s1")
        assert edge["label"] == "1 Gbps"
        assert (edge["sourcePort"], edge["targetPort"]) == ("eth0", "eth1")

    def test_dangling_edges_are_dropped(self):
        nodes, edges = build_elements(
            [device("a", "Alpha")],
            [connection("c1", "a", "ghost")],
        )
        assert len(nodes) == 1
        assert edges == []

    def test_explicit_sort_weight_wins(self):
        nodes, _ = build_elements([device("a", "Alpha")], [], sort_weights={"a": 42})
        assert nodes[0]["data"]["sortWeight"] == 42


class TestLayout:

    def test_rows_follow_depth_and_sort_weight(self):
        nodes, edges = build_elements(
            [
                device("pc", "Desk", DeviceType.PC),
                device("sw", "Switch", DeviceType.SWITCH),
                device("rt", "Router", DeviceType.ROUTER),
            ],
            [connection("c1", "rt", "pc"), connection("c2", "rt", "sw")],
        )
        options = LayoutOptions()
        positions = breadthfirst(nodes, edges, options)
        cell = options.cell

        assert positions["rt"]["y"] == pytest.approx(100)
        assert positions["sw"]["y"] == pytest.approx(100 + cell)
        assert positions["pc"]["y"] == pytest.approx(100 + cell)
        # switch (weight 3) sorts before the PC (weight 6)
        assert positions["sw"]["x"] < positions["pc"]["x"]
        # root is centred over its two children
        assert positions["rt"]["x"] == pytest.approx((positions["sw"]["x"] + positions["pc"]["x"]) / 2)

    def test_cycle_is_still_laid_out(self):
        nodes, edges = build_elements(
            [device("a", "Alpha"), device("b", "Bravo")],
            [connection("c1", "a", "b"), connection("c2", "b", "a")],
        )
        positions = breadthfirst(nodes, edges)
        assert set(positions) == {"a", "b"}
        assert positions["a"]["y"] < positions["b"]["y"]

    def test_disconnected_nodes_share_the_first_row(self):
        nodes, edges = build_elements([device("a", "Alpha"), device("b", "Bravo")], [])
        positions = breadthfirst(nodes, edges)
        assert positions["a"]["y"] == positions["b"]["y"]
        assert positions["a"]["x"] != positions["b"]["x"]

    def test_spacing_scales_with_options(self):
        nodes, edges = build_elements([device("a", "Alpha"), device("b", "Bravo")], [connection("c1", "a", "b")])
        tight = breadthfirst(nodes, edges, LayoutOptions(padding=0, spacing_factor=1, node_size=10))
        assert tight["b"]["y"] - tight["a"]["y"] == pytest.approx(10)

    def test_empty_graph(self):
        assert breadthfirst([], []) == {}
        assert bounding_box({}) == {"x1": 0.0, "y1": 0.0, "x2": 0.0, "y2": 0.0}


class TestController:

    def test_init_builds_instance(self, controller, small_graph):
        nodes, edges = small_graph
        assert controller.init(CONTAINER, nodes, edges)
        state = controller.to_dict()
        assert state["container"] == CONTAINER
        assert len(state["elements"]["nodes"]) == 2
        assert len(state["elements"]["edges"]) == 1
        assert all("position" in n for n in state["elements"]["nodes"])
        assert state["viewport"]["zoom"] == 1.0

    def test_node_tap_selects_and_emits(self, controller, small_graph):
        events: list[SelectionEvent] = []
        controller.init(CONTAINER, *small_graph, on_select=events.append)

        controller.tap("r1")
        assert events[-1].kind == NODE
        assert events[-1].payload == {"kind": NODE, "id": "r1", "label": "Core Router", "ip": "10.0.0.1"}
        assert controller.selected == {"r1"}

    def test_edge_tap_payload(self, controller, small_graph):
        events: list[SelectionEvent] = []
        controller.init(CONTAINER, *small_graph, on_select=events.append)

        controller.tap("c1")
        payload = events[-1].payload
        assert events[-1].kind == EDGE
        assert payload["label"] == "1 Gbps"
        assert (payload["source"], payload["target"]) == ("r1", "s1")
        assert (payload["sourceInterface"], payload["targetInterface"]) == ("eth0", "eth1")
        assert controller.selected == {"c1"}

    def test_background_tap_clears_selection(self, controller, small_graph):
        events: list[SelectionEvent] = []
        controller.init(CONTAINER, *small_graph, on_select=events.append)
        controller.tap("r1")

        controller.tap_background()
        assert events[-1] == SelectionEvent(None, None)
        assert controller.selected == set()

    def test_selection_is_exclusive(self, controller, small_graph):
        controller.init(CONTAINER, *small_graph, on_select=lambda event: None)
        controller.tap("r1")
        controller.tap("s1")
        assert controller.selected == {"s1"}

    def test_reinit_replaces_elements_and_listeners(self, controller, small_graph):
        first: list[SelectionEvent] = []
        second: list[SelectionEvent] = []
        controller.init(CONTAINER, *small_graph, on_select=first.append)

        nodes, edges = build_elements([device("x1", "Other"), device("x2", "Another")], [])
        controller.init(CONTAINER, nodes, edges, on_select=second.append)
        controller.init(CONTAINER, nodes, edges, on_select=second.append)

        assert len(controller.to_dict()["elements"]["nodes"]) == 2
        assert len(controller.instance.listeners) == 3

        controller.tap("x1")
        controller.tap("r1")
        assert first == []
        assert [e.payload["id"] for e in second] == ["x1"]

    def test_focus_selects_and_zooms_without_event(self, controller, small_graph):
        events: list[SelectionEvent] = []
        controller.init(CONTAINER, *small_graph, on_select=events.append)

        assert controller.focus("s1")
        state = controller.to_dict()
        assert state["selected"] == ["s1"]
        assert state["viewport"]["zoom"] == 1.5
        assert state["viewport"]["center"] == controller.instance.positions["s1"]
        assert events == []

    def test_focus_on_edge_centres_between_endpoints(self, controller, small_graph):
        controller.init(CONTAINER, *small_graph)
        controller.focus("c1")
        positions = controller.instance.positions
        centre = controller.to_dict()["viewport"]["center"]
        assert centre["x"] == pytest.approx((positions["r1"]["x"] + positions["s1"]["x"]) / 2)
        assert centre["y"] == pytest.approx((positions["r1"]["y"] + positions["s1"]["y"]) / 2)

    def test_init_drops_edges_to_unknown_nodes(self, controller):
        nodes = [{"group": "nodes", "data": {"id": "a"}}]
        edges = [{"group": "edges", "data": {"id": "e", "source": "a", "target": "zz"}}]
        assert controller.init(CONTAINER, nodes, edges)

        assert controller.to_dict()["elements"]["edges"] == []
        assert not controller.focus("e")
        controller.tap("e")
        assert controller.selected == set()

    def test_focus_unknown_element(self, controller, small_graph):
        controller.init(CONTAINER, *small_graph)
        assert not controller.focus("nope")
        assert controller.selected == set()

    def test_unknown_container_builds_nothing(self, controller, small_graph):
        assert not controller.init("missing", *small_graph)
        assert controller.instance is None
        assert controller.to_dict()["container"] is None

    def test_unknown_container_still_tears_down_previous(self, controller, small_graph):
        controller.init(CONTAINER, *small_graph)
        controller.init("missing", *small_graph)
        assert controller.to_dict()["elements"] == {"nodes": [], "edges": []}

    def test_destroy_is_idempotent(self, controller, small_graph):
        controller.destroy()
        controller.init(CONTAINER, *small_graph)
        controller.destroy()
        controller.destroy()
        controller.tap("r1")
        assert controller.selected == set()
