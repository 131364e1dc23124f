from Ideal_Graph.graph.diagram import Diagram, resolve_text
from tests.snapshot_utils import make_snapshot


def test_resolve_text_replaces_placeholders():
    assert resolve_text("[idx] [name]", {"idx": "4", "name": "If"}) == "4 If"
    assert resolve_text("[name] ([type])", {"name": "If"}) == "If (?)"
    assert resolve_text("plain", {}) == "plain"


def test_figures_follow_node_order_and_blocks():
    snapshot = make_snapshot(
        "S", {5: {"name": "A"}, 1: {"name": "B"}}, blocks={"B0": [5], "B1": [1]}
    )
    diagram = Diagram(snapshot, "[idx] [name]", "[name]", "[idx]")
    assert [f.id for f in diagram.figures] == [5, 1]
    assert diagram.figure_for(5).label == "5 A"
    assert diagram.figure_for(1).block == "B1"
    assert diagram.figure_for(9) is None
    assert [f.id for f in diagram.figures_for({1, 9})] == [1]
    assert diagram.cfg is False
