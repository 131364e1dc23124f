import pytest

from Ideal_Graph.graph.model import NO_BLOCK, Group, InputNode, Snapshot
from tests.snapshot_utils import make_snapshot


def test_nodes_compare_by_value_snapshots_by_identity():
    assert InputNode(1, {"p": "1"}) == InputNode(1, {"p": "1"})
    assert InputNode(1, {"p": "1"}) != InputNode(1, {"p": "2"})
    assert make_snapshot("A") != make_snapshot("A")


def test_duplicate_flag():
    assert make_snapshot("A", duplicate=True).is_duplicate
    assert not make_snapshot("A").is_duplicate


def test_add_edge_requires_nodes():
    snapshot = make_snapshot("A", {1: {}})
    with pytest.raises(ValueError):
        snapshot.add_edge(1, 2)


def test_ensure_nodes_in_blocks_collects_orphans():
    snapshot = make_snapshot("A", {1: {}, 2: {}, 3: {}}, blocks={"B0": [1]})
    snapshot.ensure_nodes_in_blocks()
    assert snapshot.blocks[NO_BLOCK].nodes == [2, 3]
    snapshot.ensure_nodes_in_blocks()
    assert snapshot.blocks[NO_BLOCK].nodes == [2, 3]


def test_dict_round_trip_keeps_structure():
    snapshot = make_snapshot(
        "A", {1: {"name": "Start"}, 2: {"name": "Ret"}}, edges=[(1, 2)], blocks={"B0": [1, 2]}
    )
    copy = Snapshot.from_dict(snapshot.to_dict())
    assert copy.to_dict() == snapshot.to_dict()
    assert copy is not snapshot


def test_group_membership_and_changes():
    a, b = make_snapshot("A", {1: {}}), make_snapshot("B", {2: {}})
    group = Group("g", [a])
    fired = []
    group.changed.connect(lambda: fired.append(len(group)))
    group.add_snapshot(b)
    assert b.group is group
    assert group.get_all_nodes() == {1, 2}
    group.remove_snapshot(a)
    assert group.snapshots == [b]
    group.clear()
    assert fired == [2, 1, 0]
    with pytest.raises(ValueError):
        group.remove_snapshot(a)


def test_snapshots_property_is_a_copy():
    group = Group("g", [make_snapshot("A")])
    group.snapshots.clear()
    assert len(group) == 1
