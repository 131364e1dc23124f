import pytest

from Ideal_Graph.graph.sequence import (
    compute_visible,
    index_of,
    positions,
    resolve_unhidden,
)
from tests.snapshot_utils import make_snapshot


def test_visible_is_whole_sequence_when_not_hiding(group):
    visible = compute_visible(group.snapshots, hide_duplicates=False)
    assert visible == group.snapshots
    assert all(a is b for a, b in zip(visible, group.snapshots))


def test_hiding_drops_duplicates_in_order(group):
    visible = compute_visible(group.snapshots, hide_duplicates=True)
    assert positions(visible) == ["S0", "S1", "S4"]
    # order preserving subsequence of the group
    indices = [index_of(group.snapshots, s) for s in visible]
    assert indices == sorted(indices)


def test_compute_visible_does_not_mutate_input(group):
    before = group.snapshots
    compute_visible(before, hide_duplicates=True)
    assert positions(before) == ["S0", "S1", "S2", "S3", "S4"]


def test_index_of_uses_identity():
    a = make_snapshot("A", {1: {}})
    twin = make_snapshot("A", {1: {}})
    assert index_of([a], twin) == -1
    assert index_of([twin, a], a) == 1


def test_resolve_unhidden_walks_back_to_original(group):
    snapshots = group.snapshots
    assert resolve_unhidden(snapshots, snapshots[3]) is snapshots[1]
    assert resolve_unhidden(snapshots, snapshots[2]) is snapshots[1]
    assert resolve_unhidden(snapshots, snapshots[4]) is snapshots[4]


def test_resolve_unhidden_leading_duplicates_fall_forward():
    snapshots = [
        make_snapshot("D0", duplicate=True),
        make_snapshot("D1", duplicate=True),
        make_snapshot("R"),
    ]
    assert resolve_unhidden(snapshots, snapshots[0]) is snapshots[2]


def test_resolve_unhidden_rejects_foreign_snapshot(group):
    with pytest.raises(ValueError):
        resolve_unhidden(group.snapshots, make_snapshot("X"))


def test_resolve_unhidden_all_duplicates():
    snapshots = [make_snapshot("D0", duplicate=True)]
    with pytest.raises(ValueError):
        resolve_unhidden(snapshots, snapshots[0])
