import itertools

from Ideal_Graph.graph.selection import SelectionColor, compute_colors, normalize_ids
from tests.snapshot_utils import make_snapshot

NONE, WHITE, ORANGE, GREEN = (
    SelectionColor.NONE,
    SelectionColor.WHITE,
    SelectionColor.ORANGE,
    SelectionColor.GREEN,
)


def test_first_occurrence_green_unchanged_white_changed_orange():
    visible = [
        make_snapshot("S0", {2: {"p": "1"}}),
        make_snapshot("S1", {2: {"p": "1"}}),
        make_snapshot("S2", {2: {"p": "2"}}),
    ]
    assert compute_colors({2}, visible) == [GREEN, WHITE, ORANGE]


def test_empty_selection_leaves_baseline():
    visible = [make_snapshot("S0", {1: {}}), make_snapshot("S1", {1: {}})]
    assert compute_colors(set(), visible) == [NONE, NONE]


def test_negative_ids_refer_to_canonical_node():
    visible = [make_snapshot("S0", {2: {"p": "1"}}), make_snapshot("S1", {2: {"p": "1"}})]
    assert normalize_ids([-2, 3]) == {2, 3}
    assert compute_colors({-2}, visible) == compute_colors({2}, visible)


def test_absent_node_resets_first_occurrence():
    visible = [
        make_snapshot("S0", {5: {"p": "1"}}),
        make_snapshot("S1", {}),
        make_snapshot("S2", {5: {"p": "1"}}),
    ]
    assert compute_colors({5}, visible) == [GREEN, NONE, GREEN]


def test_higher_priority_wins_across_ids():
    visible = [
        make_snapshot("S0", {1: {"p": "1"}}),
        make_snapshot("S1", {1: {"p": "1"}, 2: {"p": "1"}}),
        make_snapshot("S2", {1: {"p": "2"}, 2: {"p": "1"}}),
    ]
    # id 1: green, white, orange; id 2: none, green, white
    assert compute_colors({1, 2}, visible) == [GREEN, GREEN, ORANGE]


def test_order_independent_and_idempotent():
    visible = [
        make_snapshot("S0", {1: {"p": "1"}, 3: {}}),
        make_snapshot("S1", {1: {"p": "1"}, 2: {"p": "a"}}),
        make_snapshot("S2", {1: {"p": "2"}, 2: {"p": "b"}, 3: {}}),
        make_snapshot("S3", {2: {"p": "b"}, 3: {}}),
    ]
    ids = [1, 2, -3]
    expected = compute_colors(ids, visible)
    for perm in itertools.permutations(ids):
        assert compute_colors(list(perm), visible) == expected
    assert compute_colors(ids, visible) == expected


def test_raise_to_never_lowers():
    assert GREEN.raise_to(WHITE) is GREEN
    assert ORANGE.raise_to(GREEN) is GREEN
    assert NONE.raise_to(WHITE) is WHITE
