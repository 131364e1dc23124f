"""Highlight colors for the snapshot slider derived from a node selection."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Sequence, Set

from .model import InputNode, Snapshot


class SelectionColor(Enum):
    """Slider highlight, ordered by priority."""

    NONE = 0
    WHITE = 1
    ORANGE = 2
    GREEN = 3

    def raise_to(self, other: "SelectionColor") -> "SelectionColor":
        """Return the higher priority of ``self`` and ``other``."""

        return other if other.value > self.value else self


def normalize_ids(ids: Iterable[int]) -> Set[int]:
    """Map reference-variant (negative) ids onto their canonical node id."""

    return {abs(i) for i in ids}


def compute_colors(
    selected_ids: Iterable[int], visible: Sequence[Snapshot]
) -> List[SelectionColor]:
    """Return one highlight color per position of ``visible``.

    For every selected node the first snapshot containing it is green, later
    snapshots where it is unchanged are white and those where it changed
    are orange. Colors are only ever raised so the result does not depend on
    the order in which ids are visited.
    """

    colors = [SelectionColor.NONE] * len(visible)
    for node_id in normalize_ids(selected_ids):
        last: InputNode | None = None
        for index, snapshot in enumerate(visible):
            current = snapshot.get_node(node_id)
            if current is not None:
                if last is None:
                    target = SelectionColor.GREEN
                elif last == current and last.properties == current.properties:
                    target = SelectionColor.WHITE
                else:
                    target = SelectionColor.ORANGE
                colors[index] = colors[index].raise_to(target)
            last = current
    return colors
