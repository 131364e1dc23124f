"""Range window over the visible snapshots and current-graph resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .model import Snapshot


@dataclass
class RangeWindow:
    """Pair of indices selecting one snapshot or a comparison pair.

    ``low`` is the anchor of a comparison: moving the upper bound keeps it,
    and only an index below it moves it.
    """

    low: int = 0
    high: int = 0

    @property
    def is_single(self) -> bool:
        return self.low == self.high

    def set(self, low: int, high: int, size: int) -> bool:
        """Move the window to ``[low, high]`` and return whether it moved."""

        if not 0 <= low <= high < size:
            raise ValueError(
                f"window [{low}, {high}] is invalid for {size} positions"
            )
        moved = (low, high) != (self.low, self.high)
        self.low, self.high = low, high
        return moved

    def anchor_to(self, index: int, size: int) -> bool:
        """Extend or shrink the window towards ``index`` keeping the anchor."""

        if self.low <= index:
            return self.set(self.low, index, size)
        return self.set(index, self.high, size)

    def clamp(self, size: int) -> None:
        """Pull both bounds inside ``size`` positions."""

        last = max(size - 1, 0)
        self.high = min(self.high, last)
        self.low = min(self.low, self.high)


def _unwrap(snapshot: Snapshot, first: bool) -> Snapshot:
    if not snapshot.is_diff_graph:
        return snapshot
    inner = snapshot.first_graph if first else snapshot.second_graph
    if inner is None or inner.is_diff_graph:
        raise ValueError(
            f"cannot compare nested difference snapshot {snapshot.name!r}"
        )
    return inner


def first_snapshot(window: RangeWindow, visible: Sequence[Snapshot]) -> Snapshot:
    """Return the snapshot at the lower bound, unwrapping a difference."""

    if window.low < len(visible):
        snapshot = visible[window.low]
    else:
        snapshot = visible[-1]
    return _unwrap(snapshot, first=True)


def second_snapshot(window: RangeWindow, visible: Sequence[Snapshot]) -> Snapshot:
    """Return the snapshot at the upper bound, unwrapping a difference."""

    if window.high < len(visible):
        return _unwrap(visible[window.high], first=False)
    return first_snapshot(window, visible)


def resolve_current_graph(first: Snapshot, second: Snapshot, diff_service) -> Snapshot:
    """Return ``first`` when both bounds agree, else their difference."""

    if first is second:
        return first
    return diff_service.create_diff_graph(first, second)
