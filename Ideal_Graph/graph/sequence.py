"""Derive the visible subsequence of a group's snapshots."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .model import Snapshot


def compute_visible(
    snapshots: Iterable[Snapshot], hide_duplicates: bool
) -> List[Snapshot]:
    """Return the snapshots shown to the user, in group order.

    When ``hide_duplicates`` is set, snapshots flagged as duplicates of their
    predecessor are skipped. The returned list holds the same objects as
    ``snapshots``.
    """

    return [s for s in snapshots if not (hide_duplicates and s.is_duplicate)]


def index_of(snapshots: Sequence[Snapshot], snapshot: Snapshot) -> int:
    """Return the position of ``snapshot`` by identity, or ``-1``."""

    for i, candidate in enumerate(snapshots):
        if candidate is snapshot:
            return i
    return -1


def resolve_unhidden(snapshots: Sequence[Snapshot], snapshot: Snapshot) -> Snapshot:
    """Back ``snapshot`` up to the nearest preceding non-duplicate.

    The walk happens in the unfiltered ``snapshots`` so that hiding
    duplicates never leaves the selection on a hidden snapshot. A leading run
    of duplicates resolves forward to the first non-duplicate instead.
    """

    start = index_of(snapshots, snapshot)
    if start == -1:
        raise ValueError(f"snapshot {snapshot.name!r} is not in the sequence")
    index = start
    while index >= 0 and snapshots[index].is_duplicate:
        index -= 1
    if index >= 0:
        return snapshots[index]
    for candidate in snapshots[start + 1 :]:
        if not candidate.is_duplicate:
            return candidate
    raise ValueError("every snapshot in the sequence is a duplicate")


def positions(visible: Iterable[Snapshot]) -> List[str]:
    """Return slider labels for ``visible``."""

    return [s.name for s in visible]
