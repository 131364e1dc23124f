"""Ordered filter chains shared between diagram views."""

from __future__ import annotations

from typing import List

from PySide6.QtCore import QObject, Signal

from ..graph.diagram import Diagram


class Filter:
    """A named transformation of a diagram's figures."""

    def __init__(self, name: str = "") -> None:
        self.name = name

    def apply(self, diagram: Diagram) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class FilterChain(QObject):
    """Ordered list of filters with a change notification.

    Chains are long-lived and shared by every view of a group, so views
    subscribe to :attr:`changed` and must disconnect when they close.
    """

    changed = Signal()

    def __init__(self, filters: List[Filter] | None = None) -> None:
        super().__init__()
        self._filters: List[Filter] = list(filters or [])

    @property
    def filters(self) -> List[Filter]:
        return list(self._filters)

    def __contains__(self, item: Filter) -> bool:
        return item in self._filters

    # ------------------------------------------------------------------
    def add_filter(self, item: Filter) -> None:
        """Append ``item`` to the chain."""
        self._filters.append(item)
        self.changed.emit()

    def remove_filter(self, item: Filter) -> None:
        self._filters.remove(item)
        self.changed.emit()

    def move_up(self, item: Filter) -> None:
        """Swap ``item`` with its predecessor."""
        i = self._filters.index(item)
        if i > 0:
            self._filters[i - 1], self._filters[i] = self._filters[i], self._filters[i - 1]
            self.changed.emit()

    def move_down(self, item: Filter) -> None:
        """Swap ``item`` with its successor."""
        i = self._filters.index(item)
        if i < len(self._filters) - 1:
            self._filters[i + 1], self._filters[i] = self._filters[i], self._filters[i + 1]
            self.changed.emit()

    def clear(self) -> None:
        self._filters.clear()
        self.changed.emit()

    def notify_changed(self) -> None:
        """Signal that a filter's rules were edited in place."""
        self.changed.emit()

    # ------------------------------------------------------------------
    def apply(self, diagram: Diagram, sequence: "FilterChain | None" = None) -> None:
        """Apply every filter in order, then the optional ``sequence`` chain."""

        for item in self._filters:
            item.apply(diagram)
        if sequence is not None and sequence is not self:
            sequence.apply(diagram)
