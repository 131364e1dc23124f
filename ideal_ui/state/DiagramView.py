"""View-model driving one diagram view over a group of snapshots."""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable, Deque, Iterable, Iterator, List, Set, Tuple

from PySide6.QtCore import QObject, Property, Signal, Slot

from Ideal_Graph.config import Config, DefaultView
from Ideal_Graph.filters.chain import FilterChain
from Ideal_Graph.graph.diagram import Diagram, Figure
from Ideal_Graph.graph.model import Group, Snapshot
from Ideal_Graph.graph.selection import SelectionColor, compute_colors
from Ideal_Graph.graph.sequence import (
    compute_visible,
    index_of,
    positions,
    resolve_unhidden,
)
from Ideal_Graph.graph.window import (
    RangeWindow,
    first_snapshot,
    resolve_current_graph,
    second_snapshot,
)
from Ideal_Graph.services.builder import DiagramBuilder
from Ideal_Graph.services.difference import Difference
from Ideal_Graph.services.scheduler import Scheduler

logger = logging.getLogger(__name__)


class Subscription:
    """Handle for one signal connection; :meth:`remove` disconnects it."""

    def __init__(self, signal: Any, slot: Callable[..., Any]) -> None:
        self._signal = signal
        self._slot = slot
        signal.connect(slot)
        self.active = True

    def remove(self) -> None:
        if self.active:
            self._signal.disconnect(self._slot)
            self.active = False


class DiagramViewModel(QObject):
    """Select snapshots of a group and keep the matching diagram current.

    The window selects either one visible snapshot or a pair to compare; the
    current graph is that snapshot or the difference of the pair. Changes
    are reported synchronously through :attr:`graphChanged`,
    :attr:`diagramChanged`, :attr:`selectedNodesChanged` and
    :attr:`hiddenNodesChanged`; :attr:`windowChanged` tells the slider that
    positions, colors or bounds moved.

    A listener that mutates the model while a notification is delivered is
    queued and runs once the current mutation has finished, before the
    outermost call returns. Mutations are dropped while the group is empty
    and after :meth:`close`.
    """

    diagramChanged = Signal()
    graphChanged = Signal()
    selectedNodesChanged = Signal()
    hiddenNodesChanged = Signal()
    windowChanged = Signal()

    def __init__(
        self,
        graph: Snapshot,
        filter_chain: FilterChain,
        sequence_filter_chain: FilterChain,
        scheduler: Scheduler | None,
        diff_service: Any = None,
        hide_duplicates: bool | None = None,
    ) -> None:
        super().__init__()
        if graph.group is None:
            raise ValueError(f"snapshot {graph.name!r} does not belong to a group")
        self._group: Group = graph.group
        self._filter_chain = filter_chain
        self._sequence_filter_chain = sequence_filter_chain
        self._builder = DiagramBuilder(scheduler, filter_chain, sequence_filter_chain)
        self._diff_service = diff_service if diff_service is not None else Difference()

        mode = Config.view_mode()
        self._show_sea = mode is DefaultView.SEA_OF_NODES
        self._show_blocks = mode is DefaultView.CLUSTERED_SEA_OF_NODES
        self._show_cfg = mode is DefaultView.CONTROL_FLOW_GRAPH
        self._show_node_hull = True
        self._show_empty_blocks = True
        self._hide_duplicates = (
            Config.hide_duplicates if hide_duplicates is None else hide_duplicates
        )

        self._graphs: List[Snapshot] = []
        self._window = RangeWindow()
        self._positions: List[str] = []
        self._colors: List[SelectionColor] = []
        self._selected_nodes: Set[int] = set()
        self._hidden_nodes: Set[int] = set()
        self._endpoints: Tuple[Snapshot, Snapshot] | None = None
        self._cached_graph: Snapshot | None = None
        self._diagram: Diagram | None = None

        self._closed = False
        self._busy = False
        self._pending: Deque[Tuple[Callable[..., None], tuple]] = deque()

        self._filter_graphs()
        self._select_graph(graph)

        self._subscriptions = [
            Subscription(self._group.changed, self._on_group_changed),
            Subscription(filter_chain.changed, self._on_filter_chain_changed),
            Subscription(sequence_filter_chain.changed, self._on_filter_chain_changed),
        ]

    # ------------------------------------------------------------------
    # accessors

    @property
    def group(self) -> Group:
        return self._group

    @property
    def filter_chain(self) -> FilterChain:
        return self._filter_chain

    @property
    def sequence_filter_chain(self) -> FilterChain:
        return self._sequence_filter_chain

    @property
    def graphs(self) -> List[Snapshot]:
        """Visible snapshots in group order."""
        return list(self._graphs)

    @property
    def positions(self) -> List[str]:
        return list(self._positions)

    @property
    def colors(self) -> List[SelectionColor]:
        return list(self._colors)

    @property
    def window(self) -> Tuple[int, int]:
        """Current ``(low, high)`` window bounds."""
        return self._window.low, self._window.high

    @property
    def graph(self) -> Snapshot:
        """The selected snapshot or the difference of the selected pair."""
        return self._cached_graph

    @property
    def diagram(self) -> Diagram:
        self._diagram.cfg = self._show_cfg
        return self._diagram

    @property
    def selected_nodes(self) -> Set[int]:
        return set(self._selected_nodes)

    @property
    def hidden_nodes(self) -> Set[int]:
        return set(self._hidden_nodes)

    @property
    def closed(self) -> bool:
        return self._closed

    def first_graph(self) -> Snapshot:
        return first_snapshot(self._window, self._graphs)

    def second_graph(self) -> Snapshot:
        return second_snapshot(self._window, self._graphs)

    def graphs_forward(self) -> Iterator[Snapshot]:
        """Yield visible snapshots after the lower bound."""
        yield from self._graphs[self._window.low + 1 :]

    def graphs_backward(self) -> Iterator[Snapshot]:
        """Yield visible snapshots before the lower bound, nearest first."""
        yield from reversed(self._graphs[: self._window.low])

    def selected_figures(self) -> List[Figure]:
        """Figures of the current diagram whose node is selected."""
        return self._diagram.figures_for(self._selected_nodes)

    # ------------------------------------------------------------------
    # display toggles

    def _get_show_sea(self) -> bool:
        return self._show_sea

    def _set_show_sea(self, value: bool) -> None:
        self._mutate(self._set_flag, "_show_sea", value)

    showSea = Property(bool, _get_show_sea, _set_show_sea, notify=diagramChanged)

    def _get_show_blocks(self) -> bool:
        return self._show_blocks

    def _set_show_blocks(self, value: bool) -> None:
        self._mutate(self._set_flag, "_show_blocks", value)

    showBlocks = Property(bool, _get_show_blocks, _set_show_blocks, notify=diagramChanged)

    def _get_show_cfg(self) -> bool:
        return self._show_cfg

    def _set_show_cfg(self, value: bool) -> None:
        self._mutate(self._set_flag, "_show_cfg", value)

    showCFG = Property(bool, _get_show_cfg, _set_show_cfg, notify=diagramChanged)

    def _get_show_node_hull(self) -> bool:
        return self._show_node_hull

    def _set_show_node_hull(self, value: bool) -> None:
        self._mutate(self._set_flag, "_show_node_hull", value)

    showNodeHull = Property(
        bool, _get_show_node_hull, _set_show_node_hull, notify=diagramChanged
    )

    def _get_show_empty_blocks(self) -> bool:
        return self._show_empty_blocks

    def _set_show_empty_blocks(self, value: bool) -> None:
        self._mutate(self._set_flag, "_show_empty_blocks", value)

    showEmptyBlocks = Property(
        bool, _get_show_empty_blocks, _set_show_empty_blocks, notify=diagramChanged
    )

    def _get_hide_duplicates(self) -> bool:
        return self._hide_duplicates

    hideDuplicates = Property(
        bool,
        _get_hide_duplicates,
        lambda self, value: self.set_hide_duplicates(value),
        notify=diagramChanged,
    )

    def _set_flag(self, attr: str, value: bool) -> None:
        value = bool(value)
        if getattr(self, attr) != value:
            setattr(self, attr, value)
            self.diagramChanged.emit()

    # ------------------------------------------------------------------
    # public mutations

    @Slot(object)
    def select_graph(self, graph: Snapshot) -> None:
        """Select ``graph`` alone, unhiding duplicates if it is hidden."""
        self._mutate(self._select_graph, graph)

    @Slot(object)
    def select_diff_graph(self, graph: Snapshot) -> None:
        """Compare ``graph`` against the anchored lower bound."""
        self._mutate(self._select_diff_graph, graph)

    @Slot(int, int)
    def set_positions(self, low: int, high: int) -> None:
        """Move the window to ``[low, high]`` as the slider widget does."""
        self._mutate(self._set_window, low, high)

    @Slot(bool)
    def set_hide_duplicates(self, value: bool) -> None:
        self._mutate(self._set_hide_duplicates, bool(value))

    def set_selected_nodes(self, nodes: Iterable[int]) -> None:
        """Select ``nodes``; negative ids refer to the node ``abs(id)``."""
        self._mutate(self._set_selected_nodes, set(nodes))

    def set_hidden_nodes(self, nodes: Iterable[int]) -> None:
        self._mutate(self._set_hidden_nodes, set(nodes))

    def show_only(self, nodes: Iterable[int]) -> None:
        """Hide every node of the group except ``nodes``."""
        self._mutate(self._show_only, set(nodes))

    def show_figures(self, figures: Iterable[Figure]) -> None:
        """Unhide the nodes behind ``figures``."""
        self._mutate(self._show_figures, [f.id for f in figures])

    @Slot()
    def close(self) -> None:
        """Disconnect from the group and filter chains."""
        if self._closed:
            return
        for subscription in self._subscriptions:
            subscription.remove()
        self._closed = True
        self._pending.clear()
        self.windowChanged.emit()

    # ------------------------------------------------------------------
    # mutation dispatch

    def _mutate(self, action: Callable[..., None], *args: Any) -> None:
        if self._closed:
            logger.debug("dropping %s on closed view", action.__name__)
            return
        if len(self._group) == 0:
            logger.debug("dropping %s on empty group %r", action.__name__, self._group.name)
            return
        if self._busy:
            logger.debug("queueing nested %s", action.__name__)
            self._pending.append((action, args))
            return
        self._busy = True
        try:
            action(*args)
            while self._pending:
                queued, queued_args = self._pending.popleft()
                if self._closed or len(self._group) == 0:
                    break
                queued(*queued_args)
        finally:
            self._pending.clear()
            self._busy = False

    def _on_group_changed(self) -> None:
        self._mutate(self._group_changed)

    def _on_filter_chain_changed(self) -> None:
        self._mutate(self._filter_chain_changed)

    # ------------------------------------------------------------------
    # internals

    def _filter_graphs(self) -> None:
        self._graphs = compute_visible(self._group.snapshots, self._hide_duplicates)
        self._positions = positions(self._graphs)
        self._colors = compute_colors(self._selected_nodes, self._graphs)
        self._window.clamp(len(self._graphs))

    def _locate(self, graph: Snapshot) -> int:
        index = index_of(self._graphs, graph)
        if index == -1 and self._hide_duplicates:
            # hidden duplicate: unhide and retry
            self._set_hide_duplicates(False)
            index = index_of(self._graphs, graph)
        if index == -1:
            raise ValueError(
                f"snapshot {graph.name!r} does not belong to group {self._group.name!r}"
            )
        return index

    def _select_graph(self, graph: Snapshot) -> bool:
        index = self._locate(graph)
        return self._set_window(index, index)

    def _select_diff_graph(self, graph: Snapshot) -> None:
        index = self._locate(graph)
        self._window.anchor_to(index, len(self._graphs))
        self._window_changed()

    def _set_window(self, low: int, high: int) -> bool:
        self._window.set(low, high, len(self._graphs))
        return self._window_changed()

    def _window_changed(self) -> bool:
        """Re-resolve the current graph; return whether it was rebuilt."""
        first, second = self.first_graph(), self.second_graph()
        rebuilt = self._endpoints != (first, second)
        if rebuilt:
            logger.debug("window moved to [%d, %d]", self._window.low, self._window.high)
            self._endpoints = (first, second)
            self._cached_graph = resolve_current_graph(first, second, self._diff_service)
            self._diagram = self._builder.rebuild(self._cached_graph)
            self.graphChanged.emit()
            self.diagramChanged.emit()
        self.windowChanged.emit()
        return rebuilt

    def _set_hide_duplicates(self, value: bool) -> None:
        if value == self._hide_duplicates:
            return
        if not self._graphs:
            self._hide_duplicates = value
            self._filter_graphs()
            return
        current = self.first_graph()
        if index_of(self._group.snapshots, current) == -1:
            current = self._graphs[min(self._window.low, len(self._graphs) - 1)]
        if value:
            current = resolve_unhidden(self._group.snapshots, current)
        self._hide_duplicates = value
        self._filter_graphs()
        if not self._select_graph(current):
            self.diagramChanged.emit()

    def _item_at(self, index: int) -> Snapshot | None:
        return self._graphs[index] if index < len(self._graphs) else None

    def _group_changed(self) -> None:
        low_target = self._item_at(self._window.low)
        high_target = self._item_at(self._window.high)
        self._filter_graphs()
        if not self._graphs and self._hide_duplicates:
            # only duplicates left
            logger.debug("showing duplicates of %r to keep a selection", self._group.name)
            self._hide_duplicates = False
            self._filter_graphs()
        low = index_of(self._graphs, low_target) if low_target is not None else -1
        high = index_of(self._graphs, high_target) if high_target is not None else -1
        if low >= 0:
            self._window.set(low, max(low, high), len(self._graphs))
        if not self._window_changed():
            self.diagramChanged.emit()
        self._set_selected_nodes(self._selected_nodes)

    def _filter_chain_changed(self) -> None:
        self._diagram = self._builder.rebuild(self._cached_graph)
        self.diagramChanged.emit()

    def _set_selected_nodes(self, nodes: Set[int]) -> None:
        self._selected_nodes = nodes
        self._colors = compute_colors(nodes, self._graphs)
        self.windowChanged.emit()
        self.selectedNodesChanged.emit()

    def _set_hidden_nodes(self, nodes: Set[int]) -> None:
        self._hidden_nodes = nodes
        self.hiddenNodesChanged.emit()

    def _show_only(self, nodes: Set[int]) -> None:
        self._set_hidden_nodes(self._group.get_all_nodes() - nodes)

    def _show_figures(self, node_ids: List[int]) -> None:
        self._set_hidden_nodes(self._hidden_nodes.difference(node_ids))
