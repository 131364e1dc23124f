"""Turn the current snapshot into a filtered diagram."""

from __future__ import annotations

import logging

from ..config import Config
from ..filters.chain import FilterChain
from ..filters.color import diff_state_filter
from ..graph.diagram import Diagram
from ..graph.model import Snapshot
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


class SchedulerMissingError(RuntimeError):
    """Raised when a snapshot needs blocks but no scheduler is configured."""


class DiagramBuilder:
    """Schedule, label and filter a snapshot into a fresh :class:`Diagram`.

    Parameters
    ----------
    scheduler:
        Service assigning blocks to snapshots without any. Only consulted
        when a snapshot has no blocks yet.
    filter_chain:
        Primary chain applied to every diagram.
    sequence_filter_chain:
        Secondary chain applied after the primary one.
    node_text, node_short_text, node_tiny_text:
        Label templates; default to the values on :class:`Config`.
    """

    def __init__(
        self,
        scheduler: Scheduler | None,
        filter_chain: FilterChain,
        sequence_filter_chain: FilterChain,
        node_text: str | None = None,
        node_short_text: str | None = None,
        node_tiny_text: str | None = None,
    ) -> None:
        self.scheduler = scheduler
        self.filter_chain = filter_chain
        self.sequence_filter_chain = sequence_filter_chain
        full, short, tiny = Config.node_templates()
        self.node_text = node_text if node_text is not None else full
        self.node_short_text = node_short_text if node_short_text is not None else short
        self.node_tiny_text = node_tiny_text if node_tiny_text is not None else tiny

    def ensure_blocks(self, graph: Snapshot) -> None:
        """Schedule ``graph`` once if it has no blocks."""

        if graph.blocks:
            return
        if self.scheduler is None:
            raise SchedulerMissingError(
                f"no scheduler configured to assign blocks to {graph.name!r}"
            )
        graph.clear_blocks()
        self.scheduler.schedule(graph)
        graph.ensure_nodes_in_blocks()

    def rebuild(self, graph: Snapshot) -> Diagram:
        """Return a new diagram for ``graph``."""

        self.ensure_blocks(graph)
        diagram = Diagram(
            graph, self.node_text, self.node_short_text, self.node_tiny_text
        )
        self.filter_chain.apply(diagram, self.sequence_filter_chain)
        if graph.is_diff_graph:
            diff_state_filter().apply(diagram)
        logger.debug(
            "rebuilt diagram for %s with %d figures", graph.name, len(diagram.figures)
        )
        return diagram
