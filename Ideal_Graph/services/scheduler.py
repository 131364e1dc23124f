"""Block scheduling services."""

from __future__ import annotations

import logging

import networkx as nx

from ..graph.model import Snapshot

logger = logging.getLogger(__name__)


class Scheduler:
    """Assign control-flow blocks to a snapshot with no blocks."""

    def schedule(self, snapshot: Snapshot) -> None:
        raise NotImplementedError


class ComponentScheduler(Scheduler):
    """Place each weakly connected component of a snapshot in a block.

    Blocks are named ``B0``, ``B1``, ... ordered by their smallest node id.
    Components share no edges, so blocks have no successors. Snapshots that
    already have blocks are left untouched.
    """

    def schedule(self, snapshot: Snapshot) -> None:
        if snapshot.blocks:
            return

        g = nx.DiGraph()
        g.add_nodes_from(snapshot.nodes)
        g.add_edges_from((e.source, e.target) for e in snapshot.edges)

        components = sorted(
            (sorted(c) for c in nx.weakly_connected_components(g)),
            key=lambda members: members[0],
        )
        for i, members in enumerate(components):
            snapshot.add_block(f"B{i}", members)

        logger.debug(
            "scheduled %s into %d blocks", snapshot.name, len(snapshot.blocks)
        )
