"""Renderable diagram built from one snapshot."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping

from .model import InputNode, Snapshot

_PLACEHOLDER = re.compile(r"\[([^\[\]]+)\]")


def resolve_text(template: str, properties: Mapping[str, str]) -> str:
    """Replace ``[key]`` placeholders in ``template`` with property values.

    Unknown keys render as ``?``.
    """

    return _PLACEHOLDER.sub(lambda m: properties.get(m.group(1), "?"), template)


@dataclass(eq=False)
class Figure:
    """Visual counterpart of one snapshot node."""

    node: InputNode
    lines: List[str] = field(default_factory=list)
    color: str = "default"
    visible: bool = True
    block: str | None = None

    @property
    def id(self) -> int:
        return self.node.id

    @property
    def label(self) -> str:
        return self.lines[0] if self.lines else ""


class Diagram:
    """Figures of a snapshot labelled with the full, short and tiny templates.

    Filters mutate the figures in place; the diagram itself is replaced on
    every rebuild.
    """

    def __init__(
        self,
        graph: Snapshot,
        node_text: str,
        node_short_text: str,
        node_tiny_text: str,
    ) -> None:
        self.graph = graph
        self.cfg = False
        self._figures: Dict[int, Figure] = {}
        for node in graph.nodes.values():
            props = {"idx": str(node.id), **node.properties}
            block = graph.block_of(node.id)
            self._figures[node.id] = Figure(
                node=node,
                lines=[
                    resolve_text(node_text, props),
                    resolve_text(node_short_text, props),
                    resolve_text(node_tiny_text, props),
                ],
                block=block.name if block is not None else None,
            )

    @property
    def figures(self) -> List[Figure]:
        return list(self._figures.values())

    def figure_for(self, node_id: int) -> Figure | None:
        return self._figures.get(node_id)

    def figures_for(self, node_ids: Iterable[int]) -> List[Figure]:
        """Return figures whose node id is in ``node_ids``."""

        wanted = set(node_ids)
        return [f for f in self._figures.values() if f.id in wanted]
