"""In-memory snapshots of compiler pipeline graphs and their groups."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from PySide6.QtCore import QObject, Signal

from .types import SnapshotDict

#: Property marking a snapshot as identical to its predecessor
DUPLICATE_PROPERTY = "_isDuplicate"
#: Block receiving nodes the scheduler did not place
NO_BLOCK = "(no block)"

_snapshot_ids = itertools.count()


@dataclass
class InputNode:
    """A node of one snapshot, compared by id and properties."""

    id: int
    properties: Dict[str, str] = field(default_factory=dict)


@dataclass
class InputEdge:
    """Directed edge between two node ids."""

    source: int
    target: int
    source_index: int = 0
    target_index: int = 0
    label: str = ""
    state: str = ""


@dataclass
class InputBlock:
    """A control-flow block grouping node ids."""

    name: str
    nodes: List[int] = field(default_factory=list)
    successors: List[str] = field(default_factory=list)


@dataclass(eq=False)
class Snapshot:
    """One capture of the compiler graph at a pipeline stage.

    Snapshots compare by identity: two captures with equal content are still
    different positions of their group.
    """

    name: str
    nodes: Dict[int, InputNode] = field(default_factory=dict)
    edges: List[InputEdge] = field(default_factory=list)
    blocks: Dict[str, InputBlock] = field(default_factory=dict)
    properties: Dict[str, str] = field(default_factory=dict)
    id: int = field(default_factory=lambda: next(_snapshot_ids))
    group: Optional["Group"] = field(default=None, repr=False)

    # ---- node access ----

    def get_node(self, node_id: int) -> InputNode | None:
        """Return the node with ``node_id`` or ``None`` when absent."""

        return self.nodes.get(node_id)

    def add_node(self, node_id: int, **properties: str) -> InputNode:
        """Insert a node, replacing any previous node with the same id."""

        node = InputNode(node_id, {k: str(v) for k, v in properties.items()})
        self.nodes[node_id] = node
        return node

    def add_edge(self, source: int, target: int, **kwargs) -> InputEdge:
        """Append an edge between two existing nodes."""

        if source not in self.nodes or target not in self.nodes:
            raise ValueError("source and target must exist in the snapshot")
        edge = InputEdge(source, target, **kwargs)
        self.edges.append(edge)
        return edge

    def node_ids(self) -> Set[int]:
        return set(self.nodes)

    # ---- flags ----

    @property
    def is_duplicate(self) -> bool:
        return self.properties.get(DUPLICATE_PROPERTY) is not None

    @property
    def is_diff_graph(self) -> bool:
        return False

    # ---- blocks ----

    def add_block(self, name: str, nodes: Iterable[int] = ()) -> InputBlock:
        """Create block ``name`` holding ``nodes``."""

        block = InputBlock(name, list(nodes))
        self.blocks[name] = block
        return block

    def clear_blocks(self) -> None:
        self.blocks.clear()

    def block_of(self, node_id: int) -> InputBlock | None:
        """Return the block containing ``node_id`` if any."""

        for block in self.blocks.values():
            if node_id in block.nodes:
                return block
        return None

    def ensure_nodes_in_blocks(self) -> None:
        """Attach every node without a block to the ``(no block)`` block."""

        placed = {nid for block in self.blocks.values() for nid in block.nodes}
        orphans = [nid for nid in self.nodes if nid not in placed]
        if not orphans:
            return
        block = self.blocks.get(NO_BLOCK) or self.add_block(NO_BLOCK)
        block.nodes.extend(orphans)

    # ---- serialization ----

    def to_dict(self) -> SnapshotDict:
        """Serialize the snapshot to a plain ``dict``.

        A :class:`DiffSnapshot` keeps its node and edge states but not the
        references to the two snapshots it was computed from.
        """

        return {
            "id": self.id,
            "name": self.name,
            "properties": dict(self.properties),
            "nodes": [
                {"id": n.id, "properties": dict(n.properties)}
                for n in self.nodes.values()
            ],
            "edges": [
                {
                    "from": e.source,
                    "to": e.target,
                    "from_index": e.source_index,
                    "to_index": e.target_index,
                    "label": e.label,
                    "state": e.state,
                }
                for e in self.edges
            ],
            "blocks": [
                {"name": b.name, "nodes": list(b.nodes), "successors": list(b.successors)}
                for b in self.blocks.values()
            ],
        }

    @classmethod
    def from_dict(cls, data: SnapshotDict) -> "Snapshot":
        """Construct a :class:`Snapshot` from ``data``."""

        snapshot = cls(name=data.get("name", ""))
        if "id" in data:
            snapshot.id = int(data["id"])
        snapshot.properties = {
            k: str(v) for k, v in data.get("properties", {}).items()
        }
        for node in data.get("nodes", []):
            snapshot.add_node(int(node["id"]), **node.get("properties", {}))
        for edge in data.get("edges", []):
            snapshot.add_edge(
                int(edge["from"]),
                int(edge["to"]),
                source_index=edge.get("from_index", 0),
                target_index=edge.get("to_index", 0),
                label=edge.get("label", ""),
                state=edge.get("state", ""),
            )
        for block in data.get("blocks", []):
            created = snapshot.add_block(block["name"], block.get("nodes", []))
            created.successors = list(block.get("successors", []))
        return snapshot


@dataclass(eq=False)
class DiffSnapshot(Snapshot):
    """Synthetic snapshot describing the difference of two snapshots.

    Every node carries a ``state`` property of ``same``, ``changed``,
    ``new`` or ``deleted``.
    """

    first_graph: Optional[Snapshot] = field(default=None, repr=False)
    second_graph: Optional[Snapshot] = field(default=None, repr=False)

    @property
    def is_diff_graph(self) -> bool:
        return True


class Group(QObject):
    """Ordered, mutable collection of snapshots from one compilation."""

    changed = Signal()

    def __init__(self, name: str = "", snapshots: Iterable[Snapshot] = ()) -> None:
        super().__init__()
        self.name = name
        self._snapshots: List[Snapshot] = []
        for snapshot in snapshots:
            snapshot.group = self
            self._snapshots.append(snapshot)

    @property
    def snapshots(self) -> List[Snapshot]:
        """Return a copy of the ordered snapshot list."""

        return list(self._snapshots)

    def __len__(self) -> int:
        return len(self._snapshots)

    def add_snapshot(self, snapshot: Snapshot) -> None:
        """Append ``snapshot`` and notify listeners."""

        snapshot.group = self
        self._snapshots.append(snapshot)
        self.changed.emit()

    def remove_snapshot(self, snapshot: Snapshot) -> None:
        """Remove ``snapshot`` (by identity) and notify listeners."""

        for i, existing in enumerate(self._snapshots):
            if existing is snapshot:
                del self._snapshots[i]
                self.changed.emit()
                return
        raise ValueError(f"snapshot {snapshot.name!r} is not part of {self.name!r}")

    def clear(self) -> None:
        """Remove every snapshot."""

        self._snapshots.clear()
        self.changed.emit()

    def get_all_nodes(self) -> Set[int]:
        """Return the union of node ids over all snapshots."""

        result: Set[int] = set()
        for snapshot in self._snapshots:
            result.update(snapshot.nodes)
        return result
