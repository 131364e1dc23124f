"""Structural difference of two snapshots."""

from __future__ import annotations

from ..graph.model import DiffSnapshot, InputEdge, Snapshot


class Difference:
    """Build :class:`DiffSnapshot` objects from pairs of snapshots.

    Nodes are matched by id. A node present in both inputs is ``same`` when
    its properties agree and ``changed`` otherwise; nodes only in ``a`` are
    ``deleted`` and nodes only in ``b`` are ``new``. Edges get the same
    tagging, keyed by endpoints and ports. The inputs are never modified.
    """

    def create_diff_graph(self, a: Snapshot, b: Snapshot) -> DiffSnapshot:
        diff = DiffSnapshot(
            name=f"Difference {a.name} -> {b.name}", first_graph=a, second_graph=b
        )

        for node_id, node in a.nodes.items():
            other = b.get_node(node_id)
            if other is None:
                diff.add_node(node_id, **{**node.properties, "state": "deleted"})
            elif other.properties == node.properties:
                diff.add_node(node_id, **{**other.properties, "state": "same"})
            else:
                diff.add_node(node_id, **{**other.properties, "state": "changed"})
        for node_id, node in b.nodes.items():
            if node_id not in a.nodes:
                diff.add_node(node_id, **{**node.properties, "state": "new"})

        def key(e: InputEdge) -> tuple:
            return (e.source, e.target, e.source_index, e.target_index)

        edges_a = {key(e): e for e in a.edges}
        edges_b = {key(e): e for e in b.edges}
        for k, edge in edges_a.items():
            state = "same" if k in edges_b else "deleted"
            diff.edges.append(_tagged(edge, state))
        for k, edge in edges_b.items():
            if k not in edges_a:
                diff.edges.append(_tagged(edge, "new"))
        return diff


def _tagged(edge: InputEdge, state: str) -> InputEdge:
    return InputEdge(
        edge.source,
        edge.target,
        edge.source_index,
        edge.target_index,
        edge.label,
        state=state,
    )
