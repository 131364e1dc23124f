from __future__ import annotations

from typing import Dict, List, TypedDict

# Reusable typed mappings for snapshot dictionaries

NodeDict = TypedDict(
    "NodeDict",
    {
        "id": int,
        "properties": Dict[str, str],
    },
    total=False,
)

EdgeDict = TypedDict(
    "EdgeDict",
    {
        "from": int,
        "to": int,
        "from_index": int,
        "to_index": int,
        "label": str,
        "state": str,
    },
    total=False,
)

BlockDict = TypedDict(
    "BlockDict",
    {
        "name": str,
        "nodes": List[int],
        "successors": List[str],
    },
    total=False,
)

SnapshotDict = TypedDict(
    "SnapshotDict",
    {
        "id": int,
        "name": str,
        "properties": Dict[str, str],
        "nodes": List[NodeDict],
        "edges": List[EdgeDict],
        "blocks": List[BlockDict],
    },
    total=False,
)
