"""Snapshot graph model and the algorithms driving the diagram view."""

from .model import DiffSnapshot, Group, InputBlock, InputEdge, InputNode, Snapshot
from .diagram import Diagram, Figure, resolve_text
from .selection import SelectionColor, compute_colors
from .sequence import compute_visible, resolve_unhidden
from .window import RangeWindow, resolve_current_graph

__all__ = [
    "DiffSnapshot",
    "Group",
    "InputBlock",
    "InputEdge",
    "InputNode",
    "Snapshot",
    "Diagram",
    "Figure",
    "resolve_text",
    "SelectionColor",
    "compute_colors",
    "compute_visible",
    "resolve_unhidden",
    "RangeWindow",
    "resolve_current_graph",
]
