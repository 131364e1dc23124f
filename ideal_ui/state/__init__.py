"""State management for diagram views."""

from .DiagramView import DiagramViewModel, Subscription

__all__ = [
    "DiagramViewModel",
    "Subscription",
]
