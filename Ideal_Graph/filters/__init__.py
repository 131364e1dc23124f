"""Filter chains applied to rebuilt diagrams."""

from .chain import Filter, FilterChain
from .color import ColorFilter, ColorRule, PropertyMatcher, diff_state_filter

__all__ = [
    "Filter",
    "FilterChain",
    "ColorFilter",
    "ColorRule",
    "PropertyMatcher",
    "diff_state_filter",
]
