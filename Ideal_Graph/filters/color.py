"""Color filters assigning figure colors from property matches."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List

from ..graph.diagram import Diagram, Figure
from .chain import Filter

Selector = Callable[[Figure], bool]

#: Overlay applied to difference snapshots, keyed on the node ``state``
DIFF_STATE_COLORS = {
    "same": "white",
    "changed": "orange",
    "new": "green",
    "deleted": "red",
}


class PropertyMatcher:
    """Select figures whose node property fully matches ``regex``."""

    def __init__(self, name: str, regex: str) -> None:
        self.name = name
        self._pattern = re.compile(regex)

    def __call__(self, figure: Figure) -> bool:
        value = figure.node.properties.get(self.name)
        return value is not None and self._pattern.fullmatch(value) is not None


@dataclass
class ColorRule:
    selector: Selector
    color: str


class ColorFilter(Filter):
    """Color every figure picked by each rule; later rules win."""

    def __init__(self, name: str = "", rules: List[ColorRule] | None = None) -> None:
        super().__init__(name)
        self.rules: List[ColorRule] = list(rules or [])

    def add_rule(self, rule: ColorRule) -> None:
        self.rules.append(rule)

    def apply(self, diagram: Diagram) -> None:
        for rule in self.rules:
            for figure in diagram.figures:
                if rule.selector(figure):
                    figure.color = rule.color


def state_color_rule(state: str, color: str) -> ColorRule:
    return ColorRule(PropertyMatcher("state", state), color)


def diff_state_filter() -> ColorFilter:
    """Return the fixed overlay coloring difference snapshot nodes by state."""

    return ColorFilter(
        "diff state",
        [state_color_rule(state, color) for state, color in DIFF_STATE_COLORS.items()],
    )
