import sys
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

pytest.importorskip("PySide6")

from Ideal_Graph.config import Config
from Ideal_Graph.graph.model import Group
from tests.snapshot_utils import CountingDifference, CountingScheduler, make_snapshot

_CONFIG_KEYS = (
    "default_view",
    "node_text",
    "node_short_text",
    "node_tiny_text",
    "hide_duplicates",
    "log_level",
    "log_file",
    "config_file",
)


@pytest.fixture(autouse=True)
def _restore_config() -> None:
    """Reset global configuration after each test."""

    saved = {key: getattr(Config, key) for key in _CONFIG_KEYS}
    yield
    for key, value in saved.items():
        setattr(Config, key, value)


@pytest.fixture
def scheduler() -> CountingScheduler:
    return CountingScheduler()


@pytest.fixture
def diff_service() -> CountingDifference:
    return CountingDifference()


@pytest.fixture
def group() -> Group:
    """Five snapshots; S2 and S3 duplicate S1."""

    return Group(
        "compile",
        [
            make_snapshot("S0", {1: {"name": "Start"}, 2: {"name": "Add", "p": "1"}}),
            make_snapshot("S1", {2: {"name": "Add", "p": "1"}, 3: {"name": "Ret"}}),
            make_snapshot(
                "S2", {2: {"name": "Add", "p": "1"}, 3: {"name": "Ret"}}, duplicate=True
            ),
            make_snapshot(
                "S3", {2: {"name": "Add", "p": "1"}, 3: {"name": "Ret"}}, duplicate=True
            ),
            make_snapshot("S4", {2: {"name": "Add", "p": "2"}, 3: {"name": "Ret"}}),
        ],
    )
