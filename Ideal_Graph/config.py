# config.py

import json
import logging
import os
import sys
from enum import Enum


class DefaultView(Enum):
    """Initial display mode of a newly opened diagram view."""

    SEA_OF_NODES = "sea-of-nodes"
    CLUSTERED_SEA_OF_NODES = "clustered-sea-of-nodes"
    CONTROL_FLOW_GRAPH = "control-flow-graph"


class Config:
    """Global viewer configuration, optionally loaded from a settings file.

    Attributes
    ----------
    default_view:
        Display mode selected when a view opens. One of ``"sea-of-nodes"``,
        ``"clustered-sea-of-nodes"`` or ``"control-flow-graph"``.
    node_text:
        Template for the full figure label. ``[key]`` placeholders are
        replaced with node properties; ``[idx]`` is the node id.
    node_short_text:
        Template used when figures are drawn at reduced size.
    node_tiny_text:
        Template used when figures are drawn at minimal size.
    hide_duplicates:
        Whether new views start with duplicate snapshots hidden.
    log_level:
        Name of the logging level passed to :func:`configure_logging`.
    log_file:
        Optional path receiving log records instead of ``stderr``.
    """

    base_dir = os.path.abspath(os.path.dirname(__file__))
    config_file = os.path.join(base_dir, "input", "config.json")

    default_view = DefaultView.SEA_OF_NODES.value
    node_text = "[idx] [name]"
    node_short_text = "[idx] [name]"
    node_tiny_text = "[idx]"
    hide_duplicates = False

    log_level = "info"
    log_file: str | None = None

    @classmethod
    def view_mode(cls) -> DefaultView:
        """Return :attr:`default_view` as a :class:`DefaultView`."""
        return DefaultView(cls.default_view)

    @classmethod
    def node_templates(cls) -> tuple[str, str, str]:
        """Return the full, short and tiny label templates."""
        return cls.node_text, cls.node_short_text, cls.node_tiny_text

    @classmethod
    def load_from_file(cls, path: str) -> None:
        """Load configuration values from a JSON or YAML file.

        Only keys that already exist as attributes on ``Config`` are
        assigned. Files ending in ``.yaml`` or ``.yml`` are parsed with
        PyYAML, anything else as JSON.

        Parameters
        ----------
        path:
            Path to the configuration file.
        """
        data = _read(path)
        if "default_view" in data:
            try:
                DefaultView(data["default_view"])
            except ValueError:
                logging.getLogger(__name__).warning(
                    "rejecting default_view %r from %s", data["default_view"], path
                )
                raise ValueError(
                    f"default_view must be one of "
                    f"{[v.value for v in DefaultView]}, got {data['default_view']!r}"
                ) from None

        cls.config_file = os.path.abspath(path)
        for key, value in data.items():
            if key.startswith("_") or not hasattr(cls, key):
                continue
            if callable(getattr(cls, key)) or key in {"base_dir", "config_file"}:
                continue
            setattr(cls, key, value)


def _read(path: str) -> dict:
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    with open(path) as f:
        if path.endswith((".yaml", ".yml")):
            import yaml

            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping")
    return data


def load_config(path: str | None = None) -> dict:
    """Load configuration from ``path`` and return the data."""
    if path is None:
        path = Config.config_file
    Config.load_from_file(path)
    return _read(path)


def configure_logging() -> None:
    """Configure application logging and capture uncaught exceptions."""

    logging.basicConfig(
        level=getattr(logging, str(Config.log_level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=Config.log_file,
        filemode="a",
    )

    def _log_excepthook(exc_type, exc, tb) -> None:
        logging.getLogger(__name__).exception(
            "Uncaught exception", exc_info=(exc_type, exc, tb)
        )

    sys.excepthook = _log_excepthook
