"""Ideal_Graph package initialization."""

from __future__ import annotations

from .config import Config, DefaultView, load_config

__all__ = ["Config", "DefaultView", "load_config"]
