"""CLI command implementations exposed via `fontloader.ui.cli`."""

from __future__ import annotations

from .inspect import inspect
from .probe import probe
from .register import register


__all__ = ["inspect", "probe", "register"]
