"""Helpers shared by CLI commands."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError
import typer

from fontloader.config import LoaderConfig, load_config
from fontloader.loader import FontLoader

from .state import emit_error


def build_loader(config_path: Path | None = None, backend: str | None = None) -> FontLoader:
    """Create a loader from the CLI options, exiting on invalid settings."""
    try:
        config = load_config(config_path)
        if backend is not None:
            config = LoaderConfig.model_validate({**config.model_dump(), "backend": backend})
    except (ValidationError, ValueError, OSError) as exc:
        emit_error(f"Invalid loader configuration: {exc}", exception=exc)
        raise typer.Exit(code=1) from exc
    return FontLoader(config=config)


__all__ = ["build_loader"]
