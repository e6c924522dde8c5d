"""Implementation of the `fontloader register` command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from fontloader.exceptions import FontLoaderError

from .._options import BackendOption, BundleOption, ConfigOption, ExtensionOption
from ..state import emit_error, get_cli_state
from ..utils import build_loader


def register(
    name: Annotated[
        str,
        typer.Argument(help="Font file stem or PostScript name to register."),
    ],
    bundle: BundleOption = None,
    ext: ExtensionOption = None,
    config: ConfigOption = None,
    backend: BackendOption = None,
) -> None:
    """Register a font for this process and print its PostScript name."""
    state = get_cli_state()
    loader = build_loader(config, backend)
    try:
        postscript_name = loader.register(name, bundle or Path.cwd(), ext)
    except FontLoaderError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc
    if state.verbosity >= 1:
        state.console.log(f"Registered '{name}' via {loader.backend.name}")
    typer.echo(postscript_name)


__all__ = ["register"]
