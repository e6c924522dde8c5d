"""Implementation of the `fontloader probe` command."""

from __future__ import annotations

from typing import Annotated

import typer

from .._options import BackendOption, ConfigOption
from ..utils import build_loader


def probe(
    name: Annotated[
        str,
        typer.Argument(help="PostScript or family name to look for."),
    ],
    config: ConfigOption = None,
    backend: BackendOption = None,
) -> None:
    """Check whether the OS font catalog already provides a font."""
    loader = build_loader(config, backend)
    if loader.backend.font_exists(name):
        typer.echo(f"{name}: installed ({loader.backend.name})")
        return
    typer.echo(f"{name}: not installed ({loader.backend.name})")
    raise typer.Exit(code=1)


__all__ = ["probe"]
