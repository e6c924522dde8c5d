"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


LOOKUP_PANEL = "Lookup"
PLATFORM_PANEL = "Platform"

BundleOption = Annotated[
    Path | None,
    typer.Option(
        "--bundle",
        "-b",
        help=(
            "Directory or fonts.yaml manifest searched first. "
            "Defaults to the current directory."
        ),
        exists=True,
        file_okay=True,
        dir_okay=True,
        resolve_path=True,
        rich_help_panel=LOOKUP_PANEL,
    ),
]

ExtensionOption = Annotated[
    str | None,
    typer.Option(
        "--ext",
        "-e",
        help="Font file extension (defaults to the configured extension, 'ttf').",
        rich_help_panel=LOOKUP_PANEL,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML file with loader settings.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=LOOKUP_PANEL,
    ),
]

BackendOption = Annotated[
    str | None,
    typer.Option(
        "--backend",
        help="Platform backend: auto, fontconfig, coretext, gdi or none.",
        rich_help_panel=PLATFORM_PANEL,
    ),
]
