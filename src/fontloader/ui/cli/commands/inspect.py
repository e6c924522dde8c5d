"""Implementation of the `fontloader inspect` command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from rich import box
from rich.table import Table
import typer

from fontloader.exceptions import InvalidFontError
from fontloader.metadata import read_metadata

from ..state import emit_error, get_cli_state


def inspect(
    font_file: Annotated[
        Path,
        typer.Argument(
            help="Font file (.ttf, .otf, .ttc) to read.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
) -> None:
    """Show the naming metadata used as the registration key."""
    metadata = read_metadata(font_file)
    if metadata is None:
        exc = InvalidFontError(font_file.name)
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1)

    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("PostScript name", metadata.postscript_name)
    table.add_row("Family", metadata.family or "-")
    table.add_row("Style", metadata.style or "-")
    table.add_row("Path", str(metadata.path))
    get_cli_state().console.print(table)


__all__ = ["inspect"]
