"""Read the naming metadata of font files with fontTools."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fontTools.ttLib import TTFont


_POSTSCRIPT_NAME_ID = 6
_FAMILY_NAME_IDS = (16, 1)
_STYLE_NAME_IDS = (17, 2)


@dataclass(frozen=True, slots=True)
class FontMetadata:
    """Naming records extracted from a font's ``name`` table."""

    path: Path
    postscript_name: str
    family: str | None = None
    style: str | None = None


def _first_name(font: TTFont, name_ids: tuple[int, ...]) -> str | None:
    table = font["name"]
    for name_id in name_ids:
        value = table.getDebugName(name_id)
        if value:
            return value.strip()
    return None


def read_metadata(path: Path, *, font_number: int = 0) -> FontMetadata | None:
    """Return the naming metadata of ``path`` or ``None`` when it is not a font.

    Collections (``.ttc``/``.otc``) are read at ``font_number``; single fonts
    ignore the index.
    """
    try:
        with TTFont(path, fontNumber=font_number, lazy=True) as font:
            if "name" not in font:
                return None
            postscript_name = _first_name(font, (_POSTSCRIPT_NAME_ID,))
            if not postscript_name:
                return None
            return FontMetadata(
                path=Path(path),
                postscript_name=postscript_name,
                family=_first_name(font, _FAMILY_NAME_IDS),
                style=_first_name(font, _STYLE_NAME_IDS),
            )
    except Exception:
        return None


def extract_postscript_name(path: Path) -> str | None:
    """Return the canonical PostScript name stored in ``path``."""
    metadata = read_metadata(path)
    return metadata.postscript_name if metadata else None


__all__ = ["FontMetadata", "extract_postscript_name", "read_metadata"]
