"""Shared fixtures: tiny real fonts and a call-counting platform backend."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
import threading

from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
import pytest

from fontloader.config import LoaderConfig
from fontloader.loader import FontLoader


def _square():
    pen = TTGlyphPen(None)
    pen.moveTo((0, 0))
    pen.lineTo((0, 700))
    pen.lineTo((500, 700))
    pen.lineTo((500, 0))
    pen.closePath()
    return pen.glyph()


def build_font(
    path: Path,
    postscript_name: str,
    *,
    family: str = "Fixture Sans",
    style: str = "Regular",
) -> Path:
    """Write a minimal TrueType font whose name table carries ``postscript_name``."""
    builder = FontBuilder(1000, isTTF=True)
    builder.setupGlyphOrder([".notdef", "A"])
    builder.setupCharacterMap({ord("A"): "A"})
    builder.setupGlyf({".notdef": _square(), "A": _square()})
    builder.setupHorizontalMetrics({".notdef": (500, 0), "A": (500, 0)})
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable(
        {"familyName": family, "styleName": style, "psName": postscript_name}
    )
    builder.setupOS2()
    builder.setupPost()
    path.parent.mkdir(parents=True, exist_ok=True)
    builder.save(str(path))
    return path


class RecordingBackend:
    """Platform backend double that counts registrations and probes."""

    name = "recording"

    def __init__(self, installed: Iterable[str] = (), *, accept: bool = True) -> None:
        self.installed = set(installed)
        self.accept = accept
        self.registered: list[Path] = []
        self.probes: list[str] = []
        self._lock = threading.Lock()

    def font_exists(self, name: str) -> bool:
        with self._lock:
            self.probes.append(name)
        return name in self.installed

    def register_font(self, path: Path) -> bool:
        with self._lock:
            self.registered.append(path)
        return self.accept


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "FONTLOADER_PACKAGED_RESOURCES",
        "FONTLOADER_EXTENSION",
        "FONTLOADER_BACKEND",
        "FONTLOADER_SKIP_SYSTEM_FONTS",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def loader(backend: RecordingBackend) -> FontLoader:
    return FontLoader(config=LoaderConfig(packaged_resources=False), backend=backend)
