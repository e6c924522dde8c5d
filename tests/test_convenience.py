from __future__ import annotations

from collections.abc import Mapping
import logging
from pathlib import Path
from typing import Any

import pytest

from conftest import RecordingBackend, build_font
from fontloader.convenience import LoadedFont, loaded
from fontloader.diagnostics import (
    DiagnosticEmitter,
    LoggingEmitter,
    NullEmitter,
    format_event_message,
)
from fontloader.loader import FontLoader, default_loader_context


class RecordingEmitter:
    debug_enabled = False

    def __init__(self) -> None:
        self.warnings: list[tuple[str, BaseException | None]] = []
        self.events: list[tuple[str, dict[str, Any]]] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append((message, exc))

    def error(self, message: str, exc: BaseException | None = None) -> None:
        raise AssertionError("loaded() never reports errors")

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))


def test_loaded_returns_font_descriptor(tmp_path: Path, loader: FontLoader) -> None:
    build_font(tmp_path / "sura_names.ttf", "SuraNames-Regular")
    emitter = RecordingEmitter()

    font = loaded("sura_names", 25, bundle=tmp_path, loader=loader, emitter=emitter)

    assert font == LoadedFont(postscript_name="SuraNames-Regular", size=25)
    assert font.as_tk() == ("SuraNames-Regular", 25)
    assert emitter.warnings == []
    assert emitter.events == [
        ("font_registered", {"name": "sura_names", "postscript_name": "SuraNames-Regular"})
    ]


def test_loaded_downgrades_failures_to_none(tmp_path: Path, loader: FontLoader) -> None:
    emitter = RecordingEmitter()

    assert loaded("ghost", 12, bundle=tmp_path, loader=loader, emitter=emitter) is None
    message, exc = emitter.warnings[0]
    assert "ghost" in message
    assert exc is not None
    assert emitter.events == [
        ("font_unavailable", {"name": "ghost", "reason": "FontNotFoundError"})
    ]


def test_loaded_uses_the_shared_loader(tmp_path: Path, loader: FontLoader) -> None:
    build_font(tmp_path / "shared.ttf", "Shared-Bold")
    with default_loader_context(loader):
        font = loaded("shared", 10.6, bundle=tmp_path, emitter=NullEmitter())

    assert font is not None
    assert font.as_tk() == ("Shared-Bold", 11)
    assert loader.is_registered("Shared-Bold")


def test_loaded_logs_through_logging_by_default(
    tmp_path: Path, backend: RecordingBackend, caplog: pytest.LogCaptureFixture
) -> None:
    backend.accept = False
    build_font(tmp_path / "denied.ttf", "Denied-Regular")
    loader = FontLoader(backend=backend)

    with caplog.at_level(logging.INFO, logger="fontloader.diagnostics"):
        assert loaded("denied", 12, bundle=tmp_path, loader=loader) is None

    assert "Failed to register font 'denied.ttf'." in caplog.text
    assert "Font unavailable: denied (RegistrationFailedError)" in caplog.text


def test_logging_emitter_formats_events(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter(logger_obj=logging.getLogger("fontloader.test"))
    with caplog.at_level(logging.DEBUG, logger="fontloader.test"):
        emitter.event("font_registered", {"name": "Body", "postscript_name": "Body"})
        emitter.event("custom", {"key": "value"})

    assert "Font ready: Body" in caplog.text
    assert "diagnostic event custom" in caplog.text
    assert (
        format_event_message("font_registered", {"name": "body", "postscript_name": "Body-R"})
        == "Font ready: body -> Body-R"
    )


def test_null_emitter_silences_failures(
    tmp_path: Path, loader: FontLoader, caplog: pytest.LogCaptureFixture
) -> None:
    emitter = NullEmitter()
    assert isinstance(emitter, DiagnosticEmitter)

    with caplog.at_level(logging.DEBUG):
        assert loaded("ghost", 12, bundle=tmp_path, loader=loader, emitter=emitter) is None
    assert caplog.records == []
