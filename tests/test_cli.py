from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from conftest import RecordingBackend, build_font
from fontloader.ui.cli import app
import fontloader.loader as loader_module


@pytest.fixture
def recording(monkeypatch: pytest.MonkeyPatch) -> RecordingBackend:
    backend = RecordingBackend(installed={"Helvetica"})
    monkeypatch.setattr(loader_module, "select_backend", lambda name="auto": backend)
    return backend


def test_register_prints_postscript_name(tmp_path: Path, recording: RecordingBackend) -> None:
    build_font(tmp_path / "heading.ttf", "Heading-Bold")
    runner = CliRunner()

    result = runner.invoke(app, ["register", "heading", "--bundle", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "Heading-Bold"
    assert recording.registered == [tmp_path / "heading.ttf"]


def test_register_defaults_to_current_directory(
    tmp_path: Path, recording: RecordingBackend, monkeypatch: pytest.MonkeyPatch
) -> None:
    build_font(tmp_path / "body.otf", "Body-Regular")
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(app, ["register", "body", "--ext", "otf"])

    assert result.exit_code == 0, result.output
    assert "Body-Regular" in result.stdout


def test_register_missing_font_exits_with_error(
    tmp_path: Path, recording: RecordingBackend
) -> None:
    result = CliRunner().invoke(app, ["register", "ghost", "--bundle", str(tmp_path)])

    assert result.exit_code == 1
    assert "Font 'ghost' not found" in result.output


def test_register_accepts_installed_font(tmp_path: Path, recording: RecordingBackend) -> None:
    result = CliRunner().invoke(app, ["-v", "register", "Helvetica", "--bundle", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "Helvetica" in result.stdout
    assert recording.registered == []


def test_register_reads_config_file(tmp_path: Path, recording: RecordingBackend) -> None:
    build_font(tmp_path / "assets" / "label.ttf", "Label-Regular")
    (tmp_path / "bundle").mkdir()
    config_file = tmp_path / "fontloader.yml"
    config_file.write_text("search_paths: [assets]\n", encoding="utf-8")

    result = CliRunner().invoke(
        app,
        ["register", "label", "--bundle", str(tmp_path / "bundle"), "--config", str(config_file)],
    )

    assert result.exit_code == 0, result.output
    assert "Label-Regular" in result.stdout


def test_invalid_backend_option_is_reported(tmp_path: Path) -> None:
    result = CliRunner().invoke(
        app, ["register", "heading", "--bundle", str(tmp_path), "--backend", "quartz"]
    )

    assert result.exit_code == 1
    assert "Invalid loader configuration" in result.output


def test_inspect_shows_name_records(tmp_path: Path) -> None:
    font = build_font(tmp_path / "inspect.ttf", "Inspect-Italic", family="Inspect", style="Italic")

    result = CliRunner().invoke(app, ["inspect", str(font)])

    assert result.exit_code == 0, result.output
    assert "Inspect-Italic" in result.stdout
    assert "Italic" in result.stdout


def test_inspect_rejects_invalid_fonts(tmp_path: Path) -> None:
    broken = tmp_path / "broken.ttf"
    broken.write_bytes(b"nope")

    result = CliRunner().invoke(app, ["inspect", str(broken)])

    assert result.exit_code == 1
    assert "Invalid or corrupted font file 'broken.ttf'." in result.output


def test_probe_reports_catalog_state(recording: RecordingBackend) -> None:
    runner = CliRunner()

    found = runner.invoke(app, ["probe", "Helvetica"])
    missing = runner.invoke(app, ["probe", "Comic Neue"])

    assert found.exit_code == 0
    assert "Helvetica: installed (recording)" in found.stdout
    assert missing.exit_code == 1
    assert "Comic Neue: not installed (recording)" in missing.stdout
    assert recording.probes == ["Helvetica", "Comic Neue"]


def test_version_flag() -> None:
    result = CliRunner().invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.strip()
