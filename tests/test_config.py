from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError
import pytest

from fontloader.config import LoaderConfig, load_config


def test_defaults() -> None:
    config = LoaderConfig()
    assert config.packaged_resources is True
    assert config.default_extension == "ttf"
    assert config.backend == "auto"
    assert config.search_paths == []
    assert config.system_fonts is True


def test_extension_is_stored_without_dot() -> None:
    assert LoaderConfig(default_extension=".OTF ").default_extension == "OTF"


def test_unknown_fields_and_backends_are_rejected() -> None:
    with pytest.raises(ValidationError):
        LoaderConfig(bundle="somewhere")  # type: ignore[call-arg]
    with pytest.raises(ValidationError):
        LoaderConfig(backend="quartz")  # type: ignore[arg-type]


def test_load_config_reads_yaml_relative_to_file(tmp_path: Path) -> None:
    config_file = tmp_path / "fontloader.yml"
    config_file.write_text(
        """\
packaged_resources: false
default_extension: otf
backend: none
search_paths:
  - assets/fonts
""",
        encoding="utf-8",
    )

    config = load_config(config_file, environ={})

    assert config.packaged_resources is False
    assert config.default_extension == "otf"
    assert config.backend == "none"
    assert config.search_paths == [tmp_path / "assets" / "fonts"]


def test_environment_overrides_file(tmp_path: Path) -> None:
    config_file = tmp_path / "fontloader.yml"
    config_file.write_text("backend: fontconfig\n", encoding="utf-8")

    config = load_config(
        config_file,
        environ={
            "FONTLOADER_BACKEND": "GDI",
            "FONTLOADER_PACKAGED_RESOURCES": "no",
            "FONTLOADER_EXTENSION": ".woff",
            "FONTLOADER_SKIP_SYSTEM_FONTS": "1",
        },
    )

    assert config.backend == "gdi"
    assert config.packaged_resources is False
    assert config.default_extension == "woff"
    assert config.system_fonts is False


def test_load_config_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FONTLOADER_BACKEND", "none")
    assert load_config().backend == "none"


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    config_file = tmp_path / "fontloader.yml"
    config_file.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError, match="must be a mapping"):
        load_config(config_file, environ={})


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    config_file = tmp_path / "fontloader.yml"
    config_file.write_text("", encoding="utf-8")

    assert load_config(config_file, environ={}) == LoaderConfig()
