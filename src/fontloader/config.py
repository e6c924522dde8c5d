"""Configuration model for font loaders.

LoaderConfig

`packaged_resources` (`bool`)
: Search the fonts shipped inside the ``fontloader.resources`` package after
  the explicit bundle. Disable it for frozen applications that strip package
  data.

`default_extension` (`str`)
: File extension used when a caller omits one. A leading dot is ignored.

`backend` (`str`)
: Platform binding used to register fonts and probe the OS catalog. ``auto``
  selects CoreText on macOS, GDI on Windows and fontconfig elsewhere.

`search_paths` (`list[Path]`)
: Additional directories searched after the explicit bundle and before the
  packaged resources.

`system_fonts` (`bool`)
: Accept fonts already installed on the host when no file is found.

Environment overrides: ``FONTLOADER_PACKAGED_RESOURCES``,
``FONTLOADER_EXTENSION``, ``FONTLOADER_BACKEND`` and
``FONTLOADER_SKIP_SYSTEM_FONTS``.
"""

from __future__ import annotations

from collections.abc import Mapping
import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
import yaml


ENV_PREFIX = "FONTLOADER_"
_TRUTHY = {"1", "true", "yes", "on"}


class LoaderConfig(BaseModel):
    """Settings shared by every lookup performed by a `FontLoader`."""

    model_config = ConfigDict(extra="forbid")

    packaged_resources: bool = True
    default_extension: str = Field(default="ttf", description="Fallback file extension")
    backend: Literal["auto", "fontconfig", "coretext", "gdi", "none"] = "auto"
    search_paths: list[Path] = Field(default_factory=list)
    system_fonts: bool = True

    @field_validator("default_extension")
    @classmethod
    def strip_dot(cls, value: str) -> str:
        """Store extensions without their leading dot."""
        return value.strip().lstrip(".")


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    packaged = environ.get(f"{ENV_PREFIX}PACKAGED_RESOURCES")
    if packaged is not None:
        overrides["packaged_resources"] = packaged.strip().lower() in _TRUTHY
    extension = environ.get(f"{ENV_PREFIX}EXTENSION")
    if extension:
        overrides["default_extension"] = extension
    backend = environ.get(f"{ENV_PREFIX}BACKEND")
    if backend:
        overrides["backend"] = backend.strip().lower()
    if environ.get(f"{ENV_PREFIX}SKIP_SYSTEM_FONTS"):
        overrides["system_fonts"] = False
    return overrides


def load_config(
    path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> LoaderConfig:
    """Build a `LoaderConfig` from an optional YAML file and the environment."""
    data: dict[str, Any] = {}
    if path is not None:
        loaded = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        if loaded is not None and not isinstance(loaded, dict):
            raise ValueError(f"Font loader configuration '{path}' must be a mapping.")
        data.update(loaded or {})
        base_dir = Path(path).parent
        data["search_paths"] = [base_dir / entry for entry in data.get("search_paths") or []]
    data.update(_env_overrides(os.environ if environ is None else environ))
    return LoaderConfig.model_validate(data)


__all__ = ["ENV_PREFIX", "LoaderConfig", "load_config"]
