"""Locations searched for font files before falling back to the OS catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import resources
import logging
from pathlib import Path
import sys
from typing import Protocol, runtime_checkable

import yaml


logger = logging.getLogger(__name__)

PACKAGED_RESOURCES = "fontloader.resources"
_MANIFEST_SUFFIXES = {".yaml", ".yml"}
_DIRECT_SUBDIRS = ("", "fonts")


def resource_filename(name: str, extension: str | None) -> str | None:
    """Return ``name.extension`` or ``None`` when the name cannot be a file."""
    if not name or "/" in name or "\\" in name or name in {".", ".."}:
        return None
    suffix = (extension or "").lstrip(".")
    return f"{name}.{suffix}" if suffix else name


@runtime_checkable
class FontSource(Protocol):
    """Anything able to resolve a file stem and extension to a font file."""

    label: str

    def lookup(self, name: str, extension: str | None) -> Path | None: ...


@dataclass(slots=True)
class DirectoryBundle:
    """Resolve fonts stored in a directory tree.

    ``root/name.ext`` and ``root/fonts/name.ext`` are tried first. When
    ``recursive`` is set, the first match below ``root`` in sorted order wins.
    """

    root: Path
    recursive: bool = True
    label: str = "bundle"

    def lookup(self, name: str, extension: str | None) -> Path | None:
        filename = resource_filename(name, extension)
        if filename is None or not self.root.is_dir():
            return None
        for subdir in _DIRECT_SUBDIRS:
            candidate = self.root / subdir / filename
            if candidate.is_file():
                return candidate
        if not self.recursive:
            return None
        for candidate in sorted(self.root.rglob("*")):
            if candidate.name == filename and candidate.is_file():
                return candidate
        return None


@dataclass(slots=True)
class ManifestBundle:
    """Resolve fonts declared in a ``fonts.yaml`` descriptor.

    The descriptor is a list of ``{family: str, files: [path, ...]}`` entries
    whose paths are relative to the descriptor. A request matches a file by
    its name, or by its family when the extension agrees.
    """

    fonts_yaml: Path
    label: str = "manifest"
    _entries: list[tuple[str, Path]] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        try:
            data = yaml.safe_load(self.fonts_yaml.read_text(encoding="utf-8"))
        except Exception:
            logger.debug("Unable to read font manifest %s", self.fonts_yaml, exc_info=True)
            return
        base_dir = self.fonts_yaml.parent
        for entry in data or []:
            if not isinstance(entry, dict):
                continue
            family = entry.get("family")
            if not isinstance(family, str):
                continue
            for item in entry.get("files") or []:
                if isinstance(item, str):
                    self._entries.append((family, (base_dir / item).resolve()))

    def lookup(self, name: str, extension: str | None) -> Path | None:
        filename = resource_filename(name, extension)
        if filename is None:
            return None
        suffix = f".{(extension or '').lstrip('.')}".casefold()
        for family, path in self._entries:
            if path.name == filename or (family == name and path.suffix.casefold() == suffix):
                if path.is_file():
                    return path
        return None


@dataclass(slots=True)
class PackagedResources:
    """Resolve fonts shipped as package data inside an importable package."""

    package: str = PACKAGED_RESOURCES
    directory: str = "fonts"
    label: str = "package"

    def root(self) -> Path | None:
        """Return the on-disk resource directory, if the package has one."""
        try:
            base = resources.files(self.package) / self.directory
        except ModuleNotFoundError:
            return None
        # Zip imports expose no stable filesystem path to register.
        if not isinstance(base, Path):
            return None
        return base

    def lookup(self, name: str, extension: str | None) -> Path | None:
        root = self.root()
        if root is None:
            return None
        return DirectoryBundle(root, label=self.label).lookup(name, extension)


def main_bundle() -> DirectoryBundle:
    """Return the application directory used when no bundle is supplied."""
    frozen_root = getattr(sys, "_MEIPASS", None)
    if getattr(sys, "frozen", False) and frozen_root:
        root = Path(frozen_root)
    else:
        script = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
        root = script.resolve().parent if script is not None and script.is_file() else Path.cwd()
    return DirectoryBundle(root, recursive=False, label="main")


def as_source(value: FontSource | str | Path | None) -> FontSource:
    """Coerce a directory, manifest path or source object into a `FontSource`."""
    if value is None:
        return main_bundle()
    if isinstance(value, (str, Path)):
        path = Path(value).expanduser()
        if path.suffix.lower() in _MANIFEST_SUFFIXES:
            return ManifestBundle(path)
        return DirectoryBundle(path)
    if isinstance(value, FontSource):
        return value
    raise TypeError(f"Unsupported font source: {value!r}")


__all__ = [
    "PACKAGED_RESOURCES",
    "DirectoryBundle",
    "FontSource",
    "ManifestBundle",
    "PackagedResources",
    "as_source",
    "main_bundle",
    "resource_filename",
]
