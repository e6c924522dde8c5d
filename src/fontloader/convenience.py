"""UI-facing helpers that trade font errors for an absent result.

The registration core raises on every failure. Call sites that only want
"a font or nothing" use `loaded`, which reports the failure through a
`DiagnosticEmitter` and returns ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fontloader.diagnostics import DiagnosticEmitter, LoggingEmitter
from fontloader.exceptions import FontLoaderError, exception_hint
from fontloader.loader import FontLoader, get_default_loader
from fontloader.sources import FontSource


@dataclass(frozen=True, slots=True)
class LoadedFont:
    """A registered font paired with the size requested by the caller."""

    postscript_name: str
    size: float

    def as_tk(self) -> tuple[str, int]:
        """Return a font descriptor accepted by Tk widgets."""
        return (self.postscript_name, round(self.size))


def loaded(
    name: str,
    size: float,
    *,
    bundle: FontSource | str | Path | None = None,
    ext: str | None = None,
    loader: FontLoader | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> LoadedFont | None:
    """Register ``name`` if needed and return it, or ``None`` on failure."""
    active = loader if loader is not None else get_default_loader()
    reporter = emitter if emitter is not None else LoggingEmitter()
    try:
        postscript_name = active.register(name, bundle, ext)
    except FontLoaderError as exc:
        reporter.warning(f"[fontloader] {exception_hint(exc) or exc}", exc)
        reporter.event("font_unavailable", {"name": name, "reason": type(exc).__name__})
        return None
    reporter.event("font_registered", {"name": name, "postscript_name": postscript_name})
    return LoadedFont(postscript_name=postscript_name, size=size)


__all__ = ["LoadedFont", "loaded"]
