"""Runtime font registration with a process-wide, thread-safe cache.

Architecture
: `FontLoader` resolves a font identifier against an explicit bundle, the
  configured search paths, the fonts packaged with ``fontloader`` and finally
  the OS catalog, then hands the file to the platform backend.
: `RegistrationCache` remembers which PostScript names were registered so each
  font reaches the platform at most once per process (barring a concurrent
  first request, where the platform call may run more than once).
: Backends (`CoreTextBackend`, `GdiBackend`, `FontconfigBackend`) wrap the
  native registration call and installed-font probe for each OS.
: `loaded` is the forgiving entry point for UI code: it returns ``None``
  instead of raising.
"""

from __future__ import annotations

from fontloader.backends import (
    CoreTextBackend,
    FontBackend,
    FontconfigBackend,
    GdiBackend,
    NullBackend,
    select_backend,
)
from fontloader.config import LoaderConfig, load_config
from fontloader.convenience import LoadedFont, loaded
from fontloader.exceptions import (
    FontLoaderError,
    FontNotFoundError,
    InvalidFontError,
    RegistrationFailedError,
)
from fontloader.loader import (
    FontLoader,
    default_loader_context,
    get_default_loader,
    is_registered,
    register,
    register_from,
    set_default_loader,
)
from fontloader.metadata import FontMetadata, extract_postscript_name, read_metadata
from fontloader.registry import FontKey, RegistrationCache
from fontloader.sources import (
    DirectoryBundle,
    FontSource,
    ManifestBundle,
    PackagedResources,
    main_bundle,
)
from fontloader.version import get_version


__version__ = get_version()

__all__ = [
    "CoreTextBackend",
    "DirectoryBundle",
    "FontBackend",
    "FontKey",
    "FontLoader",
    "FontLoaderError",
    "FontMetadata",
    "FontNotFoundError",
    "FontSource",
    "FontconfigBackend",
    "GdiBackend",
    "InvalidFontError",
    "LoadedFont",
    "LoaderConfig",
    "ManifestBundle",
    "NullBackend",
    "PackagedResources",
    "RegistrationCache",
    "RegistrationFailedError",
    "__version__",
    "default_loader_context",
    "extract_postscript_name",
    "get_default_loader",
    "is_registered",
    "load_config",
    "loaded",
    "main_bundle",
    "read_metadata",
    "register",
    "register_from",
    "select_backend",
    "set_default_loader",
]
