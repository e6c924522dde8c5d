"""Resolve font identifiers and register them with the platform at most once.

Lookup order for `FontLoader.register`:

1. The registration cache, keyed by the raw requested name. Only names that
   already equal a registered PostScript name (a repeat request, or a system
   font accepted earlier) short-circuit here.
2. The explicit bundle (defaults to the application directory).
3. `LoaderConfig.search_paths`, in order.
4. Packaged resources, when `LoaderConfig.packaged_resources` is enabled.
5. The OS catalog probe, when `LoaderConfig.system_fonts` is enabled. A hit is
   recorded under the requested name without extracting anything.

A bundled file therefore shadows an installed font with the same name.

Errors are raised to the caller untouched; nothing here logs or retries.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from threading import RLock

from fontloader.backends import FontBackend, select_backend
from fontloader.config import LoaderConfig, load_config
from fontloader.exceptions import FontNotFoundError, InvalidFontError, RegistrationFailedError
from fontloader.metadata import extract_postscript_name
from fontloader.registry import FontKey, RegistrationCache
from fontloader.sources import DirectoryBundle, FontSource, PackagedResources, as_source


class FontLoader:
    """Register fonts from bundles, packaged resources or the OS catalog."""

    def __init__(
        self,
        *,
        config: LoaderConfig | None = None,
        cache: RegistrationCache | None = None,
        backend: FontBackend | None = None,
        extract_name: Callable[[Path], str | None] = extract_postscript_name,
    ) -> None:
        self.config = config if config is not None else LoaderConfig()
        # An empty cache is falsy, so test identity rather than truth.
        self.cache = cache if cache is not None else RegistrationCache()
        self.backend = backend if backend is not None else select_backend(self.config.backend)
        self._extract_name = extract_name

    def is_registered(self, postscript_name: FontKey) -> bool:
        """Return whether the PostScript name is registered in this session."""
        return self.cache.is_registered(postscript_name)

    def lookup_sources(self, bundle: FontSource | str | Path | None = None) -> list[FontSource]:
        """Return the file sources searched for a request, highest priority first."""
        sources: list[FontSource] = [as_source(bundle)]
        sources.extend(
            DirectoryBundle(path, label="search-path") for path in self.config.search_paths
        )
        if self.config.packaged_resources:
            sources.append(PackagedResources())
        return sources

    def locate(
        self,
        name: str,
        bundle: FontSource | str | Path | None = None,
        ext: str | None = None,
    ) -> Path | None:
        """Return the first font file matching ``name.ext`` in the lookup sources."""
        extension = self.config.default_extension if ext is None else ext
        for source in self.lookup_sources(bundle):
            path = source.lookup(name, extension)
            if path is not None:
                return path
        return None

    def register(
        self,
        name: str,
        bundle: FontSource | str | Path | None = None,
        ext: str | None = None,
    ) -> FontKey:
        """Register a font by file stem or by an already known PostScript name.

        Returns the PostScript name usable by UI code. Raises
        `FontNotFoundError` when no source supplies the font, plus the errors
        of `register_from` for a located file.
        """
        if self.is_registered(name):
            return name

        path = self.locate(name, bundle, ext)
        if path is not None:
            return self.register_from(path)

        if name and self.config.system_fonts and self.backend.font_exists(name):
            self.cache.mark_registered(name)
            return name

        raise FontNotFoundError(name)

    def register_from(self, path: str | Path) -> FontKey:
        """Register the font file at ``path`` and return its PostScript name.

        Raises `InvalidFontError` when the file yields no PostScript name and
        `RegistrationFailedError` when the platform rejects it. A failed
        registration is not recorded, so a later retry goes back to the
        platform.
        """
        font_path = Path(path)
        postscript_name = self._extract_name(font_path)
        if not postscript_name:
            raise InvalidFontError(font_path.name)

        if self.is_registered(postscript_name):
            return postscript_name

        if not self.backend.register_font(font_path):
            # A concurrent caller may have registered the same file first.
            if self.is_registered(postscript_name):
                return postscript_name
            raise RegistrationFailedError(font_path.name)

        self.cache.mark_registered(postscript_name)
        return postscript_name


_DEFAULT_LOADER: FontLoader | None = None
_LOCK: RLock = RLock()


def get_default_loader() -> FontLoader:
    """Return the lazily created shared loader."""
    global _DEFAULT_LOADER
    with _LOCK:
        if _DEFAULT_LOADER is None:
            _DEFAULT_LOADER = FontLoader(config=load_config())
        return _DEFAULT_LOADER


def set_default_loader(loader: FontLoader) -> FontLoader:
    """Replace the shared loader and return it."""
    global _DEFAULT_LOADER
    with _LOCK:
        _DEFAULT_LOADER = loader
        return _DEFAULT_LOADER


@contextmanager
def default_loader_context(loader: FontLoader) -> Iterator[FontLoader]:
    """Temporarily install ``loader`` as the shared loader."""
    global _DEFAULT_LOADER
    with _LOCK:
        previous = _DEFAULT_LOADER
        _DEFAULT_LOADER = loader
    try:
        yield loader
    finally:
        with _LOCK:
            _DEFAULT_LOADER = previous


def register(
    name: str,
    bundle: FontSource | str | Path | None = None,
    ext: str | None = None,
) -> FontKey:
    """Register ``name`` with the shared loader."""
    return get_default_loader().register(name, bundle, ext)


def register_from(path: str | Path) -> FontKey:
    """Register the font file at ``path`` with the shared loader."""
    return get_default_loader().register_from(path)


def is_registered(postscript_name: FontKey) -> bool:
    """Return whether the shared loader has registered ``postscript_name``."""
    return get_default_loader().is_registered(postscript_name)


__all__ = [
    "FontLoader",
    "default_loader_context",
    "get_default_loader",
    "is_registered",
    "register",
    "register_from",
    "set_default_loader",
]
