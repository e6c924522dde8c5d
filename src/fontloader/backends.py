"""Platform bindings for font registration and installed-font probes.

Each backend exposes two blocking primitives:

`font_exists(name)`
: Ask the OS catalog whether ``name`` (PostScript or family name) is already
  installed. Nothing is registered.

`register_font(path)`
: Make the font file at ``path`` available to the current process. Returns
  ``False`` when the platform refuses it. Calling it twice for the same file is
  harmless on every supported platform.

`CoreTextBackend` and `GdiBackend` talk to the system libraries through
``ctypes``; `FontconfigBackend` adds application fonts through libfontconfig and
probes the catalog with ``fc-list``.
"""

from __future__ import annotations

import ctypes
import ctypes.util
import logging
import os
from pathlib import Path
import re
import shutil
import subprocess
import sys
import threading
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)

BACKEND_NAMES = ("auto", "fontconfig", "coretext", "gdi", "none")


@runtime_checkable
class FontBackend(Protocol):
    """Registration primitive and catalog probe supplied by the host platform."""

    name: str

    def font_exists(self, name: str) -> bool: ...

    def register_font(self, path: Path) -> bool: ...


class NullBackend:
    """Backend for platforms without a supported text subsystem."""

    name = "none"

    def font_exists(self, name: str) -> bool:
        return False

    def register_font(self, path: Path) -> bool:
        return False


class _LibraryBackend:
    """Lazily load a shared library once per backend instance."""

    def __init__(self) -> None:
        self._lib: Any = None
        self._load_failed = False
        self._load_lock = threading.Lock()

    def _open(self) -> Any:
        raise NotImplementedError

    def _library(self) -> Any:
        with self._load_lock:
            if self._lib is None and not self._load_failed:
                try:
                    self._lib = self._open()
                except (OSError, AttributeError):
                    logger.debug("Unable to load %s bindings", self.__class__.__name__)
                    self._load_failed = True
            return self._lib


_FC_SPECIAL = re.compile(r"([\\\-:,=])")


def _escape_fontconfig(value: str) -> str:
    return _FC_SPECIAL.sub(r"\\\1", value)


class FontconfigBackend(_LibraryBackend):
    """Linux and BSD backend built on fontconfig."""

    name = "fontconfig"

    def __init__(self, library: str | None = None) -> None:
        super().__init__()
        self.library = library

    def _open(self) -> Any:
        library = self.library or ctypes.util.find_library("fontconfig")
        if library is None:
            raise OSError("libfontconfig not found")
        lib = ctypes.CDLL(library)
        lib.FcConfigAppFontAddFile.argtypes = [ctypes.c_void_p, ctypes.c_char_p]
        lib.FcConfigAppFontAddFile.restype = ctypes.c_int
        return lib

    def register_font(self, path: Path) -> bool:
        lib = self._library()
        if lib is None:
            return False
        ok = bool(lib.FcConfigAppFontAddFile(None, os.fsencode(path)))
        logger.debug("fontconfig registration of %s: %s", path, ok)
        return ok

    def _fc_list(self, pattern: str) -> list[str]:
        try:
            proc = subprocess.run(
                ["fc-list", "-f", "%{postscriptname}|%{family}\n", pattern],
                check=True,
                capture_output=True,
                text=True,
            )
        except Exception:
            return []
        return proc.stdout.splitlines()

    def font_exists(self, name: str) -> bool:
        if not name or shutil.which("fc-list") is None:
            return False
        wanted = name.casefold()
        escaped = _escape_fontconfig(name)
        for pattern in (f":postscriptname={escaped}", escaped):
            for line in self._fc_list(pattern):
                postscript, _, families = line.partition("|")
                candidates = [postscript, *families.split(",")]
                if any(item.strip().casefold() == wanted for item in candidates):
                    return True
        return False


_CORE_TEXT = "/System/Library/Frameworks/CoreText.framework/CoreText"
_CORE_FOUNDATION = "/System/Library/Frameworks/CoreFoundation.framework/CoreFoundation"
_CF_STRING_ENCODING_UTF8 = 0x08000100
_CT_FONT_MANAGER_SCOPE_PROCESS = 1
_PROBE_POINT_SIZE = 12.0


class CoreTextBackend(_LibraryBackend):
    """macOS backend registering fonts with process scope through CoreText."""

    name = "coretext"

    def _open(self) -> Any:
        ct = ctypes.cdll.LoadLibrary(_CORE_TEXT)
        cf = ctypes.cdll.LoadLibrary(_CORE_FOUNDATION)
        void_p = ctypes.c_void_p

        cf.CFURLCreateFromFileSystemRepresentation.argtypes = [
            void_p,
            ctypes.c_char_p,
            ctypes.c_long,
            ctypes.c_bool,
        ]
        cf.CFURLCreateFromFileSystemRepresentation.restype = void_p
        cf.CFStringCreateWithCString.argtypes = [void_p, ctypes.c_char_p, ctypes.c_uint32]
        cf.CFStringCreateWithCString.restype = void_p
        cf.CFStringGetCString.argtypes = [void_p, ctypes.c_char_p, ctypes.c_long, ctypes.c_uint32]
        cf.CFStringGetCString.restype = ctypes.c_bool
        cf.CFRelease.argtypes = [void_p]
        cf.CFRelease.restype = None

        ct.CTFontManagerRegisterFontsForURL.argtypes = [void_p, ctypes.c_uint32, void_p]
        ct.CTFontManagerRegisterFontsForURL.restype = ctypes.c_bool
        ct.CTFontCreateWithName.argtypes = [void_p, ctypes.c_double, void_p]
        ct.CTFontCreateWithName.restype = void_p
        ct.CTFontCopyPostScriptName.argtypes = [void_p]
        ct.CTFontCopyPostScriptName.restype = void_p
        ct.CTFontCopyFamilyName.argtypes = [void_p]
        ct.CTFontCopyFamilyName.restype = void_p
        return ct, cf

    def register_font(self, path: Path) -> bool:
        libs = self._library()
        if libs is None:
            return False
        ct, cf = libs
        raw = os.fsencode(path)
        url = cf.CFURLCreateFromFileSystemRepresentation(None, raw, len(raw), False)
        if not url:
            return False
        try:
            ok = bool(
                ct.CTFontManagerRegisterFontsForURL(url, _CT_FONT_MANAGER_SCOPE_PROCESS, None)
            )
        finally:
            cf.CFRelease(url)
        logger.debug("CoreText registration of %s: %s", path, ok)
        return ok

    @staticmethod
    def _to_str(cf: Any, ref: Any) -> str | None:
        if not ref:
            return None
        buffer = ctypes.create_string_buffer(1024)
        try:
            if not cf.CFStringGetCString(ref, buffer, len(buffer), _CF_STRING_ENCODING_UTF8):
                return None
        finally:
            cf.CFRelease(ref)
        return buffer.value.decode("utf-8")

    def font_exists(self, name: str) -> bool:
        libs = self._library()
        if libs is None or not name:
            return False
        ct, cf = libs
        cf_name = cf.CFStringCreateWithCString(
            None, name.encode("utf-8"), _CF_STRING_ENCODING_UTF8
        )
        if not cf_name:
            return False
        try:
            font = ct.CTFontCreateWithName(cf_name, _PROBE_POINT_SIZE, None)
        finally:
            cf.CFRelease(cf_name)
        if not font:
            return False
        try:
            # CoreText substitutes a fallback face for unknown names.
            postscript = self._to_str(cf, ct.CTFontCopyPostScriptName(font))
            family = self._to_str(cf, ct.CTFontCopyFamilyName(font))
        finally:
            cf.CFRelease(font)
        return name in {postscript, family}


_FR_PRIVATE = 0x10
_WINDOWS_FONTS_KEY = r"SOFTWARE\Microsoft\Windows NT\CurrentVersion\Fonts"
_REGISTRY_SUFFIX = re.compile(r"\s*\((TrueType|OpenType)\)\s*$", re.IGNORECASE)


class GdiBackend(_LibraryBackend):
    """Windows backend adding private font resources through GDI."""

    name = "gdi"

    def _open(self) -> Any:
        gdi32 = ctypes.WinDLL("gdi32")  # type: ignore[attr-defined]
        gdi32.AddFontResourceExW.argtypes = [ctypes.c_wchar_p, ctypes.c_uint32, ctypes.c_void_p]
        gdi32.AddFontResourceExW.restype = ctypes.c_int
        return gdi32

    def register_font(self, path: Path) -> bool:
        gdi32 = self._library()
        if gdi32 is None:
            return False
        added = gdi32.AddFontResourceExW(str(path), _FR_PRIVATE, None)
        logger.debug("GDI registration of %s: %s face(s)", path, added)
        return added > 0

    def _installed_names(self) -> set[str]:
        try:
            import winreg  # type: ignore[import-not-found]
        except ImportError:
            return set()
        names: set[str] = set()
        for hive in (winreg.HKEY_LOCAL_MACHINE, winreg.HKEY_CURRENT_USER):
            try:
                key = winreg.OpenKey(hive, _WINDOWS_FONTS_KEY)
            except OSError:
                continue
            with key:
                index = 0
                while True:
                    try:
                        value_name, value_data, _kind = winreg.EnumValue(key, index)
                    except OSError:
                        break
                    index += 1
                    for face in _REGISTRY_SUFFIX.sub("", value_name).split("&"):
                        names.add(face.strip().casefold())
                    if isinstance(value_data, str):
                        names.add(Path(value_data).stem.casefold())
        return names

    def font_exists(self, name: str) -> bool:
        if not name:
            return False
        return name.casefold() in self._installed_names()


def select_backend(name: str = "auto", *, platform: str | None = None) -> FontBackend:
    """Return the backend called ``name``; ``auto`` picks one for ``platform``."""
    if name not in BACKEND_NAMES:
        raise ValueError(f"Unknown font backend '{name}'. Expected one of {BACKEND_NAMES}.")
    if name == "auto":
        current = platform or sys.platform
        if current == "darwin":
            name = "coretext"
        elif current.startswith("win"):
            name = "gdi"
        elif current.startswith(("linux", "freebsd", "openbsd", "netbsd")):
            name = "fontconfig"
        else:
            name = "none"
    if name == "coretext":
        return CoreTextBackend()
    if name == "gdi":
        return GdiBackend()
    if name == "fontconfig":
        return FontconfigBackend()
    return NullBackend()


__all__ = [
    "BACKEND_NAMES",
    "CoreTextBackend",
    "FontBackend",
    "FontconfigBackend",
    "GdiBackend",
    "NullBackend",
    "select_backend",
]
