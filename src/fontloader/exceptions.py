"""Exception hierarchy raised by the font registration core."""

from __future__ import annotations


class FontLoaderError(RuntimeError):
    """Base exception for font lookup and registration failures."""


class FontNotFoundError(FontLoaderError):
    """Raised when no source can supply the requested font."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Font '{name}' not found in bundle or package resources.")
        self.name = name


class InvalidFontError(FontLoaderError):
    """Raised when a located file does not yield a PostScript name."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"Invalid or corrupted font file '{filename}'.")
        self.filename = filename


class RegistrationFailedError(FontLoaderError):
    """Raised when the platform refuses to register a valid font file."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"Failed to register font '{filename}'.")
        self.filename = filename


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "FontLoaderError",
    "FontNotFoundError",
    "InvalidFontError",
    "RegistrationFailedError",
    "exception_hint",
    "exception_messages",
]
