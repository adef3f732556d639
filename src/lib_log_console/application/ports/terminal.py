"""Terminal port describing the style-engine contract."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TerminalPort(Protocol):
    """Encode styles and write (optionally styled) text to a destination."""

    colors: int

    def style(self, foreground: str | None = None, background: str | None = None, *attributes: str | None) -> str:
        """Return the escape sequence selecting the given tokens."""

    def reset(self) -> str:
        """Return the sequence restoring the default rendition."""

    def __getitem__(self, name: str) -> str:
        """Return the sequence registered under ``name``."""

    def __setitem__(self, name: str, sequence: str) -> None:
        """Register ``sequence`` under ``name``."""

    def write(self, text: str, style: str | None = None) -> None:
        """Write ``text`` preceded by ``style`` without resetting."""

    def print_line(self, style: str | None, *parts: str) -> None:
        """Write ``parts`` as lines, each closed by a reset."""

    def flush(self) -> None:
        """Flush the destination."""

    def close(self) -> None:
        """Release the destination."""


__all__ = ["TerminalPort"]
