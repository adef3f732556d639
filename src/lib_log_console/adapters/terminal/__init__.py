"""Terminal adapters and capability probing.

:func:`for_destination` decides whether a destination gets escape sequences at
all. Rich's :class:`~rich.console.Console` performs the probe, so ``NO_COLOR``,
``FORCE_COLOR`` and ``TERM=dumb`` are honoured the same way Rich honours them.
"""

from __future__ import annotations

from typing import Mapping

from rich.console import Console

from lib_log_console.application.ports.output import DestinationPort

from .text import Text
from .xterm import XTerm


_COLOR_COUNTS: Mapping[str, int] = {
    "standard": 16,
    "windows": 16,
    "256": 256,
    "truecolor": 16_777_216,
}


def probe_colors(destination: DestinationPort, *, force_color: bool | None = None, no_color: bool | None = None) -> int:
    """Return how many colours ``destination`` supports (``0`` for none)."""

    stream = getattr(destination, "stream", None)
    if stream is None:
        isatty = getattr(destination, "isatty", None)
        interactive = force_color if force_color is not None else bool(isatty is not None and isatty())
        return 16 if interactive and not no_color else 0

    console = Console(file=stream, force_terminal=force_color, no_color=no_color)
    if console.no_color or not console.is_terminal or console.color_system is None:
        return 0
    return _COLOR_COUNTS.get(console.color_system, 16)


def for_destination(destination: DestinationPort, *, force_color: bool | None = None, no_color: bool | None = None) -> Text:
    """Return an :class:`XTerm` for colour terminals, :class:`Text` otherwise."""

    colors = probe_colors(destination, force_color=force_color, no_color=no_color)
    if colors:
        return XTerm(destination, colors=colors)
    return Text(destination)


__all__ = ["Text", "XTerm", "for_destination", "probe_colors"]
