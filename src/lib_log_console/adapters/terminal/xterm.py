"""XTerm-compatible terminal emitting SGR escape sequences.

Purpose
-------
Turn symbolic style tokens into the minimal ``ESC [ <codes> m`` sequence and
write styled text to interactive destinations.

Contents
--------
* :data:`COLORS` / :data:`ATTRIBUTES` – fixed token→code tables.
* :func:`encode` – cached encoder for :class:`Style` values.
* :class:`XTerm` – terminal adapter built on :class:`Text`.
"""

from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from lib_log_console.application.ports.output import DestinationPort
from lib_log_console.domain.styles import Style

from .text import Text


ESCAPE = "\x1b["
RESET = "\x1b[0m"

COLORS: Mapping[str, int] = MappingProxyType(
    {
        "black": 0,
        "red": 1,
        "green": 2,
        "yellow": 3,
        "blue": 4,
        "magenta": 5,
        "cyan": 6,
        "white": 7,
        "default": 9,
    }
)
#: Colour offsets; foreground codes start at 30, background codes at 40.

ATTRIBUTES: Mapping[str, int] = MappingProxyType(
    {
        "normal": 0,
        "bold": 1,
        "faint": 2,
        "italic": 3,
        "underline": 4,
        "blink": 5,
        "reverse": 7,
        "hidden": 8,
    }
)


@lru_cache(maxsize=512)
def encode(style: Style) -> str:
    """Return the escape sequence for ``style``; unknown tokens are skipped.

    Examples
    --------
    >>> encode(Style.from_tokens("blue"))
    '\\x1b[34m'
    >>> encode(Style.from_tokens("blue", None, "underline", "bold"))
    '\\x1b[34;4;1m'
    >>> encode(Style.from_tokens("plaid", None, "sparkly"))
    ''
    """

    codes: list[int] = []
    if style.foreground is not None and style.foreground in COLORS:
        codes.append(30 + COLORS[style.foreground])
    if style.background is not None and style.background in COLORS:
        codes.append(40 + COLORS[style.background])
    for token in style.attributes:
        if token in ATTRIBUTES:
            codes.append(ATTRIBUTES[token])
    if not codes:
        return ""
    return ESCAPE + ";".join(str(code) for code in codes) + "m"


class XTerm(Text):
    """Terminal writing ANSI/xterm styles.

    Examples
    --------
    >>> from io import StringIO
    >>> from lib_log_console.adapters.destination import StreamDestination
    >>> buffer = StringIO()
    >>> terminal = XTerm(StreamDestination(buffer))
    >>> terminal["bold"] = terminal.style(None, None, "bold")
    >>> terminal.write("Hello World", style="bold")
    >>> buffer.getvalue()
    '\\x1b[1mHello World'
    """

    def __init__(self, destination: DestinationPort, *, colors: int = 16) -> None:
        super().__init__(destination)
        self.colors = colors

    def style(self, foreground: str | None = None, background: str | None = None, *attributes: str | None) -> str:
        return encode(Style.from_tokens(foreground, background, *attributes))

    def reset(self) -> str:
        return RESET

    def resolve(self, style: str | None) -> str:
        if not style:
            return ""
        if style.startswith(ESCAPE):
            return style
        return self[style]


__all__ = ["ATTRIBUTES", "COLORS", "ESCAPE", "RESET", "XTerm", "encode"]
