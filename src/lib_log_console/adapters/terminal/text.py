"""Plain-text terminal used for non-interactive destinations.

Purpose
-------
Implement :class:`TerminalPort` without emitting escape sequences so pipes,
files, and captured streams receive plain text.

Contents
--------
* :class:`Text` – base terminal; :class:`~lib_log_console.adapters.terminal.xterm.XTerm`
  overrides the encoding hooks.

System Role
-----------
Bottom of the formatting layer: :class:`TerminalOutput` writes every rendered
line through a terminal, never to the destination directly.
"""

from __future__ import annotations

import re

from lib_log_console.application.ports.output import DestinationPort
from lib_log_console.application.ports.terminal import TerminalPort


_LINE_BREAK = re.compile(r"\r?\n")


def split_lines(text: str) -> list[str]:
    """Split ``text`` on ``\\n`` and ``\\r\\n`` only; one trailing break ends the last line.

    Examples
    --------
    >>> split_lines("a\\r\\nb\\x0cc\\n")
    ['a', 'b\\x0cc']
    >>> split_lines("")
    ['']
    """

    lines = _LINE_BREAK.split(text)
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return lines


class Text(TerminalPort):
    """Terminal that ignores every style.

    Examples
    --------
    >>> from io import StringIO
    >>> from lib_log_console.adapters.destination import StreamDestination
    >>> buffer = StringIO()
    >>> terminal = Text(StreamDestination(buffer))
    >>> terminal["bold"] = terminal.style(None, None, "bold")
    >>> terminal.print_line("bold", "Hello\\nWorld")
    >>> buffer.getvalue()
    'Hello\\nWorld\\n'
    """

    colors = 0

    def __init__(self, destination: DestinationPort) -> None:
        self._destination = destination
        self._styles: dict[str, str] = {}

    @property
    def destination(self) -> DestinationPort:
        return self._destination

    def style(self, foreground: str | None = None, background: str | None = None, *attributes: str | None) -> str:
        return ""

    def reset(self) -> str:
        return ""

    def __getitem__(self, name: str) -> str:
        return self._styles.get(name, "")

    def __setitem__(self, name: str, sequence: str) -> None:
        self._styles[name] = sequence

    def __contains__(self, name: object) -> bool:
        return name in self._styles

    def register(self, name: str, foreground: str | None = None, background: str | None = None, *attributes: str | None) -> str:
        """Encode the tokens, store the result under ``name`` and return it."""

        sequence = self.style(foreground, background, *attributes)
        self[name] = sequence
        return sequence

    def resolve(self, style: str | None) -> str:
        """Return the sequence for a registered name or raw sequence."""

        return ""

    def write(self, text: str, style: str | None = None) -> None:
        """Write ``text`` after the style sequence; the style stays open."""

        self._destination.write(self.resolve(style) + text)

    def print_line(self, style: str | None, *parts: str) -> None:
        """Write ``parts`` as whole lines, closing the style on each line.

        Every physical line is emitted as ``style + fragment + reset + "\\n"``
        so a style never bleeds past a line terminator.
        """

        sequence = self.resolve(style)
        reset = self.reset() if sequence else ""
        lines = split_lines("".join(parts))
        self._destination.write("".join(f"{sequence}{line}{reset}\n" for line in lines))

    def flush(self) -> None:
        self._destination.flush()

    def close(self) -> None:
        self._destination.close()


__all__ = ["Text", "split_lines"]
