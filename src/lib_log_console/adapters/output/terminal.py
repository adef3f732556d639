"""Human-oriented formatting layer writing entries through a terminal.

Purpose
-------
Render :class:`LogEntry` instances into aligned, optionally coloured console
lines. Colour decisions are delegated to the terminal: a :class:`Text` terminal
yields plain text, an :class:`XTerm` yields escape sequences.

Contents
--------
* :data:`DEFAULT_PALETTE` – named styles registered on the terminal.
* :class:`TerminalOutput` – output node implementing :class:`OutputPort`.

Layout
------
``<elapsed> <severity>: <subject or first message line> [verbose details]``
followed by ``| ``-prefixed continuation lines for the remaining message
lines, sorted ``key=value`` attributes, and an exception traceback.
"""

from __future__ import annotations

import asyncio
import logging
import os
import threading
import time
from typing import Mapping, Sequence

from lib_log_console.adapters.terminal.text import Text, split_lines
from lib_log_console.application.ports.output import OutputPort
from lib_log_console.domain.entries import LogEntry


LOGGER = logging.getLogger(__name__)

DEFAULT_PALETTE: Mapping[str, Sequence[str | None]] = {
    "debug": ("cyan",),
    "info": ("green",),
    "warn": ("yellow",),
    "error": ("red",),
    "fatal": ("white", "red", "bold"),
    "subject": ("blue", None, "bold"),
    "attributes": (None, None, "faint"),
    "exception": ("red", None, "faint"),
}

_SEVERITY_WIDTH = 8
_ELAPSED_WIDTH = 7
_CONTINUATION = " " * (_ELAPSED_WIDTH + 1 + _SEVERITY_WIDTH) + " | "

Block = tuple[str | None, str]


def format_elapsed(seconds: float) -> str:
    """Return a compact duration string.

    Examples
    --------
    >>> format_elapsed(0.5), format_elapsed(75), format_elapsed(3 * 3600 + 120)
    ('0.5s', '1m15s', '3h2m')
    """

    if seconds < 60:
        return f"{seconds:.2f}".rstrip("0").rstrip(".") + "s" if seconds else "0s"
    minutes, secs = divmod(int(seconds), 60)
    if minutes < 60:
        return f"{minutes}m{secs}s"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h{minutes}m"


def _execution_context() -> str:
    try:
        task = asyncio.current_task()
    except RuntimeError:
        task = None
    if task is not None:
        return f"task={task.get_name()}"
    return f"thread={threading.current_thread().name}"


class TerminalOutput(OutputPort):
    """Format entries for a console and write them through ``terminal``."""

    def __init__(
        self,
        terminal: Text,
        *,
        verbose: bool = False,
        palette: Mapping[str, Sequence[str | None]] | None = None,
        start_time: float | None = None,
    ) -> None:
        self._terminal = terminal
        self._verbose = verbose
        self._start_time = time.monotonic() if start_time is None else start_time
        self._register_palette(DEFAULT_PALETTE if palette is None else {**DEFAULT_PALETTE, **palette})

    @property
    def terminal(self) -> Text:
        return self._terminal

    @property
    def verbose(self) -> bool:
        return self._verbose

    def set_verbose(self, value: bool) -> None:
        self._verbose = value

    def _register_palette(self, palette: Mapping[str, Sequence[str | None]]) -> None:
        for name, tokens in palette.items():
            try:
                self._terminal.register(name, *tokens)
            except (TypeError, ValueError) as exc:
                LOGGER.debug("style %r left unstyled: %r", name, exc)

    def write(self, entry: LogEntry) -> None:
        try:
            blocks = self._render(entry, styled=True)
        except (TypeError, ValueError) as exc:
            LOGGER.debug("styled rendering failed, falling back to plain text: %r", exc)
            blocks = self._render(entry, styled=False)
        for style, text in blocks:
            self._terminal.print_line(style, text)
        self._terminal.flush()

    def close(self) -> None:
        self._terminal.close()

    def _paint(self, style: str, text: str, styled: bool) -> str:
        sequence = self._terminal[style] if styled else ""
        if not sequence:
            return text
        return f"{sequence}{text}{self._terminal.reset()}"

    def _render(self, entry: LogEntry, *, styled: bool) -> list[Block]:
        elapsed = format_elapsed(max(0.0, time.monotonic() - self._start_time))
        message_lines = split_lines(entry.message)

        header = f"{elapsed:>{_ELAPSED_WIDTH}} " + self._paint(entry.severity, f"{entry.severity:>{_SEVERITY_WIDTH}}", styled) + ": "
        if entry.subject is not None:
            header += self._paint("subject", entry.subject, styled)
        else:
            header += message_lines.pop(0)
        if self._verbose:
            details = f" [pid={os.getpid()}] [{_execution_context()}] [{entry.timestamp.isoformat()}]"
            header += self._paint("attributes", details, styled)

        blocks: list[Block] = [(None, header)]
        for line in message_lines:
            blocks.append((None, _CONTINUATION + line))
        attribute_style = "attributes" if styled else None
        for key, value in sorted(entry.attributes.items()):
            for line in split_lines(f"{key}={value}"):
                blocks.append((attribute_style, _CONTINUATION + line))
        backtrace = entry.format_error()
        if backtrace is not None:
            exception_style = "exception" if styled else None
            for line in split_lines(backtrace):
                blocks.append((exception_style, _CONTINUATION + line))
        return blocks


__all__ = ["DEFAULT_PALETTE", "TerminalOutput", "format_elapsed"]
