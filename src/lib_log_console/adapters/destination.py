"""Raw stream destination terminating every output chain."""

from __future__ import annotations

import sys
from typing import TextIO

from lib_log_console.application.ports.output import DestinationPort


class StreamDestination(DestinationPort):
    """Write text to a stream, closing it only when owned.

    Examples
    --------
    >>> from io import StringIO
    >>> buffer = StringIO()
    >>> destination = StreamDestination(buffer)
    >>> destination.write("hello")
    >>> destination.close()
    >>> buffer.getvalue(), buffer.closed
    ('hello', False)
    """

    def __init__(self, stream: TextIO | None = None, *, owns_stream: bool = False) -> None:
        self._stream = stream if stream is not None else sys.stderr
        self._owns_stream = owns_stream

    @property
    def stream(self) -> TextIO:
        return self._stream

    def write(self, text: str) -> None:
        self._stream.write(text)

    def flush(self) -> None:
        self._stream.flush()

    def isatty(self) -> bool:
        isatty = getattr(self._stream, "isatty", None)
        if isatty is None:
            return False
        try:
            return bool(isatty())
        except ValueError:
            # closed stream
            return False

    def close(self) -> None:
        if getattr(self._stream, "closed", False):
            return
        self._stream.flush()
        if self._owns_stream:
            self._stream.close()


__all__ = ["StreamDestination"]
