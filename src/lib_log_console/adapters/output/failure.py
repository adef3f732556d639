"""Failure-isolating output node.

Purpose
-------
Guarantee that a broken destination never crashes the application it is
diagnosing. The node wraps the rest of the chain (formatting included), swallows
whatever the inner chain raises, reports the first failure once on a separate
fallback stream, and then stays silent.

Contents
--------
* :class:`FailureIsolatingOutput` – outermost node handed to every logger.

System Role
-----------
The only place in the chain that catches broadly. State machine:
``active -> degraded`` on a failed write, ``degraded -> active`` only through
:meth:`FailureIsolatingOutput.reset`.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Callable
from typing import Any, TextIO

from lib_log_console.application.ports.output import OutputPort
from lib_log_console.domain.entries import LogEntry


LOGGER = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None


class FailureIsolatingOutput(OutputPort):
    """Forward entries to ``inner`` until the first failure, then drop them.

    Examples
    --------
    >>> from io import StringIO
    >>> class Broken:
    ...     def write(self, entry):
    ...         raise BrokenPipeError("gone")
    ...     def close(self):
    ...         pass
    >>> notices = StringIO()
    >>> output = FailureIsolatingOutput(Broken(), fallback=notices)
    >>> output.write("first")
    >>> output.write("second")
    >>> output.degraded
    True
    >>> notices.getvalue().count("BrokenPipeError")
    1
    """

    def __init__(
        self,
        inner: OutputPort,
        *,
        fallback: TextIO | None = None,
        diagnostic: DiagnosticHook = None,
    ) -> None:
        self._inner = inner
        self._fallback = fallback
        self._diagnostic = diagnostic
        self._lock = threading.Lock()
        self._degraded = False
        self._closed = False

    @property
    def inner(self) -> OutputPort:
        return self._inner

    @property
    def degraded(self) -> bool:
        return self._degraded

    def write(self, entry: LogEntry) -> None:
        if self._degraded or self._closed:
            return
        try:
            self._inner.write(entry)
        except Exception as exc:  # a logging failure must never reach the caller
            self._degrade(exc)

    def set_verbose(self, value: bool) -> None:
        set_verbose = getattr(self._inner, "set_verbose", None)
        if set_verbose is not None:
            set_verbose(value)

    def reset(self) -> None:
        """Return to the active state; the next write reaches ``inner`` again."""

        with self._lock:
            self._degraded = False

    def close(self) -> None:
        """Release the inner chain once; errors during release are reported, not raised."""

        with self._lock:
            if self._closed:
                return
            self._closed = True
        try:
            self._inner.close()
        except Exception as exc:  # closing a broken pipe fails the same way writing does
            LOGGER.debug("closing output chain failed: %r", exc)

    def _degrade(self, exc: Exception) -> None:
        with self._lock:
            if self._degraded:
                return
            self._degraded = True
        self._report(exc)

    def _report(self, exc: Exception) -> None:
        stream = self._fallback if self._fallback is not None else sys.__stderr__
        if stream is not None:
            try:
                stream.write(f"lib_log_console: output disabled after {type(exc).__name__}: {exc}\n")
                stream.flush()
            except (OSError, ValueError):
                pass
        if self._diagnostic is not None:
            try:
                self._diagnostic("output_degraded", {"error": type(exc).__name__, "message": str(exc)})
            except Exception:  # pragma: no cover - diagnostic hooks must not break logging
                LOGGER.debug("diagnostic hook failed", exc_info=True)


__all__ = ["DiagnosticHook", "FailureIsolatingOutput"]
