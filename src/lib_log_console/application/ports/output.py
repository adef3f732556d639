"""Output ports describing the decorator chain contracts.

Purpose
-------
Define the narrow protocols every node of an output chain and every raw
destination implements, so filters and loggers depend on abstractions only.

Contents
--------
* :class:`DestinationPort` – raw text sink at the end of a chain.
* :class:`OutputPort` – chain node accepting :class:`LogEntry` instances.

System Role
-----------
Boundary between the application layer (filters, loggers) and the adapters
that format and transport entries.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_console.domain.entries import LogEntry


@runtime_checkable
class DestinationPort(Protocol):
    """Raw sink receiving already formatted text."""

    def write(self, text: str) -> None:
        """Write ``text`` verbatim."""

    def flush(self) -> None:
        """Push buffered text to the underlying device."""

    def close(self) -> None:
        """Release the sink."""


@runtime_checkable
class OutputPort(Protocol):
    """Chain node accepting log entries.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.entries = []
    ...     def write(self, entry):
    ...         self.entries.append(entry)
    ...     def close(self):
    ...         pass
    >>> isinstance(Recorder(), OutputPort)
    True
    """

    def write(self, entry: LogEntry) -> None:
        """Forward ``entry`` towards the destination."""

    def close(self) -> None:
        """Propagate release down the chain."""


__all__ = ["DestinationPort", "OutputPort"]
