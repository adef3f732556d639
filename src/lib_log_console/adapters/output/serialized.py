"""JSON-lines formatting layer for non-interactive pipelines."""

from __future__ import annotations

from lib_log_console.application.ports.output import DestinationPort, OutputPort
from lib_log_console.domain.entries import LogEntry


class SerializedOutput(OutputPort):
    """Write one sorted-key JSON document per entry.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from io import StringIO
    >>> from lib_log_console.adapters.destination import StreamDestination
    >>> buffer = StringIO()
    >>> output = SerializedOutput(StreamDestination(buffer))
    >>> output.write(LogEntry("info", 1, "ready", timestamp=datetime(2026, 1, 2, tzinfo=timezone.utc)))
    >>> buffer.getvalue()
    '{"message": "ready", "severity": "info", "time": "2026-01-02T00:00:00+00:00"}\\n'
    """

    def __init__(self, destination: DestinationPort) -> None:
        self._destination = destination

    def write(self, entry: LogEntry) -> None:
        self._destination.write(entry.to_json() + "\n")
        self._destination.flush()

    def close(self) -> None:
        self._destination.close()


__all__ = ["SerializedOutput"]
