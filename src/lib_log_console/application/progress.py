"""Progress reporting on top of a logger."""

from __future__ import annotations

import time
from typing import Any, Callable, Protocol


class _Emitter(Protocol):
    def log(self, level: str | int, message: str, *, subject: str | None = None, **attributes: Any) -> bool:
        ...


class Progress:
    """Count work items and report through ``logger.log`` at ``severity``.

    Output is throttled to one entry per ``minimum_output_duration`` seconds;
    the final increment is always reported.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.calls = []
    ...     def log(self, level, message, *, subject=None, **attributes):
    ...         self.calls.append((level, message, attributes["current"]))
    ...         return True
    >>> recorder = Recorder()
    >>> progress = Progress(recorder, "files", 2, minimum_output_duration=3600)
    >>> progress.increment().increment().is_complete
    True
    >>> recorder.calls
    [('info', '2/2 completed (100.0%)', 2)]
    """

    def __init__(
        self,
        logger: _Emitter,
        subject: str,
        total: int = 0,
        *,
        severity: str | int = "info",
        minimum_output_duration: float = 0.1,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._logger = logger
        self.subject = subject
        self.total = total
        self.current = 0
        self.severity = severity
        self._minimum_output_duration = minimum_output_duration
        self._clock = clock
        self._start_time = clock()
        self._last_output_time: float | None = None

    @property
    def ratio(self) -> float:
        if self.total <= 0:
            return 1.0
        return min(1.0, self.current / self.total)

    @property
    def remaining(self) -> int:
        return max(0, self.total - self.current)

    @property
    def is_complete(self) -> bool:
        return self.current >= self.total

    @property
    def duration(self) -> float:
        return self._clock() - self._start_time

    def increment(self, amount: int = 1) -> "Progress":
        """Advance by ``amount`` and report if the throttle window has passed."""

        self.current += amount
        if self._should_output():
            self._last_output_time = self._clock()
            self._logger.log(
                self.severity,
                f"{self.current}/{self.total} completed ({self.ratio * 100:.1f}%)",
                subject=self.subject,
                current=self.current,
                total=self.total,
                ratio=round(self.ratio, 4),
            )
        return self

    def resize(self, total: int) -> "Progress":
        self.total = total
        return self

    def mark(self, message: str, **attributes: Any) -> None:
        """Log a status message about the subject at the progress severity."""

        self._logger.log(self.severity, message, subject=self.subject, **attributes)

    def _should_output(self) -> bool:
        if self.is_complete:
            return True
        if self._last_output_time is None:
            return self._clock() - self._start_time >= self._minimum_output_duration
        return self._clock() - self._last_output_time >= self._minimum_output_duration


__all__ = ["Progress"]
