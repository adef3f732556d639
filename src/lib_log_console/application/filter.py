"""Severity gate sitting in front of an output chain.

Purpose
-------
Hold the mutable threshold rank for one logger and decide whether an entry at a
given level reaches the output chain.

Contents
--------
* :class:`Filter` – threshold holder parameterised by a :class:`SeverityModel`.

System Role
-----------
Base of :class:`~lib_log_console.runtime.logger.Logger`. The resolver
derives per-subsystem filters via :meth:`Filter.with_`, which shares the output
chain instead of cloning it.
"""

from __future__ import annotations

import threading
from typing import Any

from lib_log_console.application.ports.output import OutputPort
from lib_log_console.domain.levels import SEVERITY, SeverityModel


class Filter:
    """Gate entries by comparing their rank against a threshold.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.entries = []
    ...     def write(self, entry):
    ...         self.entries.append(entry)
    ...     def close(self):
    ...         pass
    >>> recorder = Recorder()
    >>> gate = Filter(recorder, level="warn")
    >>> gate.accepts("info"), gate.accepts("error")
    (False, True)
    >>> gate.emit("info", "dropped"), gate.emit("fatal", "kept")
    (False, True)
    >>> recorder.entries
    ['kept']
    """

    DEFAULT_LEVEL = "info"

    def __init__(
        self,
        output: OutputPort,
        *,
        model: SeverityModel = SEVERITY,
        level: str | int | None = None,
        verbose: bool = False,
        name: str | None = None,
    ) -> None:
        self._output = output
        self._model = model
        self._lock = threading.Lock()
        if level is None:
            level = self.DEFAULT_LEVEL if self.DEFAULT_LEVEL in model.levels else model.minimum
        self._threshold = model.coerce(level)
        self._verbose = verbose
        self._name = name

    @property
    def output(self) -> OutputPort:
        return self._output

    @property
    def model(self) -> SeverityModel:
        return self._model

    @property
    def name(self) -> str | None:
        return self._name

    def threshold(self) -> int:
        """Return the current threshold rank."""

        return self._threshold

    def set_threshold(self, level: str | int) -> int:
        """Replace the threshold with ``level`` and return the resulting rank.

        Raises
        ------
        UnknownLevelError
            If ``level`` is neither a known level name nor an integer.
        """

        rank = self._model.coerce(level)
        with self._lock:
            self._threshold = rank
        return rank

    def accepts(self, level: str | int) -> bool:
        """Return ``True`` when entries at ``level`` pass the threshold."""

        return self._model.coerce(level) >= self._threshold

    def emit(self, level: str | int, entry: Any) -> bool:
        """Forward ``entry`` to the output when ``level`` is accepted."""

        if not self.accepts(level):
            return False
        self._output.write(entry)
        return True

    def all(self) -> None:
        """Let every defined level through."""

        self.set_threshold(self._model.minimum)

    def off(self) -> None:
        """Silence every level, ``fatal`` included."""

        self.set_threshold(self._model.silent)

    def verbose(self, value: bool = True) -> None:
        """Toggle verbose headers here and on outputs that support it."""

        with self._lock:
            self._verbose = value
        set_verbose = getattr(self._output, "set_verbose", None)
        if set_verbose is not None:
            set_verbose(value)

    def is_verbose(self) -> bool:
        return self._verbose

    def with_(self, *, level: str | int | None = None, verbose: bool | None = None, name: str | None = None) -> "Filter":
        """Return a sibling sharing this output with optional overrides."""

        return type(self)(
            self._output,
            model=self._model,
            level=self._threshold if level is None else level,
            verbose=self._verbose if verbose is None else verbose,
            name=self._name if name is None else name,
        )

    def __repr__(self) -> str:
        level = self._model.name_for(self._threshold) or self._threshold
        return f"<{type(self).__name__} name={self._name!r} level={level!r} verbose={self._verbose}>"


__all__ = ["Filter"]
