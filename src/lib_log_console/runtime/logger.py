"""Logger façade combining a :class:`Filter` with a failure-isolated output chain.

Purpose
-------
Give application code one object to call: level helpers, exception logging,
progress reporting, and deterministic release of the output chain.

Contents
--------
* :class:`Logger` – the per-execution-context handle.

System Role
-----------
Composition point between the application layer (filter, resolver, progress)
and the adapters (output chain). :meth:`Logger.default_logger` is what the
context-local runtime calls the first time a context asks for a logger.
"""

from __future__ import annotations

import sys
import weakref
from types import TracebackType
from typing import Any, Mapping, TextIO

from lib_log_console.adapters.output import DiagnosticHook, FailureIsolatingOutput, build_output
from lib_log_console.application.filter import Filter
from lib_log_console.application.ports.output import OutputPort
from lib_log_console.application.progress import Progress
from lib_log_console.application.resolver import RESOLVER
from lib_log_console.config import load_settings
from lib_log_console.domain.entries import LogEntry
from lib_log_console.domain.levels import SEVERITY, SeverityModel


class Logger(Filter):
    """Severity-gated logger writing through a failure-isolating chain.

    Examples
    --------
    >>> from io import StringIO
    >>> buffer = StringIO()
    >>> logger = Logger(build_output(buffer, env={}, output_format="json"), level="warn")
    >>> logger.info("skipped"), logger.error("kept", subject="db")
    (False, True)
    >>> '"subject": "db"' in buffer.getvalue() and "skipped" not in buffer.getvalue()
    True
    >>> logger.close()
    """

    def __init__(
        self,
        output: OutputPort,
        *,
        model: SeverityModel = SEVERITY,
        level: str | int | None = None,
        verbose: bool = False,
        name: str | None = None,
        fallback: TextIO | None = None,
        diagnostic: DiagnosticHook = None,
    ) -> None:
        owns_output = not isinstance(output, FailureIsolatingOutput)
        if owns_output:
            output = FailureIsolatingOutput(output, fallback=fallback, diagnostic=diagnostic)
        super().__init__(output, model=model, level=level, verbose=verbose, name=name)
        # Loggers derived through ``with_`` share the chain; only the owner releases it.
        self._finalizer = weakref.finalize(self, output.close) if owns_output else None
        self._owner: Logger | None = None

    @classmethod
    def default_log_level(cls, env: Mapping[str, str] | None = None) -> int:
        """Return the default threshold rank for the stock severity model.

        ``CONSOLE_LEVEL`` wins; otherwise ``debug`` under ``python -d`` or
        development mode, ``warn`` under ``python -q``, else ``info``.
        """

        settings = load_settings(env)
        if settings.level is not None:
            return SEVERITY.coerce(settings.level)
        if sys.flags.debug or sys.flags.dev_mode:
            return SEVERITY.DEBUG
        if sys.flags.quiet:
            return SEVERITY.WARN
        return SEVERITY.INFO

    @classmethod
    def is_verbose_default(cls, env: Mapping[str, str] | None = None) -> bool:
        settings = load_settings(env)
        if settings.verbose is not None:
            return settings.verbose
        return bool(sys.flags.verbose)

    @classmethod
    def default_logger(
        cls,
        stream: TextIO | None = None,
        env: Mapping[str, str] | None = None,
        *,
        level: str | int | None = None,
        verbose: bool | None = None,
        output_format: str | None = None,
        force_color: bool | None = None,
        no_color: bool | None = None,
        diagnostic: DiagnosticHook = None,
    ) -> "Logger":
        """Build a logger for ``stream`` (``sys.stderr`` by default) from the environment.

        The environment is read once. ``CONSOLE_<LEVEL>`` lists are loaded into
        the process-wide resolver and the new logger becomes its fallback.
        """

        if verbose is None:
            verbose = cls.is_verbose_default(env)
        if level is None:
            level = cls.default_log_level(env)
        output = build_output(
            stream,
            env,
            output_format=output_format,
            verbose=verbose,
            force_color=force_color,
            no_color=no_color,
        )
        logger = cls(output, level=level, verbose=verbose, diagnostic=diagnostic)
        RESOLVER.load_environment_once(load_settings(env, SEVERITY.names).subsystems)
        RESOLVER.default_resolver(logger)
        return logger

    def with_(self, *, level: str | int | None = None, verbose: bool | None = None, name: str | None = None) -> "Logger":
        """Derive a logger sharing this chain; it keeps the owning logger alive."""

        derived = super().with_(level=level, verbose=verbose, name=name)
        derived._owner = self._owner if self._owner is not None else self
        return derived  # type: ignore[return-value]

    def log(
        self,
        level: str | int,
        message: Any,
        *,
        subject: str | None = None,
        error: BaseException | None = None,
        **attributes: Any,
    ) -> bool:
        """Emit ``message`` at ``level``; returns whether it passed the threshold.

        The entry is only built after the threshold accepted it. Passing an
        exception as ``message`` logs its text and attaches its traceback.
        """

        rank = self._model.coerce(level)
        if rank < self._threshold:
            return False
        if isinstance(message, BaseException) and error is None:
            error = message
            message = str(message) or type(message).__name__
        entry = LogEntry(
            severity=self._model.name_for(rank) or str(rank),
            rank=rank,
            message=str(message),
            subject=subject if subject is not None else self._name,
            attributes=attributes,
            error=error,
        )
        return self.emit(rank, entry)

    def debug(self, message: Any, **kwargs: Any) -> bool:
        return self.log("debug", message, **kwargs)

    def info(self, message: Any, **kwargs: Any) -> bool:
        return self.log("info", message, **kwargs)

    def warn(self, message: Any, **kwargs: Any) -> bool:
        return self.log("warn", message, **kwargs)

    def error(self, message: Any, **kwargs: Any) -> bool:
        return self.log("error", message, **kwargs)

    def fatal(self, message: Any, **kwargs: Any) -> bool:
        return self.log("fatal", message, **kwargs)

    def failure(self, message: Any, error: BaseException, **kwargs: Any) -> bool:
        """Log ``message`` at ``error`` with the traceback of ``error`` attached."""

        return self.log("error", message, error=error, **kwargs)

    def progress(self, subject: str, total: int, *, severity: str | int = "info", **options: Any) -> Progress:
        """Create a :class:`Progress` reporting through this logger."""

        return Progress(self, subject, total, severity=severity, **options)

    def close(self) -> None:
        """Release the output chain if this logger owns it; safe to call twice."""

        if self._finalizer is not None:
            self._finalizer()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["Logger"]
