"""Context-local logger state built on :mod:`contextvars`.

Every execution context (thread or asyncio task) resolves its own logger.
Tasks copy the context they are spawned from, so children inherit the parent's
logger reference; replacing the logger inside a child only changes that
child's copy of the context.
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from threading import RLock
from typing import Callable, Iterator

from .logger import Logger


LoggerFactory = Callable[[], Logger]

_LOGGER_VAR: contextvars.ContextVar[Logger | None] = contextvars.ContextVar("lib_log_console_logger", default=None)
_FACTORY: LoggerFactory = Logger.default_logger
_FACTORY_LOCK = RLock()


def set_factory(factory: LoggerFactory | None) -> None:
    """Install the callable used to create loggers lazily (``None`` restores the default)."""

    global _FACTORY
    with _FACTORY_LOCK:
        _FACTORY = factory if factory is not None else Logger.default_logger


def current_logger() -> Logger:
    """Return the context's logger, creating it on first access."""

    logger = _LOGGER_VAR.get()
    if logger is None:
        with _FACTORY_LOCK:
            factory = _FACTORY
        logger = factory()
        _LOGGER_VAR.set(logger)
    return logger


def peek_logger() -> Logger | None:
    """Return the context's logger without creating one."""

    return _LOGGER_VAR.get()


def set_logger(logger: Logger | None) -> contextvars.Token[Logger | None]:
    """Replace the logger for the rest of the current context."""

    return _LOGGER_VAR.set(logger)


def reset_logger(token: contextvars.Token[Logger | None]) -> None:
    _LOGGER_VAR.reset(token)


@contextmanager
def use_logger(logger: Logger) -> Iterator[Logger]:
    """Scope ``logger`` to the ``with`` block, restoring the previous one afterwards."""

    token = _LOGGER_VAR.set(logger)
    try:
        yield logger
    finally:
        _LOGGER_VAR.reset(token)


__all__ = [
    "LoggerFactory",
    "current_logger",
    "peek_logger",
    "reset_logger",
    "set_factory",
    "set_logger",
    "use_logger",
]
