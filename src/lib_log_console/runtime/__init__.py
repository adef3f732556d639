"""Runtime façade over the context-local logger.

Purpose
-------
Expose the entry points host code calls (``current``, ``get``, ``use``,
``shutdown`` and the level helpers) without importing the inner layers.

Contents
--------
* ``current`` – the execution context's logger, created lazily.
* ``get`` – per-subsystem logger derived through the resolver.
* ``use`` / ``set_logger`` – replace the logger for a scope or a context.
* ``shutdown`` – release the context's logger.
* ``debug`` … ``fatal`` – shorthands forwarding to ``current()``.

System Role
-----------
Outer shell of the package. Application code written against these helpers
never holds a global singleton; each context resolves its own logger.
"""

from __future__ import annotations

from typing import Any

from lib_log_console.application.resolver import RESOLVER

from ._state import current_logger, peek_logger, set_factory, set_logger, use_logger
from .logger import Logger


def current() -> Logger:
    """Return the logger bound to the current execution context."""

    return current_logger()


def get(name: str) -> Logger:
    """Return the logger for subsystem ``name``.

    The resolver is consulted once, here: the returned logger carries the
    override registered for ``name`` (or its closest dotted parent) and shares
    the output chain of the context's logger. Without an override it keeps the
    context logger's threshold.
    """

    base = current_logger()
    derived = RESOLVER.logger_for(name, base=base)
    return derived if derived is not None else base


def use(logger: Logger):
    """Context manager scoping ``logger`` to a ``with`` block."""

    return use_logger(logger)


def shutdown() -> None:
    """Close the context's logger (if one was created) and unbind it."""

    logger = peek_logger()
    if logger is None:
        return
    try:
        logger.close()
    finally:
        set_logger(None)


def debug(message: Any, **kwargs: Any) -> bool:
    return current_logger().debug(message, **kwargs)


def info(message: Any, **kwargs: Any) -> bool:
    return current_logger().info(message, **kwargs)


def warn(message: Any, **kwargs: Any) -> bool:
    return current_logger().warn(message, **kwargs)


def error(message: Any, **kwargs: Any) -> bool:
    return current_logger().error(message, **kwargs)


def fatal(message: Any, **kwargs: Any) -> bool:
    return current_logger().fatal(message, **kwargs)


__all__ = [
    "Logger",
    "current",
    "debug",
    "error",
    "fatal",
    "get",
    "info",
    "set_factory",
    "set_logger",
    "shutdown",
    "use",
    "warn",
]
