"""Public package surface of the console logging library.

``import lib_log_console`` gives access to the context-local helpers
(``current``, ``get``, ``use``, ``shutdown``, ``debug`` … ``fatal``), the
:class:`Logger` itself, the process-wide resolver, and the building blocks
needed to assemble custom output chains.
"""

from __future__ import annotations

from .adapters import FailureIsolatingOutput, SerializedOutput, StreamDestination, TerminalOutput, Text, XTerm, build_output
from .application import Filter, Progress, RESOLVER, Resolver
from .application.resolver import default_resolver, register, resolve
from .domain import DEFAULT_LEVELS, LogEntry, SEVERITY, SeverityModel, Style, UnknownLevelError
from .runtime import Logger, current, debug, error, fatal, get, info, set_logger, shutdown, use, warn

__all__ = [
    "DEFAULT_LEVELS",
    "FailureIsolatingOutput",
    "Filter",
    "LogEntry",
    "Logger",
    "Progress",
    "RESOLVER",
    "Resolver",
    "SEVERITY",
    "SerializedOutput",
    "SeverityModel",
    "StreamDestination",
    "Style",
    "TerminalOutput",
    "Text",
    "UnknownLevelError",
    "XTerm",
    "build_output",
    "current",
    "debug",
    "default_resolver",
    "error",
    "fatal",
    "get",
    "info",
    "register",
    "resolve",
    "set_logger",
    "shutdown",
    "summary_info",
    "use",
    "warn",
]


def summary_info() -> str:
    """Return the metadata banner used by the CLI ``info`` command."""

    from . import __init__conf__

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)
