"""Process-wide registry of per-subsystem level overrides.

Purpose
-------
Map subsystem names (dotted namespace paths such as ``"db.pool"``) to level
overrides so individual components can be made chattier or quieter than the
default logger without touching it.

Contents
--------
* :class:`Resolver` – copy-on-write registry with namespace matching.
* :data:`RESOLVER` plus :func:`register`, :func:`resolve`, :func:`default_resolver`.

System Role
-----------
Consulted when a named logger is constructed (``runtime.get(name)``), never per
emitted entry. Registrations are rare and usually happen at startup; lookups
read an immutable snapshot without locking.
"""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Mapping, Protocol, TypeVar

from lib_log_console.domain.levels import SEVERITY, SeverityModel


class _Derivable(Protocol):
    def with_(self, *, level: str | int | None = None, verbose: bool | None = None, name: str | None = None) -> "_Derivable":
        ...


LoggerT = TypeVar("LoggerT", bound=_Derivable)

SEPARATOR = "."


def namespace_chain(name: str) -> list[str]:
    """Return ``name`` followed by each of its dotted parents.

    Examples
    --------
    >>> namespace_chain("a.b.c")
    ['a.b.c', 'a.b', 'a']
    >>> namespace_chain("")
    []
    """

    if not name:
        return []
    parts = name.split(SEPARATOR)
    return [SEPARATOR.join(parts[:index]) for index in range(len(parts), 0, -1)]


class Resolver:
    """Associate subsystem names with level ranks.

    Examples
    --------
    >>> resolver = Resolver()
    >>> resolver.register("a", "warn")
    >>> resolver.register("a.b", "debug")
    >>> resolver.resolve("a.b.c"), resolver.resolve("a.x"), resolver.resolve("z")
    (0, 2, None)
    """

    def __init__(self, model: SeverityModel = SEVERITY) -> None:
        self._model = model
        self._lock = threading.Lock()
        self._entries: Mapping[str, int] = MappingProxyType({})
        self._fallback: _Derivable | None = None
        self._environment_loaded = False

    @property
    def model(self) -> SeverityModel:
        return self._model

    @property
    def fallback(self) -> _Derivable | None:
        return self._fallback

    def entries(self) -> Mapping[str, int]:
        """Return the current read-only snapshot of registrations."""

        return self._entries

    def register(self, name: str, level: str | int) -> None:
        """Upsert ``name`` → ``level``; the last registration wins."""

        rank = self._model.coerce(level)
        with self._lock:
            updated = dict(self._entries)
            updated[name] = rank
            self._entries = MappingProxyType(updated)

    def unregister(self, name: str) -> None:
        with self._lock:
            if name not in self._entries:
                return
            updated = dict(self._entries)
            del updated[name]
            self._entries = MappingProxyType(updated)

    def clear(self) -> None:
        with self._lock:
            self._entries = MappingProxyType({})
            self._fallback = None
            self._environment_loaded = False

    def resolve(self, name: str) -> int | None:
        """Return the rank of the most specific registration covering ``name``."""

        entries = self._entries
        for candidate in namespace_chain(name):
            if candidate in entries:
                return entries[candidate]
        return None

    def default_resolver(self, logger: LoggerT) -> LoggerT:
        """Install ``logger`` as the fallback for names without a logger of their own."""

        with self._lock:
            self._fallback = logger
        return logger

    def logger_for(self, name: str, base: LoggerT | None = None) -> LoggerT | None:
        """Derive the logger for ``name`` from ``base`` or the installed fallback.

        The derived logger shares the base's output chain; it only carries the
        resolved threshold and ``name`` as its default subject.
        """

        source = base if base is not None else self._fallback
        if source is None:
            return None
        rank = self.resolve(name)
        return source.with_(level=rank, name=name)  # type: ignore[return-value]

    def load_environment(self, subsystems: Mapping[str, tuple[str, ...]] | None) -> None:
        """Register ``{level: (name, ...)}`` pairs parsed from ``CONSOLE_<LEVEL>``."""

        for level, names in (subsystems or {}).items():
            for name in names:
                self.register(name, level)

    def load_environment_once(self, subsystems: Mapping[str, tuple[str, ...]] | None) -> bool:
        """Apply :meth:`load_environment` only on the first call since construction or :meth:`clear`.

        Returns whether ``subsystems`` were registered. Later calls leave
        registrations made at runtime untouched.

        Examples
        --------
        >>> resolver = Resolver()
        >>> resolver.load_environment_once({"debug": ("db",)})
        True
        >>> resolver.register("db", "error")
        >>> resolver.load_environment_once({"debug": ("db",)}), resolver.resolve("db")
        (False, 3)
        """

        with self._lock:
            if self._environment_loaded:
                return False
            self._environment_loaded = True
        self.load_environment(subsystems)
        return True


RESOLVER = Resolver()


def register(name: str, level: str | int) -> None:
    RESOLVER.register(name, level)


def resolve(name: str) -> int | None:
    return RESOLVER.resolve(name)


def default_resolver(logger: LoggerT) -> LoggerT:
    return RESOLVER.default_resolver(logger)


__all__ = [
    "RESOLVER",
    "Resolver",
    "default_resolver",
    "namespace_chain",
    "register",
    "resolve",
]
