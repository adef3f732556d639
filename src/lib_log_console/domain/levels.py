"""Severity models mapping level names to integer ranks.

Purpose
-------
Describe the ordered set of named severities a :class:`~lib_log_console.application.filter.Filter`
gates on. Ranks are plain integers so custom intermediate levels can be slotted
in without touching the rest of the hierarchy.

Contents
--------
* :class:`UnknownLevelError` – raised for malformed threshold inputs.
* :class:`SeverityModel` – immutable name→rank table with coercion helpers.
* :data:`DEFAULT_LEVELS` / :data:`SEVERITY` – the stock ``debug``…``fatal`` model.

System Role
-----------
Domain leaf: filters, resolvers, and loggers close over a model at
construction time and never mutate it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


_INTEGER_RANK = re.compile(r"-?[0-9]+")


class UnknownLevelError(ValueError):
    """Raised when a level is neither a known name nor an integer rank."""


@dataclass(slots=True, frozen=True)
class SeverityModel:
    """Immutable table of level names and their ranks.

    Examples
    --------
    >>> model = SeverityModel.from_mapping({"quiet": 0, "loud": 10})
    >>> model.LOUD
    10
    >>> model.coerce("Quiet"), model.coerce(42)
    (0, 42)
    >>> model.silent
    11
    """

    levels: Mapping[str, int]

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, int]) -> "SeverityModel":
        """Validate ``mapping`` and freeze it into a model sorted by rank."""

        if not mapping:
            raise ValueError("a severity model needs at least one level")
        normalised: dict[str, int] = {}
        for name, rank in mapping.items():
            key = str(name).strip().lower()
            if not key:
                raise ValueError("level names must not be empty")
            if isinstance(rank, bool) or not isinstance(rank, int) or rank < 0:
                raise ValueError(f"rank for {name!r} must be a non-negative integer")
            normalised[key] = rank
        if len(set(normalised.values())) != len(normalised):
            raise ValueError("level ranks must be unique")
        ordered = dict(sorted(normalised.items(), key=lambda item: item[1]))
        return cls(levels=MappingProxyType(ordered))

    def __getattr__(self, item: str) -> int:
        # Named constants: ``model.WARN``.
        if item.isupper():
            try:
                return self.levels[item.lower()]
            except KeyError:
                pass
        raise AttributeError(item)

    @property
    def names(self) -> tuple[str, ...]:
        """Return level names ordered by ascending rank."""

        return tuple(self.levels)

    @property
    def minimum(self) -> int:
        return next(iter(self.levels.values()))

    @property
    def maximum(self) -> int:
        return next(reversed(self.levels.values()))

    @property
    def silent(self) -> int:
        """Return the threshold rank that suppresses every level."""

        return self.maximum + 1

    def rank(self, name: str) -> int:
        """Return the rank registered for ``name`` (case-insensitive)."""

        try:
            return self.levels[name.strip().lower()]
        except KeyError as exc:
            raise UnknownLevelError(f"Unknown log level: {name!r}") from exc

    def name_for(self, rank: int) -> str | None:
        """Return the level name carrying ``rank`` or ``None`` for unnamed ranks."""

        for name, value in self.levels.items():
            if value == rank:
                return name
        return None

    def coerce(self, level: str | int) -> int:
        """Translate a level name or raw integer into a rank.

        Integers are returned unchanged, even outside the known range; anything
        that is not a ``str`` or ``int`` raises :class:`UnknownLevelError`.
        """

        if isinstance(level, bool):
            raise UnknownLevelError(f"Unsupported level value: {level!r}")
        if isinstance(level, int):
            return level
        if isinstance(level, str):
            stripped = level.strip()
            if _INTEGER_RANK.fullmatch(stripped):
                return int(stripped)
            return self.rank(stripped)
        raise UnknownLevelError(f"Unsupported level value: {level!r}")


DEFAULT_LEVELS: Mapping[str, int] = MappingProxyType(
    {
        "debug": 0,
        "info": 1,
        "warn": 2,
        "error": 3,
        "fatal": 4,
    }
)

SEVERITY = SeverityModel.from_mapping(DEFAULT_LEVELS)

DEBUG = SEVERITY.DEBUG
INFO = SEVERITY.INFO
WARN = SEVERITY.WARN
ERROR = SEVERITY.ERROR
FATAL = SEVERITY.FATAL


__all__ = [
    "DEBUG",
    "DEFAULT_LEVELS",
    "ERROR",
    "FATAL",
    "INFO",
    "SEVERITY",
    "SeverityModel",
    "UnknownLevelError",
    "WARN",
]
