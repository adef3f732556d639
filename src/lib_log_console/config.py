"""Environment-derived defaults and optional ``.env`` loading.

Purpose
-------
Translate the handful of environment variables the library honours into a
frozen :class:`ConsoleSettings` value, read once when a logger is built, and
offer opt-in ``.env`` discovery through :mod:`dotenv`.

Contents
--------
* :class:`ConsoleSettings` / :func:`load_settings` – parsed environment view.
* :func:`should_use_dotenv` / :func:`enable_dotenv` – ``.env`` toggles.

Recognised variables
--------------------
``CONSOLE_LEVEL``
    Level name or integer rank for the default threshold.
``CONSOLE_VERBOSE``
    Truthy value enables verbose entry headers.
``CONSOLE_OUTPUT``
    ``terminal`` (default), ``text`` (never colour) or ``json``.
``CONSOLE_<LEVEL>``
    Comma separated subsystem names registered with the resolver.
``NO_COLOR`` / ``FORCE_COLOR``
    Honoured through Rich's terminal probe.
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv


DOTENV_ENV_VAR = "LIB_LOG_CONSOLE_USE_DOTENV"
OUTPUT_FORMATS = ("terminal", "text", "json")
_TRUTHY = {"1", "true", "yes", "on"}

_DOTENV_LOCK = threading.Lock()
_DOTENV_PATH: Path | None = None


def env_flag(value: str | None) -> bool | None:
    """Interpret ``1/true/yes/on`` style strings; ``None`` when unset.

    Examples
    --------
    >>> env_flag("On"), env_flag("0"), env_flag(None)
    (True, False, None)
    """

    if value is None or not value.strip():
        return None
    return value.strip().lower() in _TRUTHY


@dataclass(slots=True, frozen=True)
class ConsoleSettings:
    """Snapshot of console-related environment variables."""

    level: str | None = None
    verbose: bool | None = None
    output_format: str = "terminal"
    subsystems: Mapping[str, tuple[str, ...]] | None = None


def _split_names(raw: str) -> tuple[str, ...]:
    return tuple(name.strip() for name in raw.split(",") if name.strip())


def load_settings(env: Mapping[str, str] | None = None, level_names: tuple[str, ...] = ()) -> ConsoleSettings:
    """Parse ``env`` (defaults to :data:`os.environ`) into :class:`ConsoleSettings`.

    ``level_names`` selects which ``CONSOLE_<LEVEL>`` variables are collected.
    Unknown ``CONSOLE_OUTPUT`` values fall back to ``terminal``.
    """

    source = os.environ if env is None else env
    level = source.get("CONSOLE_LEVEL") or None
    output_format = (source.get("CONSOLE_OUTPUT") or "terminal").strip().lower()
    if output_format not in OUTPUT_FORMATS:
        output_format = "terminal"
    subsystems: dict[str, tuple[str, ...]] = {}
    for name in level_names:
        raw = source.get(f"CONSOLE_{name.upper()}")
        if raw:
            subsystems[name] = _split_names(raw)
    return ConsoleSettings(
        level=level.strip() if level else None,
        verbose=env_flag(source.get("CONSOLE_VERBOSE")),
        output_format=output_format,
        subsystems=subsystems or None,
    )


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` loading is enabled; an explicit flag wins."""

    if explicit is not None:
        return explicit
    return bool(env_flag(env_value))


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` without overriding existing variables.

    Returns the resolved path that was loaded, or ``None`` when no file exists.
    Repeated calls reuse the first successful result.
    """

    global _DOTENV_PATH
    with _DOTENV_LOCK:
        if _DOTENV_PATH is not None:
            return _DOTENV_PATH
        if search_from is not None:
            candidate = _search_upwards(search_from)
        else:
            found = find_dotenv(usecwd=True)
            candidate = Path(found).resolve() if found else None
        if candidate is None:
            return None
        load_dotenv(candidate, override=False)
        _DOTENV_PATH = candidate
        return candidate


def _search_upwards(start: Path) -> Path | None:
    directory = start.resolve()
    if directory.is_file():
        directory = directory.parent
    for folder in (directory, *directory.parents):
        candidate = folder / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_PATH
    with _DOTENV_LOCK:
        _DOTENV_PATH = None


__all__ = [
    "ConsoleSettings",
    "DOTENV_ENV_VAR",
    "OUTPUT_FORMATS",
    "enable_dotenv",
    "env_flag",
    "load_settings",
    "should_use_dotenv",
]
