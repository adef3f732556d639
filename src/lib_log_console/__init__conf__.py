"""Static package metadata surfaced by the CLI banner."""

from __future__ import annotations

import sys
from typing import Callable

name = "lib_log_console"
title = "Console diagnostic logging with severity filters, failure-isolated outputs, and terminal styles"
version = "0.1.0"
author = "bitranox"
shell_command = "lib_log_console"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Write the metadata banner line by line through ``writer``.

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0]
    'Info for lib_log_console:\\n'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("shell_command", shell_command),
    ]
    emit = writer if writer is not None else sys.stdout.write
    pad = max(len(label) for label, _ in fields)
    emit(f"Info for {name}:\n")
    emit("\n")
    for label, value in fields:
        emit(f"    {label:<{pad}} = {value}\n")
