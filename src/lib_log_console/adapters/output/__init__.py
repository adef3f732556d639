"""Output chain nodes and the builder assembling them.

Chains are assembled explicitly, innermost first::

    StreamDestination -> Text | XTerm -> TerminalOutput | SerializedOutput

:class:`~lib_log_console.runtime.logger.Logger` puts a
:class:`FailureIsolatingOutput` on top, so formatting errors are isolated as
well as transport errors.
"""

from __future__ import annotations

from typing import Mapping, TextIO

from lib_log_console.adapters.destination import StreamDestination
from lib_log_console.adapters.terminal import Text, for_destination
from lib_log_console.application.ports.output import OutputPort
from lib_log_console.config import OUTPUT_FORMATS, load_settings

from .failure import DiagnosticHook, FailureIsolatingOutput
from .serialized import SerializedOutput
from .terminal import DEFAULT_PALETTE, TerminalOutput


def build_output(
    stream: TextIO | None = None,
    env: Mapping[str, str] | None = None,
    *,
    output_format: str | None = None,
    verbose: bool | None = None,
    force_color: bool | None = None,
    no_color: bool | None = None,
    owns_stream: bool = False,
) -> OutputPort:
    """Assemble the formatting chain for ``stream`` (defaults to ``sys.stderr``).

    Explicit arguments win over the environment; ``env`` is read once here.

    Examples
    --------
    >>> from io import StringIO
    >>> buffer = StringIO()
    >>> chain = build_output(buffer, env={})
    >>> type(chain).__name__, type(chain.terminal).__name__
    ('TerminalOutput', 'Text')
    >>> type(build_output(buffer, env={"CONSOLE_OUTPUT": "json"})).__name__
    'SerializedOutput'
    """

    settings = load_settings(env)
    fmt = (output_format or settings.output_format).lower()
    if fmt not in OUTPUT_FORMATS:
        raise ValueError(f"output_format must be one of {', '.join(OUTPUT_FORMATS)}")
    destination = StreamDestination(stream, owns_stream=owns_stream)
    if fmt == "json":
        return SerializedOutput(destination)
    if fmt == "text":
        terminal: Text = Text(destination)
    else:
        terminal = for_destination(destination, force_color=force_color, no_color=no_color)
    resolved_verbose = verbose if verbose is not None else bool(settings.verbose)
    return TerminalOutput(terminal, verbose=resolved_verbose)


__all__ = [
    "DEFAULT_PALETTE",
    "DiagnosticHook",
    "FailureIsolatingOutput",
    "SerializedOutput",
    "TerminalOutput",
    "build_output",
]
