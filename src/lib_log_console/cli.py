"""Click command-line interface for demonstrating the console logger.

Purpose
-------
Give operators a quick way to see how entries, styles, and output formats look
on their terminal, and expose the package metadata banner.

Contents
--------
* :func:`cli` – Click group with ``info``, ``demo`` and ``styles`` commands.
* :func:`main` – entry point running the group through ``lib_cli_exit_tools``.

System Role
-----------
Presentation layer only; every command goes through the public runtime API.
"""

from __future__ import annotations

import os
import sys
from typing import Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as config_module
from . import summary_info
from .adapters.destination import StreamDestination
from .adapters.output import DEFAULT_PALETTE, build_output
from .adapters.terminal import for_destination
from .domain.levels import SEVERITY
from .runtime.logger import Logger


CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load environment variables from a nearby .env (overrides {config_module.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool | None) -> None:
    """Root command storing global flags and printing the banner by default."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    if config_module.should_use_dotenv(explicit=use_dotenv, env_value=os.getenv(config_module.DOTENV_ENV_VAR)):
        config_module.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect installation details."""

    click.echo(summary_info(), nl=False)


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--level",
    type=click.Choice(list(SEVERITY.names), case_sensitive=False),
    default=None,
    help="Threshold for the demo logger (defaults to CONSOLE_LEVEL or info).",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(list(config_module.OUTPUT_FORMATS), case_sensitive=False),
    default=None,
    help="Output format (defaults to CONSOLE_OUTPUT or terminal).",
)
@click.option("--verbose/--no-verbose", default=None, help="Add pid, task and timestamp details.")
@click.option("--color/--no-color", default=None, help="Force colour on or off.")
def cli_demo(level: str | None, output_format: str | None, verbose: bool | None, color: bool | None) -> None:
    """Emit one entry per severity plus a short progress run to stdout."""

    if verbose is None:
        verbose = Logger.is_verbose_default()
    output = build_output(
        sys.stdout,
        output_format=output_format,
        verbose=verbose,
        force_color=color,
        no_color=None if color is None else not color,
    )
    logger = Logger(output, level=level if level is not None else Logger.default_log_level(), verbose=verbose)
    emitted = 0
    with logger:
        for index, name in enumerate(SEVERITY.names):
            if logger.log(name, f"{name} entry\nsecond line of the {name} entry", subject="demo", index=index):
                emitted += 1
        try:
            raise RuntimeError("demonstration failure")
        except RuntimeError as exc:
            if logger.failure("caught an exception", exc, subject="demo"):
                emitted += 1
        progress = logger.progress("demo.progress", 3, minimum_output_duration=0)
        for _ in range(3):
            progress.increment()
    click.echo(f"emitted {emitted} entries", err=True)


@cli.command("styles", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--color/--no-color", default=None, help="Force colour on or off.")
def cli_styles(color: bool | None) -> None:
    """Print every named style of the default palette in its own style."""

    terminal = for_destination(
        StreamDestination(sys.stdout),
        force_color=color,
        no_color=None if color is None else not color,
    )
    for name, tokens in DEFAULT_PALETTE.items():
        terminal.register(name, *tokens)
        described = ", ".join(token for token in tokens if token is not None)
        terminal.print_line(name, f"{name:<12} {described}")
    terminal.flush()


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI through ``lib_cli_exit_tools`` and return its exit code.

    Traceback preferences toggled by ``--traceback`` are restored afterwards
    unless ``restore_traceback`` is ``False``.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
