"""Analyze command: scan a Swift file or directory and print the overview."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from .. import __version__
from ..analysis import ProjectScanner
from ..exceptions import ConfigurationError, ScanAbortedError
from ..formatters import get_formatter
from ..logging_config import setup_logging
from . import app
from ._common import console, err_console, resolve_config

EXIT_SCAN_ABORTED = 1
EXIT_USAGE = 2


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"typescope {__version__}")
        raise typer.Exit()


@app.command()
def analyze(
    path: Path = typer.Argument(
        ...,
        help="Swift file or project directory to scan",
    ),
    fmt: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: rich (tree), json (structured report) or graph (type dependencies)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    strict: Optional[bool] = typer.Option(
        None,
        "--strict/--lenient",
        help="Abort on files with syntax errors (default) or analyze what parses",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Also append log records to this file", dir_okay=False
    ),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """
    Scan Swift sources and report declared types, their members and used types.

    The first file that fails to parse stops the scan: the error is printed,
    the files analyzed so far are still reported, and the exit code is 1.

    [bold cyan]Examples:[/bold cyan]

      typescope Sources/

      typescope Sources/App/Model.swift --format json

      typescope . --format graph
    """
    try:
        settings = resolve_config(config=config, fmt=fmt, strict=strict, verbose=verbose, quiet=quiet)
    except ConfigurationError as e:
        err_console.print(
            f"[red]Configuration error:[/red] {escape(str(e))}",
            highlight=False,
            soft_wrap=True,
        )
        raise typer.Exit(EXIT_USAGE)

    setup_logging(settings.verbosity, log_file=str(log_file) if log_file else None)

    if not path.exists():
        err_console.print(
            f"[red]Error:[/red] path does not exist: {escape(str(path))}",
            highlight=False,
            soft_wrap=True,
        )
        raise typer.Exit(EXIT_USAGE)

    exit_code = 0
    scanner = ProjectScanner(settings)
    try:
        overview = scanner.scan(path)
    except ScanAbortedError as e:
        err_console.print(
            f"[red]Error:[/red] {escape(str(e.cause))}",
            highlight=False,
            soft_wrap=True,
        )
        overview = e.partial
        exit_code = EXIT_SCAN_ABORTED

    root = path if path.is_dir() else path.parent
    if overview is not None:
        get_formatter(settings.output_format).render(overview, root, console=console)

    if exit_code:
        raise typer.Exit(exit_code)
