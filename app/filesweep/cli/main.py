"""Main CLI application entry point.

Defines the Typer application, the sweep options and global options.
Running ``filesweep`` without a subcommand performs a sweep.
"""

import io
import logging
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Annotated, TextIO

import typer
from rich.logging import RichHandler

from filesweep import __version__
from filesweep.cli.commands import config
from filesweep.core.settings import SettingsError, load_settings
from filesweep.sweep.models import SweepConfig, SweepError, SweepSummary
from filesweep.sweep.walker import run_sweep
from filesweep.utils.formatting import err_console, format_size, print_error, print_warning

logger = logging.getLogger(__name__)

# Create main Typer app
app = typer.Typer(
    name="filesweep",
    help="Walk a directory tree and list, archive or delete matching files.",
    invoke_without_command=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"filesweep version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send filesweep diagnostic logging to stderr through Rich."""
    package_logger = logging.getLogger("filesweep")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.addHandler(RichHandler(console=err_console, show_path=False))
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


@app.callback()
def main(
    ctx: typer.Context,
    root: Annotated[
        str | None,
        typer.Option("--root", help="Root directory to start from (default: current directory)."),
    ] = None,
    log: Annotated[
        str | None,
        typer.Option("--log", help="Append delete records to this file instead of stdout."),
    ] = None,
    list_files: Annotated[
        bool,
        typer.Option("--list", help="List matching files only."),
    ] = False,
    delete: Annotated[
        bool,
        typer.Option("--del", help="Delete matching files."),
    ] = False,
    archive: Annotated[
        str | None,
        typer.Option("--archive", help="Copy matching files into this directory."),
    ] = None,
    ext: Annotated[
        str | None,
        typer.Option("--ext", help="Only match files with this extension (e.g. .log)."),
    ] = None,
    size: Annotated[
        int | None,
        typer.Option("--size", min=0, help="Only match files of at least this many bytes."),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Read defaults from this file."),
    ] = None,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """filesweep - Walk a directory tree and act on matching files.

    Matching files are listed by default. With --archive they are copied
    into a mirrored tree, with --del they are removed and each removal is
    recorded. Archiving runs before deleting.
    """
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path

    configure_logging(verbose)

    if ctx.invoked_subcommand is not None:
        return

    try:
        defaults = load_settings(config_path).sweep
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    log_file = log if log is not None else defaults.log
    log_path = Path(log_file) if log_file else None
    try:
        sweep_config = SweepConfig(
            extension_filter=ext if ext is not None else defaults.ext,
            min_size=size if size is not None else defaults.size,
            list_enabled=list_files,
            delete_enabled=delete,
            archive_root=archive,
        )
    except ValueError as e:
        print_error(f"Invalid options: {e}")
        raise typer.Exit(code=1) from e

    if list_files and delete and not quiet:
        print_warning("--list is ignored when --del is set.")

    summary = _sweep(root or defaults.root, sweep_config, log_path)

    if verbose:
        _print_summary(summary)


def _sweep(root: str, sweep_config: SweepConfig, log_path: Path | None) -> SweepSummary:
    """Open the audit log, run the sweep and map failures to exit code 1."""
    with ExitStack() as stack:
        audit: TextIO | None = None
        if log_path is not None:
            try:
                audit = stack.enter_context(
                    open(log_path, "a", encoding="utf-8", errors="surrogateescape")
                )
            except OSError as e:
                print_error(f"Cannot open log file {log_path}: {e}")
                raise typer.Exit(code=1) from e

        try:
            return run_sweep(root, _output_stream(), sweep_config, audit)
        except SweepError as e:
            logger.debug("Sweep aborted", exc_info=True)
            print_error(str(e))
            raise typer.Exit(code=1) from e


def _output_stream() -> TextIO:
    """Return stdout set to write undecodable file name bytes back unchanged."""
    if isinstance(sys.stdout, io.TextIOWrapper):
        sys.stdout.reconfigure(errors="surrogateescape")
    return sys.stdout


def _print_summary(summary: SweepSummary) -> None:
    """Print run counters on stderr."""
    err_console.print(
        f"[muted]Visited {summary.visited} entries, matched {summary.matched} "
        f"({format_size(summary.bytes_matched)}): listed {summary.listed}, "
        f"archived {summary.archived}, deleted {summary.deleted}[/muted]"
    )


# Register commands
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
