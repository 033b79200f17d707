"""
Command line interface for placing Composer scaffold files.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import ConfigError, get_settings
from .scaffold import ScaffoldContext, ScaffoldError, ScaffoldReport, build_plan, post_install

console = Console()
app = typer.Typer(help="Place the scaffold files declared by installed Composer packages.")
logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def _configure_logging(level_name: str) -> None:
    env_override = get_settings().log_level
    level_str = (env_override or level_name or "warning").upper()
    if level_str not in {lvl.upper() for lvl in LOG_LEVELS}:
        level_str = "WARNING"
    logging.basicConfig(
        level=getattr(logging, level_str, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


def _resolve_project_path(value: Optional[Path]) -> Path:
    """Default to the descriptor in the working directory and ensure it is a file."""
    candidate = value if value is not None else Path.cwd() / get_settings().project_file
    resolved = candidate.expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"No project file found at {resolved}")
    if not resolved.is_file():
        raise typer.BadParameter(f"Project path must be a file, got directory: {resolved}")
    return resolved


def _load_context_or_exit(project: Path, vendor_dir: Optional[Path]) -> ScaffoldContext:
    try:
        return ScaffoldContext.from_project_file(project, vendor_dir=vendor_dir)
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _print_scaffold_report(report: ScaffoldReport, *, progress: bool) -> None:
    if progress:
        for operation in report.operations:
            console.print(f"  - {operation.describe()}", markup=False, highlight=False)
    for diagnostic in report.diagnostics:
        console.print(f"[yellow]{escape(diagnostic)}[/]", highlight=False)

    table = Table(title="Scaffold Summary")
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key, value in report.summary_rows():
        table.add_row(key, escape(value))
    console.print(table)


@app.callback(invoke_without_command=True)
def _root_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show composer-scaffold version and exit.",
        is_flag=True,
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        help="Logging level (critical, error, warning, info, debug).",
        show_default=True,
        case_sensitive=False,
    ),
) -> None:
    """
    Default command when no subcommand is selected.
    """
    _configure_logging(log_level)

    if version:
        console.print(f"[bold green]composer-scaffold[/] {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print("Run [cyan]composer-scaffold scaffold[/] from the project root to place scaffold files.")


@app.command()
def scaffold(
    project: Optional[Path] = typer.Option(
        None,
        "--project",
        "-p",
        help="Path to the project's composer.json (defaults to $COMPOSER in the working directory).",
        callback=_resolve_project_path,
    ),
    vendor_dir: Optional[Path] = typer.Option(
        None,
        "--vendor-dir",
        help="Composer vendor directory (defaults to config.vendor-dir).",
    ),
    no_progress: bool = typer.Option(
        False,
        "--no-progress",
        help="Do not list every scaffolded file.",
    ),
    autoload: bool = typer.Option(
        True,
        "--autoload/--no-autoload",
        help="Generate autoload.php in the web root after scaffolding.",
    ),
) -> None:
    """
    Copy or link scaffold files from the allowed packages into the project.
    """
    context = _load_context_or_exit(project, vendor_dir)
    try:
        report = post_install(context, autoload=autoload)
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    except ScaffoldError as exc:
        console.print(f"[bold red]Scaffolding failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    _print_scaffold_report(report, progress=not no_progress)
    console.print("[bold green]Scaffolding complete.[/]")


@app.command()
def plan(
    project: Optional[Path] = typer.Option(
        None,
        "--project",
        "-p",
        help="Path to the project's composer.json (defaults to $COMPOSER in the working directory).",
        callback=_resolve_project_path,
    ),
    vendor_dir: Optional[Path] = typer.Option(
        None,
        "--vendor-dir",
        help="Composer vendor directory (defaults to config.vendor-dir).",
    ),
) -> None:
    """
    Show the merged file mapping without changing anything on disk.
    """
    context = _load_context_or_exit(project, vendor_dir)
    try:
        entries = build_plan(context)
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    table = Table(title="Scaffold Plan")
    table.add_column("Package")
    table.add_column("Source", overflow="fold")
    table.add_column("Destination", overflow="fold")
    for entry in entries:
        table.add_row(
            escape(entry.package_name),
            escape(entry.source),
            escape(entry.destination) if entry.destination is not None else "[dim]disabled[/]",
        )
    console.print(table)


def main() -> None:
    """
    Entry-point used by the console script defined in pyproject.toml.
    """
    app()
