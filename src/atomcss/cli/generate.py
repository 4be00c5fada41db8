"""
Generation commands for the atomcss CLI.

- generate: scan a mini program once and write the stylesheets
- watch: regenerate whenever pages, stylesheets or scripts change
"""

from __future__ import annotations

import time
from pathlib import Path

import typer

from atomcss.core.errors import AtomCssError
from atomcss.core.pipeline import (
    GenerationContext,
    GenerationReport,
    GenerationStatus,
    load_context,
    run_generation,
)
from atomcss.core.project import ensure_work_dir
from atomcss.runtime.watcher import RegenerationWatcher

from .utils import console, load_running_config


def _prepare(path: Path, config_path: Path | None) -> tuple[Path, GenerationContext]:
    root = path.resolve()
    config = load_running_config(root, config_path)
    work_dir = ensure_work_dir(root, config)
    return work_dir, load_context(config)


def print_report(report: GenerationReport) -> None:
    """Summarize one generation run on the console."""
    result = report.result
    if report.status is GenerationStatus.NOTHING_MISSING:
        console.print("[dim]No class names to create.[/dim]")
        return

    if result is None:
        return
    if result.warnings:
        console.print(
            f"[yellow]{len(result.warnings)} class name(s) not matched:[/yellow] "
            + ", ".join(result.warnings)
        )
    for error in result.value_errors:
        console.print(f"[red]Skipped variable: {error}[/red]")

    if report.status is GenerationStatus.NOTHING_RESOLVED:
        console.print("[yellow]Nothing resolved, no files written.[/yellow]")
        return

    resolved = len(result.infos) - len(result.warnings)
    console.print(
        f"[green]✓ {resolved} class name(s), {len(result.units)} unit and "
        f"{len(result.colors)} color variable(s)[/green]"
    )
    console.print(f"  [dim]{report.var_file}[/dim]")
    console.print(f"  [dim]{report.output_file}[/dim]")


def generate_command(
    path: Path = typer.Argument(
        Path("."),
        help="Mini program project directory",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: atomcss.toml in the project directory)",
    ),
) -> None:
    """
    Generate atomic CSS for the class names used in a mini program.

    Exit status: 0 files written, 1 nothing to create (or an error),
    2 no class name could be resolved.
    """
    try:
        work_dir, context = _prepare(path, config_path)
        report = run_generation(work_dir, context)
    except AtomCssError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    print_report(report)
    if report.status is not GenerationStatus.WRITTEN:
        raise typer.Exit(int(report.status))


def watch_command(
    path: Path = typer.Argument(
        Path("."),
        help="Mini program project directory",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: atomcss.toml in the project directory)",
    ),
) -> None:
    """Watch a mini program and regenerate atomic CSS on every change."""
    try:
        work_dir, context = _prepare(path, config_path)
    except AtomCssError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    watcher = RegenerationWatcher(work_dir, context, on_report=print_report)
    watcher.regenerate()
    watcher.start()
    console.print(f"[bold]Watching {work_dir}[/bold] [dim](Ctrl+C to stop)[/dim]")
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped.[/dim]")
    finally:
        watcher.stop()
