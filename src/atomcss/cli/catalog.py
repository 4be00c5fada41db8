"""
Inspection commands for the atomcss CLI.

- rules: list the rule table grouped by package
- themes: list the palette with short aliases
- resolve: show what class-name expressions expand to
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.table import Table

from atomcss.core.data_loader import load_rule_table, load_theme_map
from atomcss.core.errors import AtomCssError
from atomcss.core.formatter import generate_batch
from atomcss.core.ir.style import StyleInfo
from atomcss.core.manifest import RunningConfig
from atomcss.core.palette import derive_color_aliases
from atomcss.core.resolver import StyleResolver

from .utils import console, load_running_config

CONFIG_OPTION_HELP = "Config file (default: atomcss.toml in the current directory)"


def _config(config_path: Path | None) -> RunningConfig:
    return load_running_config(Path.cwd(), config_path)


def rules_command(
    package: str | None = typer.Option(
        None, "--package", "-p", help="Only rules whose package contains this text"
    ),
    config_path: Path | None = typer.Option(None, "--config", "-c", help=CONFIG_OPTION_HELP),
) -> None:
    """List the rule table, grouped by package."""
    try:
        config = _config(config_path)
        rule_table = load_rule_table(config.data_path(config.data.rule_file))
    except AtomCssError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    shown = 0
    for name, rules in rule_table.packages().items():
        if package and package not in name:
            continue
        table = Table(title=name)
        table.add_column("Syntax", style="cyan", no_wrap=True)
        table.add_column("Expands to")
        table.add_column("Description", style="dim")
        for rule in rules:
            expands = rule.expr or " ".join(rule.compose or [])
            table.add_row(rule.syntax, expands, rule.rule.desc or "")
            shown += 1
        console.print(table)

    if not shown:
        console.print("[dim]No rules found.[/dim]")
        return
    console.print(f"\n[dim]{shown} rule(s) shown[/dim]")


def themes_command(
    config_path: Path | None = typer.Option(None, "--config", "-c", help=CONFIG_OPTION_HELP),
) -> None:
    """List the palette themes of the configured provider."""
    try:
        config = _config(config_path)
        theme_map = load_theme_map(config.data_path(config.data.theme_file))
    except AtomCssError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    provider = config.css.palette
    aliases = derive_color_aliases(theme_map)
    table = Table(title=f"Themes ({provider})")
    table.add_column("Alias", style="cyan", no_wrap=True)
    table.add_column("Theme", no_wrap=True)
    table.add_column("Size", justify="right")
    table.add_column("Colors")

    for name in theme_map.theme_names():
        ramp = theme_map.ramp(provider, name)
        if ramp is None:
            continue
        table.add_row(aliases[name], name, str(len(ramp)), " ".join(ramp))

    console.print(table)


def _print_info(expression: str, info: StyleInfo) -> None:
    if info.warnings:
        console.print(f"[yellow]{expression}: no rule matches[/yellow]")
        return
    console.print(f"[bold]{expression}[/bold]")
    for label, values in (
        ("units", info.units),
        ("colors", info.colors),
        ("classNames", info.class_names),
    ):
        if values:
            console.print(f"  [dim]{label}:[/dim] {', '.join(values)}")


def resolve_command(
    expressions: list[str] = typer.Argument(..., help="Class-name expressions, e.g. px-20 bg-red-2"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help=CONFIG_OPTION_HELP),
) -> None:
    """Resolve class-name expressions and print the generated CSS."""
    try:
        config = _config(config_path)
        rule_table = load_rule_table(config.data_path(config.data.rule_file))
        theme_map = load_theme_map(config.data_path(config.data.theme_file))
        resolver = StyleResolver(rule_table, theme_map, config.css)
        result = generate_batch(expressions, resolver, theme_map, config.css, strict=True)
    except AtomCssError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    for expression in result.expressions:
        _print_info(expression, result.infos[expression])

    if not result.has_output:
        raise typer.Exit(2)

    console.print()
    console.print(result.variables, markup=False, highlight=False, soft_wrap=True)
    console.print(result.styles, markup=False, highlight=False, soft_wrap=True)
