"""
atomcss CLI package.

- generate.py: generate and watch commands
- catalog.py: rules, themes and resolve commands
- utils.py: shared utilities
"""

from __future__ import annotations

import typer

from atomcss._version import get_version

from .catalog import resolve_command, rules_command, themes_command
from .generate import generate_command, watch_command
from .utils import configure_logging, version_callback

__version__ = get_version()

app = typer.Typer(
    help="""atomcss – atomic CSS generator for WeChat mini programs

Commands:
  • generate, watch: write var.wxss/min.wxss for the class names pages use
  • resolve: show the CSS for individual class names
  • rules, themes: list the rule table and the palette
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """atomcss CLI main callback for global options."""
    configure_logging(verbose)


app.command(name="generate")(generate_command)
app.command(name="watch")(watch_command)
app.command(name="resolve")(resolve_command)
app.command(name="rules")(rules_command)
app.command(name="themes")(themes_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = ["__version__", "app", "main"]
