"""
atomcss CLI utilities.

Shared helpers used across CLI modules: version output, logging setup and
loading the running configuration.
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

import typer
from rich.console import Console

from atomcss._version import get_version
from atomcss.core.errors import ConfigError
from atomcss.core.manifest import CONFIG_FILE, RunningConfig, load_config

console = Console()

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        console.print(f"atomcss {get_version()}")
        console.print(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)


def resolve_config_path(root: Path, config_path: Path | None) -> Path:
    """Explicit --config, else atomcss.toml in the project root."""
    if config_path is not None:
        return config_path
    return root / CONFIG_FILE


def load_running_config(root: Path, config_path: Path | None) -> RunningConfig:
    """
    Load the configuration for a project root.

    Raises:
        ConfigError: if an explicit --config is missing or the file is invalid
    """
    path = resolve_config_path(root, config_path)
    if config_path is not None and not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    return load_config(path)
