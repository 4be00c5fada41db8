"""
Rule and theme file loading.

Rule files hold a list of rule records, theme files a palette mapping.
Both may be YAML (``.yaml``/``.yml``) or JSON. Without a path the
defaults bundled in ``atomcss/data`` are used.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .errors import RuleConfigError, ThemeConfigError
from .ir.theme import ThemeMap
from .palette import build_theme_map
from .rule_table import RuleTable, build_rule_table

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_RULE_FILE = DATA_DIR / "rules.yaml"
DEFAULT_THEME_FILE = DATA_DIR / "themes.yaml"


def read_data_file(path: Path) -> Any:
    """
    Read a YAML or JSON data file.

    Raises:
        OSError: if the file cannot be read
        ValueError: if the content cannot be parsed
    """
    content = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e


def load_rule_table(path: Path | None = None) -> RuleTable:
    """
    Load and compile a rule table.

    Args:
        path: rule file, or None for the bundled defaults

    Raises:
        RuleConfigError: if the file is missing, unparseable or invalid
    """
    path = path or DEFAULT_RULE_FILE
    try:
        data = read_data_file(path)
    except (OSError, ValueError) as e:
        raise RuleConfigError(f"Cannot read rule file {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("rules")
    if not isinstance(data, list):
        raise RuleConfigError(f"Rule file {path} must contain a list of rules")

    table = build_rule_table(data, source=path)
    logger.info("[task] read %d rules from %s", len(table), path)
    return table


def load_theme_map(path: Path | None = None) -> ThemeMap:
    """
    Load and validate a theme palette.

    Args:
        path: theme file, or None for the bundled defaults

    Raises:
        ThemeConfigError: if the file is missing, unparseable or invalid
    """
    path = path or DEFAULT_THEME_FILE
    try:
        data = read_data_file(path)
    except (OSError, ValueError) as e:
        raise ThemeConfigError(f"Cannot read theme file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ThemeConfigError(f"Theme file {path} must contain a mapping")

    theme_map = build_theme_map(data, source=path)
    logger.info("[task] read %d themes from %s", len(theme_map.theme_names()), path)
    return theme_map
