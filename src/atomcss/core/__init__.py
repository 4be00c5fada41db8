"""Core atomcss functionality: rule table, palette, resolver, value generation, project scanning."""

from . import ir
from .data_loader import load_rule_table, load_theme_map
from .errors import (
    AtomCssError,
    ColorValueError,
    ConfigError,
    ErrorContext,
    RuleConfigError,
    ThemeConfigError,
    UnitValueError,
    ValueMaterializationError,
)
from .formatter import BatchResult, generate_batch, generate_vars
from .manifest import RunningConfig, load_config
from .resolver import StyleResolver, resolve_expression
from .rule_table import RuleTable, build_rule_table

__all__ = [
    "ir",
    "AtomCssError",
    "BatchResult",
    "ColorValueError",
    "ConfigError",
    "ErrorContext",
    "RuleConfigError",
    "RuleTable",
    "RunningConfig",
    "StyleResolver",
    "ThemeConfigError",
    "UnitValueError",
    "ValueMaterializationError",
    "build_rule_table",
    "generate_batch",
    "generate_vars",
    "load_config",
    "load_rule_table",
    "load_theme_map",
    "resolve_expression",
]
