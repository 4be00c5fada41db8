"""
Intermediate representation types for atomcss.

Rule and theme records are pydantic models validated at load time; the
per-expression results are plain dataclasses.
"""

from .rules import AtomicStyleRule
from .style import CssOption, PropertyValueParameter, StyleInfo, UnitValueDeclaration
from .theme import SCALAR_THEMES, ThemeMap

__all__ = [
    "AtomicStyleRule",
    "CssOption",
    "PropertyValueParameter",
    "SCALAR_THEMES",
    "StyleInfo",
    "ThemeMap",
    "UnitValueDeclaration",
]
