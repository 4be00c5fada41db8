"""
Error types for atomcss rule loading, theme loading and value generation.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class AtomCssError(Exception):
    """Base exception for all atomcss errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class ConfigError(AtomCssError):
    """
    Raised when the running configuration cannot be loaded.

    Examples:
    - Invalid TOML in atomcss.toml
    - Wrongly typed option values
    - Working directory without a mini program
    """

    pass


class RuleConfigError(ConfigError):
    """
    Raised when the rule table is malformed.

    Examples:
    - Unbalanced placeholder bracket in a syntax
    - Unknown placeholder letter such as ``[X]``
    - The same placeholder used twice in one syntax
    - Rule records failing schema validation
    """

    pass


class ThemeConfigError(ConfigError):
    """
    Raised when the theme palette is malformed.

    Examples:
    - Missing primary/black/white scalars
    - A palette ramp that is not a list of strings
    """

    pass


class ValueMaterializationError(AtomCssError):
    """
    Raised when one CSS variable value cannot be produced.

    Fatal for that single variable only; the caller decides whether the
    whole batch is aborted.
    """

    pass


class UnitValueError(ValueMaterializationError):
    """Raised for a unit token that is not a number, decimal or percent token."""

    def __init__(self, token: str, message: str | None = None):
        self.token = token
        super().__init__(message or f"invalid unit value: {token}")


class ColorValueError(ValueMaterializationError):
    """
    Raised for a color reference that cannot be resolved.

    Examples:
    - Unknown provider or theme
    - Empty ramp
    - Color order outside the ramp
    """

    def __init__(self, reference: str, message: str | None = None):
        self.reference = reference
        super().__init__(message or f"invalid color value: {reference}")


@dataclass
class ErrorContext:
    """
    Context information for a configuration error.

    Attributes:
        source: Path of the rule/theme/config file, if known
        index: 1-based position of the offending record
        syntax: Syntax of the offending rule
    """

    source: Path | None = None
    index: int | None = None
    syntax: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "rules.yaml rule #12 [px-[U]]"
        """
        parts: list[str] = []
        if self.source:
            parts.append(str(self.source))
        if self.index is not None:
            parts.append(f"rule #{self.index}")
        if self.syntax is not None:
            parts.append(f"[{self.syntax}]")
        return " ".join(parts) or "<inline>"


def make_rule_error(
    message: str,
    syntax: str | None = None,
    index: int | None = None,
    source: Path | None = None,
) -> RuleConfigError:
    """
    Helper to create a RuleConfigError with context.

    Args:
        message: Error description
        syntax: Syntax of the offending rule
        index: 1-based position in the rule list
        source: Rule file path

    Returns:
        RuleConfigError with context attached
    """
    if syntax is None and index is None and source is None:
        return RuleConfigError(message)
    return RuleConfigError(message, ErrorContext(source=source, index=index, syntax=syntax))
