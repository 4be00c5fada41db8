"""
Value materialization: unit tokens to CSS lengths and color references to
color values.

Unit tokens:
- ``0`` is a bare zero
- ``full`` is ``100%``
- ``20`` is a design unit, scaled by the unit ratio declaration
- ``d5`` / ``d05`` are decimals 0.5 / 0.05, scaled the same way
- ``p50`` is a literal ``50%``

Color references: ``<theme>[-<order>][-[a]<alpha>]``, order 1-based.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable

from .errors import ColorValueError, UnitValueError
from .ir.style import UnitValueDeclaration
from .ir.theme import ThemeMap

FULL_EXTENT_ALIAS = "full"

_NUMBER_RE = re.compile(r"[\d.]+")
_PERCENT_RE = re.compile(r"p(\d+)")
_COLOR_REF_RE = re.compile(r"(?P<theme>[a-z]+)(?:-(?P<order>\d+))?(?:-a?(?P<alpha>\d+))?")
_HEX_RE = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


def _round_half_up(value: float, precision: int) -> float:
    scale = 10**precision
    return math.floor(value * scale + 0.5) / scale


def _format_number(value: float, precision: int) -> str:
    """Shortest decimal text: 2.0 -> "2", 0.0670 -> "0.067"."""
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def calc_unit_value(unit: str, one: UnitValueDeclaration) -> str:
    """
    Convert a unit token into a CSS length or percentage.

    Raises:
        UnitValueError: if the token is not a valid unit token
    """
    if unit == "0":
        return "0"

    if unit == FULL_EXTENT_ALIAS:
        return "100%"

    value = unit.replace("d", "0.", 1)
    if _NUMBER_RE.fullmatch(value):
        try:
            number = float(value)
        except ValueError:
            raise UnitValueError(unit) from None
        scaled = _round_half_up(number * one.from_ / one.to, one.precision)
        return _format_number(scaled, one.precision) + one.unit

    percent = _PERCENT_RE.fullmatch(unit)
    if percent:
        return f"{percent.group(1)}%"

    raise UnitValueError(unit)


def unit_sort_key(unit: str) -> float:
    """
    Numeric position of a unit token: ``d`` reads as ``0.`` and ``p`` as
    ``0.000``. Tokens that still fail to parse sort last.
    """
    try:
        return float(unit.replace("d", "0.").replace("p", "0.000"))
    except ValueError:
        return math.inf


def sort_units(units: Iterable[str]) -> list[str]:
    return sorted(units, key=unit_sort_key)


def parse_color_reference(reference: str) -> tuple[str, str | None, str | None]:
    """
    Split a color reference into (theme, order, alpha).

    Raises:
        ColorValueError: if the reference is malformed
    """
    found = _COLOR_REF_RE.fullmatch(reference)
    if not found:
        raise ColorValueError(reference, f"invalid color {reference}")
    return found.group("theme"), found.group("order"), found.group("alpha")


def append_alpha(color: str, alpha: str) -> str:
    """
    Append ``round(alpha * 2.56)`` as two lowercase hex digits.

    Raises:
        ColorValueError: if the color is not a hex literal
    """
    if not _HEX_RE.fullmatch(color):
        raise ColorValueError(color, f"cannot apply alpha {alpha} to non-hex color {color}")
    if len(color) == 4:
        color = "#" + "".join(c * 2 for c in color[1:])
    channel = min(255, math.floor(int(alpha) * 2.56 + 0.5))
    return f"{color}{channel:02x}"


def _with_alpha(color: str, alpha: str | None) -> str:
    if alpha is None or alpha == "1":
        return color
    return append_alpha(color, alpha)


def generate_color_var(
    theme_map: ThemeMap,
    provider: str,
    theme_name: str,
    order: str | None = None,
    alpha: str | None = None,
) -> str:
    """
    Resolve one color reference to a concrete color value.

    Raises:
        ColorValueError: for an unknown provider/theme, an empty ramp or an
            order outside the ramp
    """
    reference = "-".join(p for p in (theme_name, order, alpha) if p)
    if not theme_name:
        raise ColorValueError(reference, "missing theme name")

    scalar = theme_map.scalar(theme_name)
    if scalar is not None:
        # single-color themes have no order, a trailing number is the alpha
        if alpha is None and order not in (None, "1"):
            alpha = order
        return _with_alpha(scalar, alpha)

    themes = theme_map.palette.get(provider)
    if themes is None:
        raise ColorValueError(reference, f"missing palette {provider}")
    colors = themes.get(theme_name)
    if colors is None:
        raise ColorValueError(reference, f"missing theme {theme_name} in palette {provider}")
    if not colors:
        raise ColorValueError(reference, f"palette {provider} theme {theme_name} is empty")

    if not order:
        return _with_alpha(colors[0], alpha)

    index = int(order) - 1
    if 0 <= index < len(colors):
        return _with_alpha(colors[index], alpha)

    raise ColorValueError(
        reference, f"invalid color value {reference}, {theme_name} has {len(colors)} colors"
    )


def resolve_color_reference(theme_map: ThemeMap, provider: str, reference: str) -> str:
    """Parse and resolve a ``theme-order-alpha`` reference."""
    theme_name, order, alpha = parse_color_reference(reference)
    return generate_color_var(theme_map, provider, theme_name, order, alpha)
