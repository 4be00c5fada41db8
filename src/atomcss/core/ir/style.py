"""
Per-expression resolution results and CSS output options.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class UnitValueDeclaration:
    """
    Ratio used to turn a design unit into a CSS length: value * from / to.

    With ``from_=1, to=7.5, unit="vmin"`` a 750-unit wide design maps onto
    100vmin.
    """

    from_: float = 1
    to: float = 7.5
    precision: int = 3
    unit: str = "vmin"


@dataclass(frozen=True)
class CssOption:
    """Options controlling generated CSS text."""

    root_element_name: str = "page"
    palette: str = "antd"
    minify: bool = False
    var_prefix: str = ""
    indent: str = "    "
    component_global_css: str = r"addGlobalClass:\s*true"
    one: UnitValueDeclaration = field(default_factory=UnitValueDeclaration)


@dataclass
class PropertyValueParameter:
    """
    Values captured by matching one expression against a dynamic rule.

    unit: ``[U]``, integer (``20``), decimal (``d5`` = 0.5, ``d05`` = 0.05)
        or percent (``p50`` = 50%)
    number: ``[N]``, integer, usually a color order
    color: ``[C]``, theme name
    alpha: ``[A]``, alpha digits, ``a5`` in a class name
    """

    unit: str | None = None
    number: str | None = None
    color: str | None = None
    alpha: str | None = None

    def color_reference(self) -> str | None:
        """Compose ``color[-number][-alpha]``, or None without a color."""
        if not self.color:
            return None
        parts = [self.color]
        if self.number:
            parts.append(self.number)
        if self.alpha:
            parts.append(self.alpha)
        return "-".join(parts)


@dataclass
class StyleInfo:
    """
    Resolution result for one class-name expression.

    Attributes:
        units: referenced unit tokens, deduplicated
        colors: referenced color references, deduplicated
        styles: CSS block lines, ``.name {`` ... ``}``, or empty
        warnings: the expression itself when no rule matched
        class_names: dependency blocks (e.g. keyframes) to emit as well
    """

    units: list[str] = field(default_factory=list)
    colors: list[str] = field(default_factory=list)
    styles: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    class_names: list[str] = field(default_factory=list)
