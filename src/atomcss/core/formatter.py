"""
Batch formatter.

Combines the StyleInfo records of many expressions into two texts:

- the rule text, every non-empty block in resolution order followed by
  the dependency blocks (keyframes) the rules asked for
- one variable block: ``<root> { --unit-*: ...; --color-*: ...; }``
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from .errors import ValueMaterializationError
from .ir.style import CssOption, StyleInfo
from .ir.theme import ThemeMap
from .resolver import StyleResolver
from .values import calc_unit_value, resolve_color_reference, sort_units

logger = logging.getLogger(__name__)

_SPACE_AROUND_RE = re.compile(r"\s*([{};:,])\s*")
_SPACE_RE = re.compile(r"\s+")


@dataclass
class BatchResult:
    """Output of one batch run."""

    expressions: list[str]
    infos: dict[str, StyleInfo] = field(default_factory=dict)
    styles: str = ""
    variables: str = ""
    units: list[str] = field(default_factory=list)
    colors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    value_errors: list[ValueMaterializationError] = field(default_factory=list)

    @property
    def has_output(self) -> bool:
        """False when nothing resolved, in which case nothing should be written."""
        return bool(self.styles)


def minify_css(text: str) -> str:
    """Drop insignificant whitespace and the last ``;`` of each block."""
    text = _SPACE_AROUND_RE.sub(r"\1", text)
    text = _SPACE_RE.sub(" ", text).strip()
    return text.replace(";}", "}")


def apply_var_prefix(text: str, prefix: str) -> str:
    """Rename ``--unit-``/``--color-`` variables to ``--<prefix>unit-``/``--<prefix>color-``."""
    if not prefix:
        return text
    return text.replace("--unit-", f"--{prefix}unit-").replace("--color-", f"--{prefix}color-")


def generate_vars(
    units: Iterable[str],
    colors: Iterable[str],
    css_option: CssOption,
    theme_map: ThemeMap,
    *,
    strict: bool = True,
    errors: list[ValueMaterializationError] | None = None,
) -> str:
    """
    Generate the CSS variable block for unit and color references.

    Units are sorted by numeric value, colors keep the given order.

    Args:
        units: unit tokens
        colors: color references
        css_option: output options (root selector, unit ratio, palette)
        theme_map: the palette
        strict: re-raise value errors instead of skipping the variable
        errors: collects skipped value errors when not strict

    Raises:
        ValueMaterializationError: in strict mode, for the first bad value
    """
    indent = css_option.indent
    lines = [f"{css_option.root_element_name} {{"]

    def emit(name: str, compute: Callable[[], str]) -> None:
        try:
            lines.append(f"{indent}--{name}: {compute()};")
        except ValueMaterializationError as e:
            if strict:
                raise
            logger.error("Skipping --%s: %s", name, e)
            if errors is not None:
                errors.append(e)

    for unit in sort_units(units):
        emit(f"unit-{unit}", lambda unit=unit: calc_unit_value(unit, css_option.one))

    for color in colors:
        emit(
            f"color-{color}",
            lambda color=color: resolve_color_reference(theme_map, css_option.palette, color),
        )

    lines.append("}")
    text = apply_var_prefix("\n".join(lines), css_option.var_prefix)
    return minify_css(text) if css_option.minify else text


def render_styles(infos: Iterable[StyleInfo], css_option: CssOption) -> str:
    """Concatenate the CSS blocks of resolved expressions."""
    blocks = ["\n".join(info.styles) for info in infos if info.styles]
    if not blocks:
        return ""
    text = apply_var_prefix("\n".join(blocks) + "\n", css_option.var_prefix)
    return minify_css(text) if css_option.minify else text


def _log_task(expression: str, info: StyleInfo) -> None:
    details = [
        f"{label} = {','.join(values)}"
        for label, values in (
            ("units", info.units),
            ("colors", info.colors),
            ("warnings", info.warnings),
            ("classNames", info.class_names),
        )
        if values
    ]
    logger.info("[task] %-20s %s", expression, " ".join(details))


def generate_batch(
    expressions: Iterable[str],
    resolver: StyleResolver,
    theme_map: ThemeMap,
    css_option: CssOption | None = None,
    *,
    declared: Iterable[str] = (),
    strict: bool = False,
    show_task_result: bool = False,
) -> BatchResult:
    """
    Resolve a batch of expressions and format the output texts.

    Dependencies named by the resolved rules are resolved as well, unless
    they are already declared elsewhere.

    Args:
        expressions: class-name expressions missing a declaration
        resolver: resolver bound to the rule table
        theme_map: palette for color variables
        css_option: output options, defaults to the resolver's
        declared: names already present in existing stylesheets
        strict: abort on the first value error instead of skipping it
        show_task_result: log one line per resolved expression
    """
    css_option = css_option or resolver.css_option
    ordered = list(dict.fromkeys(expressions))
    result = BatchResult(expressions=ordered)
    known = set(declared)

    pending = list(ordered)
    while pending:
        dependencies: list[str] = []
        for expression in pending:
            if expression in result.infos:
                continue
            info = resolver.resolve(expression)
            result.infos[expression] = info
            if show_task_result:
                _log_task(expression, info)
            dependencies.extend(info.class_names)
        pending = [
            name
            for name in dict.fromkeys(dependencies)
            if name not in result.infos and name not in known
        ]

    infos = list(result.infos.values())
    result.warnings = sorted({w for info in infos for w in info.warnings})
    result.units = sorted({u for info in infos for u in info.units})
    result.colors = sorted({c for info in infos for c in info.colors})
    result.styles = render_styles(infos, css_option)

    if result.warnings:
        logger.warning(
            "%d class names not matched: %s", len(result.warnings), ",".join(result.warnings)
        )
    if not result.has_output:
        return result

    result.variables = generate_vars(
        result.units,
        result.colors,
        css_option,
        theme_map,
        strict=strict,
        errors=result.value_errors,
    )
    return result
