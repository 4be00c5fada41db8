"""
Expression resolver.

Expands one class-name expression into a CSS block:

1. Search rules: package import (expression with ``.``), static syntax,
   dynamic key, then every dynamic rule whose matcher accepts the
   expression.
2. Expand depth-first. Rules reached through ``compose`` are pushed to
   the front of the work list, so the most recently discovered rule is
   processed next.
3. Fold every declaration into one ``.<expression> { ... }`` block.

Units and colors are collected as references only; turning them into
values is left to the batch formatter.
"""

from __future__ import annotations

import logging
from collections import deque

from .errors import RuleConfigError
from .ir.style import CssOption, PropertyValueParameter, StyleInfo
from .ir.theme import ThemeMap
from .patterns import SlotKind, fill_placeholders
from .rule_table import CompiledRule, RuleTable

logger = logging.getLogger(__name__)

# Upper bound on rules expanded for one expression; only a composition
# cycle in the rule table can reach it.
MAX_EXPANSIONS = 512


def _unique(values: list[str]) -> list[str]:
    return list(dict.fromkeys(v for v in values if v))


def _slot_values(params: PropertyValueParameter | None) -> dict[SlotKind, str | None] | None:
    if params is None:
        return None
    return {
        SlotKind.UNIT: params.unit,
        SlotKind.NUMBER: params.number,
        SlotKind.COLOR: params.color,
        SlotKind.ALPHA: params.alpha,
    }


def block_selector(expression: str) -> str:
    """Selector for an expression's block; at-rule names are used as is."""
    if expression.startswith("@"):
        return expression
    return f".{expression}"


class StyleResolver:
    """
    Resolves class-name expressions against a rule table.

    The theme map is only consulted to tell single-color themes apart, so
    that ``bg-white-5`` reads 5 as an alpha rather than an order.
    """

    def __init__(
        self,
        rule_table: RuleTable,
        theme_map: ThemeMap | None = None,
        css_option: CssOption | None = None,
    ):
        self.rule_table = rule_table
        self.theme_map = theme_map
        self.css_option = css_option or CssOption()

    def search_rules(self, expression: str) -> list[CompiledRule]:
        """Find every rule applicable to an expression."""
        if not expression:
            return []

        # package import of static rules, e.g. "layout.flex"
        if "." in expression:
            return [
                rule
                for rule in self.rule_table.rules
                if expression in rule.package and not rule.is_dynamic
            ]

        rule = self.rule_table.rule_map.get(expression)
        if rule is not None:
            return [rule]

        rule = self.rule_table.dynamic_map.get(expression)
        if rule is not None and rule.accepts(expression):
            return [rule]

        return [rule for rule in self.rule_table.rules if rule.is_dynamic and rule.accepts(expression)]

    def _is_single_color(self, theme: str) -> bool:
        if self.theme_map is None:
            return False
        ramp = self.theme_map.ramp(self.css_option.palette, theme)
        return ramp is not None and len(ramp) == 1

    def extract_parameters(self, expression: str, rule: CompiledRule) -> PropertyValueParameter | None:
        """Capture slot values of a dynamic rule; None for static rules."""
        if not rule.is_dynamic:
            return None

        params = PropertyValueParameter()
        captured = rule.match(expression)
        if not captured:
            return params

        params.unit = captured.get(SlotKind.UNIT) or None
        params.color = captured.get(SlotKind.COLOR) or None
        params.number = captured.get(SlotKind.NUMBER) or None
        params.alpha = captured.get(SlotKind.ALPHA) or None

        if params.color:
            if params.number is None:
                params.number = "1"
            elif params.alpha is None and self._is_single_color(params.color):
                logger.debug(
                    "%r: %s has one color, reading %s as alpha; [N] in the rule becomes 1",
                    expression,
                    params.color,
                    params.number,
                )
                params.alpha = params.number
                params.number = "1"
        return params

    def resolve(self, expression: str) -> StyleInfo:
        """Resolve one expression into a StyleInfo."""
        rules = self.search_rules(expression)
        if not rules:
            logger.debug("No rule matches %r", expression)
            return StyleInfo(warnings=[expression])

        queue: deque[tuple[str, CompiledRule]] = deque((expression, rule) for rule in rules)
        declarations: list[str] = []
        units: list[str] = []
        colors: list[str] = []
        class_names: list[str] = []
        expanded = 0

        while queue:
            current, rule = queue.popleft()
            expanded += 1
            if expanded > MAX_EXPANSIONS:
                raise RuleConfigError(
                    f"composition of {expression!r} exceeds {MAX_EXPANSIONS} rules, "
                    f"check {rule.syntax!r} for a cycle"
                )

            params = self.extract_parameters(current, rule)
            if params is not None:
                if params.unit:
                    units.append(params.unit)
                reference = params.color_reference()
                if reference:
                    colors.append(reference)
            values = _slot_values(params)

            if rule.compose:
                for command in rule.compose:
                    child = fill_placeholders(command, values)
                    child_rules = self.search_rules(child)
                    if not child_rules:
                        logger.debug("Composed %r of %r matches no rule", child, expression)
                    for child_rule in child_rules:
                        units.extend(child_rule.units)
                        colors.extend(child_rule.colors)
                        queue.appendleft((child, child_rule))

            if rule.expr:
                units.extend(rule.units)
                colors.extend(rule.colors)
                declarations.append(fill_placeholders(rule.expr, values))

            if rule.dependencies:
                class_names.extend(rule.dependencies)

        styles: list[str] = []
        if declarations:
            indent = self.css_option.indent
            styles.append(f"{block_selector(expression)} {{")
            styles.extend(f"{indent}{declaration}" for declaration in declarations)
            styles.append("}")

        return StyleInfo(
            units=_unique(units),
            colors=_unique(colors),
            styles=styles,
            warnings=[],
            class_names=_unique(class_names),
        )


def resolve_expression(
    expression: str,
    rule_table: RuleTable,
    theme_map: ThemeMap | None = None,
    css_option: CssOption | None = None,
) -> StyleInfo:
    """Resolve a single expression without keeping a resolver around."""
    return StyleResolver(rule_table, theme_map, css_option).resolve(expression)
