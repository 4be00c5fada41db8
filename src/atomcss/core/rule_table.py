"""
Rule table loader.

Turns raw rule records into a lookup table:

1. Static unit/color variable references in ``expr`` are extracted once.
2. Dynamic syntaxes are compiled into anchored matchers and stored under
   their placeholder-free key in ``dynamic_map``.
3. Static syntaxes are stored under the literal syntax in ``rule_map``.
   The maps are separate, so a static ``gap-`` stays reachable next to a
   dynamic ``gap-[U]``.

Any malformed record aborts the whole load.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import RuleConfigError, make_rule_error
from .ir.rules import AtomicStyleRule
from .patterns import SlotKind, SyntaxPattern, compile_syntax, has_placeholder, parse_syntax

logger = logging.getLogger(__name__)

_UNIT_REF_RE = re.compile(r"--unit-([0-9dp]+)")
_COLOR_REF_RE = re.compile(r"--color-([a-z]+(?:-[0-9]+(?:-a[0-9]+)?)?)")


@dataclass(frozen=True)
class CompiledRule:
    """A rule record plus everything derived from it at load time."""

    rule: AtomicStyleRule
    key: str
    pattern: SyntaxPattern | None = None
    units: tuple[str, ...] = ()
    colors: tuple[str, ...] = ()

    @property
    def package(self) -> str:
        return self.rule.package

    @property
    def syntax(self) -> str:
        return self.rule.syntax

    @property
    def compose(self) -> list[str] | None:
        return self.rule.compose

    @property
    def expr(self) -> str | None:
        return self.rule.expr

    @property
    def dependencies(self) -> list[str] | None:
        return self.rule.dependencies

    @property
    def is_dynamic(self) -> bool:
        return self.pattern is not None

    def match(self, expression: str) -> dict[SlotKind, str] | None:
        """Captured slot values, or None if this dynamic rule rejects the expression."""
        if self.pattern is None:
            return None
        return self.pattern.match(expression)

    def accepts(self, expression: str) -> bool:
        return self.match(expression) is not None


@dataclass
class RuleTable:
    """Rules in load order plus the static and dynamic lookup maps."""

    rule_map: dict[str, CompiledRule] = field(default_factory=dict)
    dynamic_map: dict[str, CompiledRule] = field(default_factory=dict)
    rules: list[CompiledRule] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rules)

    def packages(self) -> dict[str, list[CompiledRule]]:
        """Group rules by package, packages in first-seen order."""
        groups: dict[str, list[CompiledRule]] = {}
        for rule in self.rules:
            groups.setdefault(rule.package, []).append(rule)
        return groups


def extract_unit_refs(expr: str | None) -> tuple[str, ...]:
    """Unit tokens referenced as ``--unit-<token>`` in a declaration."""
    if not expr or "--unit" not in expr:
        return ()
    return tuple(_UNIT_REF_RE.findall(expr))


def extract_color_refs(expr: str | None) -> tuple[str, ...]:
    """Color references written as ``--color-<theme>[-<order>[-a<alpha>]]``."""
    if not expr or "--color" not in expr:
        return ()
    return tuple(_COLOR_REF_RE.findall(expr))


def compile_rule(
    rule: AtomicStyleRule,
    index: int | None = None,
    source: Path | None = None,
) -> CompiledRule:
    """Derive units, colors and the matcher for one rule."""
    units = extract_unit_refs(rule.expr)
    colors = extract_color_refs(rule.expr)

    try:
        if has_placeholder(rule.syntax):
            pattern = compile_syntax(rule.syntax)
            if not pattern.is_dynamic:
                raise RuleConfigError(f"no placeholder in syntax {rule.syntax!r}")
            return CompiledRule(rule=rule, key=pattern.key, pattern=pattern, units=units, colors=colors)
        parse_syntax(rule.syntax)
    except RuleConfigError as e:
        raise make_rule_error(e.message, syntax=rule.syntax, index=index, source=source) from e

    return CompiledRule(rule=rule, key=rule.syntax, units=units, colors=colors)


def build_rule_table(
    records: Iterable[AtomicStyleRule | Mapping[str, Any]],
    source: Path | None = None,
) -> RuleTable:
    """
    Build a RuleTable from rule records or raw mappings.

    Later rules with the same key replace earlier ones of the same kind in
    ``rule_map`` or ``dynamic_map``, but all of them stay in ``rules``.

    Raises:
        RuleConfigError: if any record is invalid
    """
    table = RuleTable()
    for index, record in enumerate(records, start=1):
        if isinstance(record, AtomicStyleRule):
            rule = record
        else:
            try:
                rule = AtomicStyleRule.model_validate(record)
            except ValidationError as e:
                syntax = record.get("syntax") if isinstance(record, Mapping) else None
                raise make_rule_error(
                    f"invalid rule record: {e}", syntax=syntax, index=index, source=source
                ) from e

        compiled = compile_rule(rule, index=index, source=source)
        lookup = table.dynamic_map if compiled.is_dynamic else table.rule_map
        if compiled.key in lookup:
            logger.debug("Rule key %r redefined by %r", compiled.key, rule.syntax)
        lookup[compiled.key] = compiled
        table.rules.append(compiled)

    logger.debug("Built rule table with %d rules", len(table.rules))
    return table
