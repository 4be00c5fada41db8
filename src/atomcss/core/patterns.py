"""
Class-name syntax patterns.

A rule syntax such as ``bg-[C]-[N]-a[A]`` is parsed once into a sequence
of segments, literal text and typed placeholder slots, and compiled into
an anchored regular expression with one named group per slot.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

from .errors import RuleConfigError


class SlotKind(StrEnum):
    """Placeholder letters allowed inside ``[...]``."""

    UNIT = "U"
    COLOR = "C"
    NUMBER = "N"
    ALPHA = "A"

    @property
    def token(self) -> str:
        return f"[{self.value}]"

    @property
    def group(self) -> str:
        return _GROUP_NAMES[self]


_GROUP_NAMES: dict[SlotKind, str] = {
    SlotKind.UNIT: "unit",
    SlotKind.COLOR: "color",
    SlotKind.NUMBER: "number",
    SlotKind.ALPHA: "alpha",
}

# Accepted alphabet per slot
_SLOT_REGEX: dict[SlotKind, str] = {
    SlotKind.UNIT: "[0-9dp]+",
    SlotKind.COLOR: "[a-z]+",
    SlotKind.NUMBER: "[0-9]+",
    SlotKind.ALPHA: "[0-9]+",
}


@dataclass(frozen=True)
class Literal:
    """Literal text that must appear verbatim."""

    text: str


@dataclass(frozen=True)
class Slot:
    """A typed placeholder."""

    kind: SlotKind


Segment = Literal | Slot


def parse_syntax(syntax: str) -> tuple[Segment, ...]:
    """
    Split a syntax into literal and slot segments.

    Raises:
        RuleConfigError: on unbalanced brackets, unknown or repeated slots
    """
    segments: list[Segment] = []
    seen: set[SlotKind] = set()
    text: list[str] = []
    pos = 0
    while pos < len(syntax):
        char = syntax[pos]
        if char == "]":
            raise RuleConfigError(f"unbalanced ']' at position {pos} in syntax {syntax!r}")
        if char != "[":
            text.append(char)
            pos += 1
            continue

        end = syntax.find("]", pos)
        if end == -1:
            raise RuleConfigError(f"unbalanced '[' at position {pos} in syntax {syntax!r}")
        letter = syntax[pos + 1 : end]
        try:
            kind = SlotKind(letter)
        except ValueError:
            raise RuleConfigError(
                f"unknown placeholder [{letter}] in syntax {syntax!r}, expected one of "
                + ", ".join(k.token for k in SlotKind)
            ) from None
        if kind in seen:
            raise RuleConfigError(f"placeholder {kind.token} repeated in syntax {syntax!r}")
        seen.add(kind)

        if text:
            segments.append(Literal("".join(text)))
            text = []
        segments.append(Slot(kind))
        pos = end + 1

    if text:
        segments.append(Literal("".join(text)))
    return tuple(segments)


@dataclass(frozen=True)
class SyntaxPattern:
    """Parsed syntax with its compiled matcher."""

    source: str
    segments: tuple[Segment, ...]
    regex: re.Pattern[str]

    @property
    def is_dynamic(self) -> bool:
        return any(isinstance(segment, Slot) for segment in self.segments)

    @property
    def key(self) -> str:
        """Lookup key: the syntax with its placeholders removed."""
        return "".join(s.text for s in self.segments if isinstance(s, Literal))

    @property
    def slots(self) -> tuple[SlotKind, ...]:
        return tuple(s.kind for s in self.segments if isinstance(s, Slot))

    def match(self, expression: str) -> dict[SlotKind, str] | None:
        """Match the whole expression, returning captured slot values."""
        found = self.regex.fullmatch(expression)
        if found is None:
            return None
        return {kind: found.group(kind.group) for kind in self.slots}


def compile_syntax(syntax: str) -> SyntaxPattern:
    """Parse and compile a syntax into an anchored matcher."""
    segments = parse_syntax(syntax)
    parts: list[str] = []
    for segment in segments:
        if isinstance(segment, Slot):
            parts.append(f"(?P<{segment.kind.group}>{_SLOT_REGEX[segment.kind]})")
        else:
            parts.append(re.escape(segment.text))
    return SyntaxPattern(source=syntax, segments=segments, regex=re.compile("".join(parts)))


def has_placeholder(syntax: str) -> bool:
    return "[" in syntax or "]" in syntax


def fill_placeholders(template: str, values: Mapping[SlotKind, str | None] | None) -> str:
    """
    Replace every occurrence of each placeholder that has a value.

    Placeholders without a value are left in place.
    """
    if not template or not values:
        return template
    for kind, value in values.items():
        if value is not None:
            template = template.replace(kind.token, value)
    return template
