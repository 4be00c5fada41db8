"""
Theme palette construction and short color aliases.
"""

from __future__ import annotations

import logging
import string
from collections.abc import Mapping
from itertools import product
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import ThemeConfigError
from .ir.theme import SCALAR_THEMES, ThemeMap

logger = logging.getLogger(__name__)

RESERVED_ALIASES: dict[str, str] = {"primary": "p", "black": "b", "white": "w"}


def build_theme_map(raw: ThemeMap | Mapping[str, Any], source: Path | None = None) -> ThemeMap:
    """
    Validate a raw palette description.

    Raises:
        ThemeConfigError: if required scalars are missing or ramps are malformed
    """
    if isinstance(raw, ThemeMap):
        return raw
    try:
        theme_map = ThemeMap.model_validate(raw)
    except ValidationError as e:
        where = f" in {source}" if source else ""
        raise ThemeConfigError(f"Invalid theme palette{where}: {e}") from e

    for provider, themes in theme_map.palette.items():
        for name in themes:
            if name in SCALAR_THEMES:
                raise ThemeConfigError(
                    f"Theme {name!r} under provider {provider!r} shadows a scalar color"
                )
            if not name.isalpha() or not name.islower():
                raise ThemeConfigError(
                    f"Theme name {name!r} under provider {provider!r} must be lowercase letters"
                )
    return theme_map


def _alias_candidates(name: str) -> list[str]:
    """First letter, then first letter paired with each later letter."""
    first = name[0]
    return [first] + [first + other for other in name[1:]]


def derive_color_aliases(theme_map: ThemeMap) -> dict[str, str]:
    """
    Assign each theme name a unique one- or two-letter alias.

    ``p``, ``b`` and ``w`` are reserved for primary, black and white. Other
    names try their first letter, then the next unused single letter,
    then their first letter plus a later letter of the name, then the next
    unused letter pair.
    """
    aliases = dict(RESERVED_ALIASES)
    used = set(aliases.values())
    letters = string.ascii_lowercase
    pairs = ("".join(pair) for pair in product(letters, repeat=2))

    for name in theme_map.theme_names():
        if name in aliases:
            continue
        candidates = _alias_candidates(name)
        alias = next((c for c in [candidates[0], *letters] if c not in used), None)
        if alias is None:
            alias = next((c for c in candidates[1:] if c not in used), None)
        if alias is None:
            alias = next(pair for pair in pairs if pair not in used)
        aliases[name] = alias
        used.add(alias)

    return aliases
