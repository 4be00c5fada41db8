"""
Discovery of class selectors already declared in stylesheets.

Only simple selectors (``.name``) count as declared; compound selectors,
pseudo classes and at-rule preludes are ignored.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_PRELUDE_RE = re.compile(r"([^{};]+)\{")
_SIMPLE_CLASS_RE = re.compile(r"^\.(-?[A-Za-z_][\w-]*)$", re.ASCII)


def parse_selector_names(css: str) -> list[str]:
    """Class names declared by simple selectors, first-seen order."""
    css = _COMMENT_RE.sub("", css)
    names: list[str] = []
    for match in _PRELUDE_RE.finditer(css):
        for selector in match.group(1).split(","):
            simple = _SIMPLE_CLASS_RE.match(selector.strip())
            if simple:
                names.append(simple.group(1))
    return list(dict.fromkeys(names))


def read_selector_names(path: Path) -> list[str] | None:
    """Declared class names of a CSS file, None if the file does not exist."""
    if not path.is_file():
        return None
    return parse_selector_names(path.read_text(encoding="utf-8"))


def collect_declared_names(paths: Iterable[Path]) -> list[str]:
    """Declared class names over several CSS files; missing files are skipped."""
    names: list[str] = []
    for path in paths:
        found = read_selector_names(path)
        if found is None:
            logger.info("[task] missing css file %s, ignored", path.name)
            continue
        logger.info("[task] found %d style names in %s", len(found), path.name)
        names.extend(found)
    return list(dict.fromkeys(names))
