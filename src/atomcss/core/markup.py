"""
Class-name extraction from page markup.

Pages are parsed with the stdlib HTML parser; class names are taken from
the ``class``, ``hover-class`` and ``placeholder-class`` attributes.
Template logic such as ``{{ active ? 'bg-blue' : 'bg-gray' }}`` is
reduced to the class names it can produce.
"""

from __future__ import annotations

import logging
import re
from html.parser import HTMLParser
from pathlib import Path

logger = logging.getLogger(__name__)

CLASS_ATTRIBUTES = frozenset({"class", "hover-class", "placeholder-class"})

# condition of a ternary, up to and including the "?"
_CONDITION_RE = re.compile(r"[a-zA-Z\d\\.\s=&\[\]<>!%]+\?")
_PLAIN_RE = re.compile(r"^[\s\da-z\-\\.]+$")
_WORD_RE = re.compile(r"[\w-]+", re.ASCII)
_UPPER_RE = re.compile(r"[A-Z]")


def extract_class_names(value: str) -> list[str]:
    """
    Extract class names from one attribute value.

    >>> extract_class_names("text-28 text-black")
    ['text-28', 'text-black']
    """
    if len(value) < 2:
        return []

    value = _CONDITION_RE.sub("", value)
    if _PLAIN_RE.match(value):
        words = value.split()
    else:
        words = _WORD_RE.findall(value)

    return [word for word in words if len(word) > 1 and not _UPPER_RE.search(word)]


class _ClassCollector(HTMLParser):
    """Collect class names from every class-like attribute."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.class_names: list[str] = []
        self.attributes: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        for name, value in attrs:
            if name in CLASS_ATTRIBUTES and value:
                self.attributes.append(value)
                self.class_names.extend(extract_class_names(value))


def parse_class_names(markup: str) -> list[str]:
    """Class names used in a markup document, first-seen order, no duplicates."""
    collector = _ClassCollector()
    collector.feed(markup)
    collector.close()
    for value in collector.attributes:
        logger.debug("class attribute %r", value)
    return list(dict.fromkeys(collector.class_names))


def read_page_class_names(path: Path) -> list[str]:
    """Class names used in a page file."""
    return parse_class_names(path.read_text(encoding="utf-8"))
