"""
Atomic style rule records.

One record maps a class-name syntax to a literal CSS declaration or to a
composition of other syntaxes. Placeholders usable in ``syntax``,
``compose`` and ``expr``:

- ``[U]`` unit token (``20``, ``d5`` = 0.5, ``p50`` = 50%)
- ``[C]`` color theme name (``red``, ``gray``)
- ``[N]`` integer, usually a color order
- ``[A]`` alpha digits (written ``a5`` in class names)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AtomicStyleRule(BaseModel):
    """
    Author-supplied rule record.

    Example:
        AtomicStyleRule(
            package="spacing.padding.ext",
            syntax="px-[U]",
            compose=["pl-[U]", "pr-[U]"],
        )
    """

    model_config = ConfigDict(frozen=True)

    package: str = Field(description="Dotted package name, e.g. spacing.padding.ext")
    syntax: str = Field(min_length=1, description="Class-name syntax, may contain placeholders")
    desc: str | None = Field(default=None, description="Description for unusual syntaxes")
    compose: list[str] | None = Field(
        default=None, description="Syntaxes this rule expands into"
    )
    expr: str | None = Field(default=None, description="Literal CSS declaration template")
    dependencies: list[str] | None = Field(
        default=None, description="Blocks that must also be emitted, e.g. @keyframes spin"
    )
