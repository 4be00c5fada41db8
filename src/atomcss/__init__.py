"""
atomcss - atomic CSS generator for WeChat mini programs.

Class names such as ``px-20``, ``text-red-6`` or ``bg-gray-3-a50`` used in
page markup are resolved against a rule table into CSS blocks, and the
unit/color variables they reference are generated from a palette.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import AtomCssError, ConfigError, ValueMaterializationError

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "AtomCssError",
    "ConfigError",
    "ValueMaterializationError",
]
