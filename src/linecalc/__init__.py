"""
linecalc - a line-at-a-time arithmetic interpreter with variables.

Each line is tokenized, parsed into an expression tree, and evaluated
against a variable store that persists for the life of the interpreter.
"""

from __future__ import annotations

from ._version import __version__
from .core import ir
from .core.errors import ConfigError, EvalError, LexError, LinecalcError, ParseError
from .interpreter import Interpreter

__all__ = [
    "__version__",
    "ir",
    "ConfigError",
    "EvalError",
    "Interpreter",
    "LexError",
    "LinecalcError",
    "ParseError",
]
