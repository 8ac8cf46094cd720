"""
Error types for linecalc tokenizing, parsing, evaluation, and configuration.
"""

from __future__ import annotations


class LinecalcError(Exception):
    """Base exception for all linecalc errors."""

    def __init__(self, message: str, pos: int | None = None):
        self.message = message
        self.pos = pos
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with the source position if available."""
        if self.pos is not None:
            return f"{self.message} at position {self.pos}"
        return self.message

    def format_snippet(self, source: str) -> str:
        """
        Render the offending source line with a marker under the error position.

        Returns:
            The error message alone when no position is known, otherwise
            three lines: message, source, and a ``^`` marker.
        """
        if self.pos is None:
            return str(self)

        marker_pos = min(self.pos, len(source))
        return f"{self}\n  {source}\n  {' ' * marker_pos}^"


class LexError(LinecalcError):
    """
    Raised when no token pattern matches at the current offset.

    Examples:
    - Unknown characters such as ``&`` or ``$``
    """

    def __init__(self, pos: int, char: str | None = None):
        self.char = char
        message = f"Unexpected character {char!r}" if char else "Unexpected character"
        super().__init__(message, pos)


class ParseError(LinecalcError):
    """
    Raised when a token sequence cannot be parsed.

    Examples:
    - Missing closing parenthesis
    - Operator where a number or variable is required
    - Empty input
    """

    def __init__(self, message: str, pos: int, expected: str | None = None):
        self.expected = expected
        super().__init__(message, pos)


class EvalError(LinecalcError):
    """
    Raised when a parsed tree cannot be evaluated.

    Examples:
    - Reference to a variable that was never assigned
    - Number literal with no readable numeric prefix
    """

    def __init__(self, message: str, identifier: str | None = None, pos: int | None = None):
        self.identifier = identifier
        super().__init__(message, pos)


class ConfigError(LinecalcError):
    """Raised when linecalc.toml holds values of the wrong shape."""


def make_undefined_variable_error(name: str, pos: int | None = None) -> EvalError:
    """
    Helper to create an EvalError for an unresolvable identifier.

    Args:
        name: Identifier that could not be found
        pos: Optional source offset of the reference

    Returns:
        EvalError naming the identifier
    """
    return EvalError(
        f"Invalid identifier. No variable with name '{name}' was found",
        identifier=name,
        pos=pos,
    )
