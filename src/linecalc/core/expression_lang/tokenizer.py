"""
Tokenizer for the linecalc expression language.

Converts a line of source into a sequence of typed tokens. Each token kind
owns a regular expression; at every offset the kinds are tried in a fixed
priority order and the first non-empty match wins.
"""

from __future__ import annotations

import logging
import re
from enum import StrEnum

from linecalc.core.errors import LexError

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for the expression language."""

    # Literals and names
    NUMBER = "number"
    VARIABLE = "variable"

    # Discarded
    SPACE = "space"

    # Operators
    ASSIGN = "assign"
    PLUS = "plus"
    MINUS = "minus"
    MULTI = "multi"
    DIVISION = "division"
    REMAINDER = "remainder"

    # Punctuation
    LPAR = "lpar"
    RPAR = "rpar"


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "text", "pos")

    def __init__(self, kind: TokenKind, text: str, pos: int) -> None:
        self.kind = kind
        self.text = text
        self.pos = pos

    @property
    def end(self) -> int:
        return self.pos + len(self.text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.text, self.pos) == (other.kind, other.text, other.pos)

    def __hash__(self) -> int:
        return hash((self.kind, self.text, self.pos))

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.text!r}, pos={self.pos})"


# Priority order matters: digits are claimed by NUMBER before VARIABLE sees them.
# "1.2.3" lexes as a single NUMBER token.
TOKEN_PATTERNS: tuple[tuple[TokenKind, re.Pattern[str]], ...] = (
    (TokenKind.NUMBER, re.compile(r"[0-9.]+")),
    (TokenKind.VARIABLE, re.compile(r"[a-zA-Z_0-9]+")),
    (TokenKind.SPACE, re.compile(r"[ \t\r\n\v\f]+")),
    (TokenKind.ASSIGN, re.compile(r"=")),
    (TokenKind.PLUS, re.compile(r"\+")),
    (TokenKind.MINUS, re.compile(r"-")),
    (TokenKind.MULTI, re.compile(r"\*")),
    (TokenKind.DIVISION, re.compile(r"/")),
    (TokenKind.REMAINDER, re.compile(r"%")),
    (TokenKind.LPAR, re.compile(r"\(")),
    (TokenKind.RPAR, re.compile(r"\)")),
)


class Tokenizer:
    """
    Reusable tokenizer.

    ``pos`` and ``tokens`` hold the state of the current call and are reset
    at the start of every ``tokenize``.
    """

    def __init__(self) -> None:
        self.source = ""
        self.pos = 0
        self.tokens: list[Token] = []

    def reset(self) -> None:
        self.source = ""
        self.pos = 0
        self.tokens = []

    def tokenize(self, source: str) -> list[Token]:
        """Tokenize a line of source, dropping whitespace."""
        self.reset()
        self.source = source

        while self.next_token():
            pass

        logger.debug("Tokenized %r into %d tokens", source, len(self.tokens))
        return list(self.tokens)

    def next_token(self) -> bool:
        """Consume one token at the cursor. Returns False at end of input."""
        if self.pos >= len(self.source):
            return False

        for kind, pattern in TOKEN_PATTERNS:
            m = pattern.match(self.source, self.pos)
            if m is None:
                continue
            text = m.group(0)
            if kind != TokenKind.SPACE:
                self.tokens.append(Token(kind, text, self.pos))
            self.pos = m.end()
            return True

        raise LexError(self.pos, self.source[self.pos])


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens."""
    return Tokenizer().tokenize(source)
