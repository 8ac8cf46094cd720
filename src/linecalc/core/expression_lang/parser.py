"""
Recursive descent parser for the linecalc expression language.

Grammar (flat precedence, every operator binds equally, left to right):
    program        → statement*
    statement      → VARIABLE "=" formula
                   | parenthesized (op parenthesized)*
    formula        → parenthesized (op parenthesized)*
    parenthesized  → "(" formula ")" | atom
    atom           → NUMBER | VARIABLE
    op             → "+" | "-" | "*" | "/" | "%"

A line may hold several statements back to back ("x = 1 y = 2"); each is
parsed in turn and the line's value is that of the last one.
"""

from __future__ import annotations

import logging

from linecalc.core.errors import ParseError
from linecalc.core.expression_lang.tokenizer import Token, TokenKind
from linecalc.core.ir.expressions import (
    BinaryOp,
    Expr,
    NumberLiteral,
    Operator,
    Program,
    Statement,
    VariableRef,
)

logger = logging.getLogger(__name__)

MATH_OPERATORS: dict[TokenKind, Operator] = {
    TokenKind.MINUS: Operator.SUB,
    TokenKind.PLUS: Operator.ADD,
    TokenKind.DIVISION: Operator.DIV,
    TokenKind.MULTI: Operator.MUL,
    TokenKind.REMAINDER: Operator.MOD,
}


class Parser:
    """Recursive descent parser over a token list."""

    def __init__(self, tokens: list[Token] | None = None) -> None:
        self.tokens: list[Token] = tokens or []
        self.pos = 0

    def reset(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    @property
    def offset(self) -> int:
        """Source offset of the current token, or just past the last one."""
        if not self.at_end:
            return self.tokens[self.pos].pos
        if self.tokens:
            return self.tokens[-1].end
        return 0

    def match(self, *kinds: TokenKind) -> Token | None:
        if self.at_end:
            return None
        tok = self.tokens[self.pos]
        if tok.kind in kinds:
            self.pos += 1
            return tok
        return None

    def require(self, kind: TokenKind) -> Token:
        tok = self.match(kind)
        if tok is None:
            raise ParseError(f"Expected {kind}", self.offset, expected=kind)
        return tok

    # -- Grammar rules --

    def parse_program(self) -> Program:
        """statement* until the tokens run out."""
        if not self.tokens:
            raise ParseError("Expected number or variable, got empty input", 0)

        statements: list[Statement] = []
        try:
            while not self.at_end:
                statements.append(self.parse_statement())
        except RecursionError as e:
            raise ParseError("Expression nested too deeply", self.offset) from e

        logger.debug("Parsed %d statement(s) from %d tokens", len(statements), len(self.tokens))
        return Program(statements=statements)

    def parse_statement(self) -> Statement:
        """VARIABLE '=' formula | parenthesized (op parenthesized)*"""
        bare = self.at_end or self.tokens[self.pos].kind != TokenKind.LPAR
        left = self.parse_parenthesized()

        assign = self.match(TokenKind.ASSIGN)
        if assign is not None:
            if not bare or not isinstance(left, VariableRef):
                raise ParseError(
                    f"Cannot assign to {str(left)!r}, expected {TokenKind.VARIABLE}",
                    assign.pos,
                    expected=TokenKind.VARIABLE,
                )
            value = self.parse_formula()
            return Statement(
                expr=BinaryOp(op=Operator.ASSIGN, left=left, right=value, pos=assign.pos)
            )

        return Statement(expr=self._fold_operators(left))

    def parse_formula(self) -> Expr:
        """parenthesized (op parenthesized)*"""
        return self._fold_operators(self.parse_parenthesized())

    def parse_parenthesized(self) -> Expr:
        """'(' formula ')' | atom"""
        if self.match(TokenKind.LPAR) is not None:
            node = self.parse_formula()
            self.require(TokenKind.RPAR)
            return node
        return self.parse_atom()

    def parse_atom(self) -> NumberLiteral | VariableRef:
        """NUMBER | VARIABLE"""
        number = self.match(TokenKind.NUMBER)
        if number is not None:
            return NumberLiteral(text=number.text, pos=number.pos)

        variable = self.match(TokenKind.VARIABLE)
        if variable is not None:
            return VariableRef(name=variable.text, pos=variable.pos)

        if self.at_end:
            got = "end of input"
        else:
            got = repr(self.tokens[self.pos].text)
        raise ParseError(f"Expected number or variable, got {got}", self.offset)

    def _fold_operators(self, left: Expr) -> Expr:
        """Fold (op parenthesized)* onto ``left``, left-associatively."""
        op_tok = self.match(*MATH_OPERATORS)
        while op_tok is not None:
            right = self.parse_parenthesized()
            left = BinaryOp(op=MATH_OPERATORS[op_tok.kind], left=left, right=right, pos=op_tok.pos)
            op_tok = self.match(*MATH_OPERATORS)
        return left


def parse(tokens: list[Token]) -> Program:
    """Parse a token list into a Program.

    Args:
        tokens: Tokens from ``tokenize`` (whitespace already dropped).

    Returns:
        Program holding every statement on the line, in order.

    Raises:
        ParseError: If the tokens do not form a valid line.
    """
    return Parser(tokens).parse_program()
