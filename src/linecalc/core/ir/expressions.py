"""
Expression tree types for linecalc.

A line of source parses into a ``Program``: an ordered list of
``Statement`` nodes, each wrapping one expression built from:

- Number literals: 42, 3.14, 1.2.3 (read as 1.2)
- Variable references: x, total_2
- Binary operations: +, -, *, /, % and assignment =
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class Operator(StrEnum):
    """Binary operators, including assignment."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    ASSIGN = "="


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class NumberLiteral(BaseModel):
    """A number literal, kept as the matched source text."""

    text: str = Field(description="Numeric text as matched by the tokenizer")
    pos: int = Field(default=0, description="Source offset")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.text


class VariableRef(BaseModel):
    """Reference to a variable in the store."""

    name: str = Field(description="Identifier text")
    pos: int = Field(default=0, description="Source offset")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class BinaryOp(BaseModel):
    """
    Binary operation: left op right.

    Assignment is a binary operation too; its left side is always a
    ``VariableRef``.
    """

    op: Operator
    left: Expr
    right: Expr
    pos: int = Field(default=0, description="Source offset of the operator")

    model_config = ConfigDict(frozen=True)

    @property
    def is_assignment(self) -> bool:
        return self.op is Operator.ASSIGN

    def __str__(self) -> str:
        if self.is_assignment:
            return f"{self.left} = {self.right}"
        return f"({self.left} {self.op.value} {self.right})"


class Statement(BaseModel):
    """One top-level expression parsed from a line."""

    expr: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.expr)


class Program(BaseModel):
    """All statements parsed from one line, in source order."""

    statements: list[Statement] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return " ".join(str(s) for s in self.statements)


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = NumberLiteral | VariableRef | BinaryOp

Node = Expr | Statement | Program

# Rebuild models for recursive forward references
BinaryOp.model_rebuild()
Statement.model_rebuild()
Program.model_rebuild()
