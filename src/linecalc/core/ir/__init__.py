"""
Intermediate representation for linecalc: the expression tree.
"""

from .expressions import (
    BinaryOp,
    Expr,
    Node,
    NumberLiteral,
    Operator,
    Program,
    Statement,
    VariableRef,
)

__all__ = [
    "BinaryOp",
    "Expr",
    "Node",
    "NumberLiteral",
    "Operator",
    "Program",
    "Statement",
    "VariableRef",
]
