"""
Expression evaluator for the linecalc expression language.

Walks the expression tree produced by the parser and computes a float.
Assignment is the only side effect; it writes into the variable store.
Arithmetic follows IEEE 754 doubles: division and remainder by zero give
inf/-inf/nan instead of raising.
"""

from __future__ import annotations

import logging
import math
import re

from linecalc.core.errors import EvalError, make_undefined_variable_error
from linecalc.core.ir.expressions import (
    BinaryOp,
    Node,
    NumberLiteral,
    Operator,
    Program,
    Statement,
    VariableRef,
)
from linecalc.core.store import VariableStore

logger = logging.getLogger(__name__)

# Longest readable decimal prefix: "1.2.3" reads as 1.2, "5." as 5.0, ".5" as 0.5
_FLOAT_PREFIX_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")


class Evaluator:
    """Tree-walking evaluator bound to one variable store."""

    def __init__(self, store: VariableStore | None = None) -> None:
        self.store = store if store is not None else VariableStore()

    def evaluate(self, node: Node) -> float:
        """Evaluate any node: Program, Statement, or expression."""
        return _interpret(node, self.store)


def evaluate(node: Node, store: VariableStore) -> float:
    """Evaluate a parsed node against a variable store.

    Args:
        node: Program, Statement, or expression node.
        store: Variable store; assignments are written into it.

    Returns:
        The computed value. For a Program, the value of its last statement.

    Raises:
        EvalError: If a variable is unresolvable or a number is unreadable.
    """
    return _interpret(node, store)


def _interpret(node: Node, store: VariableStore) -> float:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(node, NumberLiteral):
        return parse_number(node.text, node.pos)

    if isinstance(node, VariableRef):
        return _interpret_variable(node, store)

    if isinstance(node, BinaryOp):
        if node.is_assignment:
            return _interpret_assign(node, store)
        return _interpret_binary(node, store)

    if isinstance(node, Statement):
        return _interpret(node.expr, store)

    if isinstance(node, Program):
        return _interpret_program(node, store)

    raise EvalError(f"Unknown node type: {type(node).__name__}")


def _interpret_program(program: Program, store: VariableStore) -> float:
    """Evaluate statements in order; the last value is the result."""
    if not program.statements:
        raise EvalError("Nothing to evaluate")

    result = math.nan
    for statement in program.statements:
        result = _interpret(statement, store)
    return result


def _interpret_variable(node: VariableRef, store: VariableStore) -> float:
    value = store.lookup(node.name)
    if value is None:
        raise make_undefined_variable_error(node.name, node.pos)
    return value


def _interpret_assign(node: BinaryOp, store: VariableStore) -> float:
    target = node.left
    if not isinstance(target, VariableRef):
        raise EvalError(f"Cannot assign to {str(target)!r}", pos=node.pos)
    value = _interpret(node.right, store)
    return store.assign(target.name, value)


def _interpret_binary(node: BinaryOp, store: VariableStore) -> float:
    """Evaluate an arithmetic chain along its left spine without recursing per operator."""
    spine: list[BinaryOp] = []
    current: Node = node
    while isinstance(current, BinaryOp) and not current.is_assignment:
        spine.append(current)
        current = current.left

    result = _interpret(current, store)
    for op_node in reversed(spine):
        right = _interpret(op_node.right, store)
        result = _apply(op_node, result, right)
    return result


def _apply(node: BinaryOp, left: float, right: float) -> float:
    if node.op == Operator.ADD:
        return left + right
    if node.op == Operator.SUB:
        return left - right
    if node.op == Operator.MUL:
        return left * right
    if node.op == Operator.DIV:
        return divide(left, right)
    if node.op == Operator.MOD:
        return remainder(left, right)

    raise EvalError(f"Unknown binary op: {node.op}", pos=node.pos)


def divide(left: float, right: float) -> float:
    """IEEE division: x/0 is a signed infinity, 0/0 is nan."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def remainder(left: float, right: float) -> float:
    """Truncated remainder with the sign of the dividend, like C fmod."""
    if right == 0 or math.isinf(left) or math.isnan(left) or math.isnan(right):
        return math.nan
    return math.fmod(left, right)


def parse_number(text: str, pos: int | None = None) -> float:
    """Read the longest decimal prefix of ``text`` as a float."""
    m = _FLOAT_PREFIX_RE.match(text)
    if m is None:
        raise EvalError(f"Malformed number {text!r}", pos=pos)
    return float(m.group(0))
