"""
Interpreter facade: one line of source in, one float out.

The interpreter owns a tokenizer, a parser, and an evaluator whose variable
store persists across ``run`` calls. Only the tokenizer and parser state is
reset per call.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from linecalc.core.expression_lang.evaluator import Evaluator
from linecalc.core.expression_lang.parser import Parser
from linecalc.core.expression_lang.tokenizer import Tokenizer
from linecalc.core.ir.expressions import Program
from linecalc.core.manifest import InterpreterConfig
from linecalc.core.store import VariableStore

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Stateful line interpreter.

    Example:
        interp = Interpreter()
        interp.run("x = 5")   # 5.0
        interp.run("x + 1")   # 6.0

    A line may contain several statements ("x = 1 y = 2"). They are all
    evaluated in order, assignments included, and ``run`` returns the value
    of the last one. An error aborts the line but keeps assignments made by
    the statements before it.
    """

    def __init__(self, config: InterpreterConfig | None = None) -> None:
        self.config = config or InterpreterConfig()
        self.tokenizer = Tokenizer()
        self.parser = Parser()
        self.store = VariableStore(legacy_zero_lookup=self.config.legacy_zero_lookup)
        self.evaluator = Evaluator(self.store)
        self._lock = threading.Lock()

    def compile(self, source: str) -> Program:
        """Tokenize and parse a line without evaluating it."""
        with self._lock:
            return self._compile(source)

    def _compile(self, source: str) -> Program:
        tokens = self.tokenizer.tokenize(source)
        self.parser.reset(tokens)
        return self.parser.parse_program()

    def run(self, source: str) -> float:
        """Evaluate one line and return the value of its last statement.

        Raises:
            LexError: If a character matches no token.
            ParseError: If the tokens do not form a statement.
            EvalError: If a variable is unresolvable.
        """
        with self._lock:
            program = self._compile(source)
            result = self.evaluator.evaluate(program)
        logger.debug("%r -> %r", source, result)
        return result

    def run_lines(self, lines: Iterable[str]) -> list[float]:
        """Run lines in sequence, stopping at the first error."""
        return [self.run(line) for line in lines]

    @property
    def variables(self) -> dict[str, float]:
        with self._lock:
            return self.store.snapshot()

    def reset(self) -> None:
        """Forget every assigned variable."""
        with self._lock:
            self.store.clear()
        logger.debug("Variable store cleared")
