"""Tests for the Interpreter facade and the variable store."""

from __future__ import annotations

import math
import threading

import pytest

from linecalc import EvalError, Interpreter, LexError, ParseError
from linecalc.core.manifest import InterpreterConfig
from linecalc.core.store import VariableStore


class TestRun:
    """run() evaluates one line and returns a float."""

    @pytest.mark.parametrize("source", ["0", "7", "42", "3.5", "0.25", "1000000"])
    def test_number_round_trip(self, interpreter: Interpreter, source: str) -> None:
        assert interpreter.run(source) == float(source)

    def test_basic_operations(self, interpreter: Interpreter) -> None:
        assert interpreter.run("1 + 1") == 2
        assert interpreter.run("2 - 1") == 1
        assert interpreter.run("2 * 3") == 6
        assert interpreter.run("8 / 4") == 2
        assert interpreter.run("7 % 4") == 3

    def test_flat_left_to_right(self, interpreter: Interpreter) -> None:
        assert interpreter.run("2 + 3 * 4") == 20

    def test_parentheses(self, interpreter: Interpreter) -> None:
        assert interpreter.run("x = 2 * (3 + 4)") == 14
        assert interpreter.run("(x - 4) / 5") == 2

    def test_division_by_zero_is_not_an_error(self, interpreter: Interpreter) -> None:
        assert interpreter.run("1 / 0") == math.inf


class TestVariables:
    """The variable store persists across run() calls."""

    def test_assignment_returns_value(self, interpreter: Interpreter) -> None:
        assert interpreter.run("x = 5") == 5

    def test_assignment_persists(self, interpreter: Interpreter) -> None:
        interpreter.run("x = 1")
        assert interpreter.run("x") == 1
        assert interpreter.run("x + 3") == 4

    def test_undefined_variable(self, interpreter: Interpreter) -> None:
        with pytest.raises(EvalError, match="'z'") as exc_info:
            interpreter.run("z")
        assert exc_info.value.identifier == "z"

    def test_read_only_expression_is_idempotent(self, interpreter: Interpreter) -> None:
        interpreter.run("a = 3")
        before = interpreter.variables
        first = interpreter.run("a * 2 + 1")
        second = interpreter.run("a * 2 + 1")
        assert first == second == 7
        assert interpreter.variables == before

    def test_zero_is_a_valid_value(self, interpreter: Interpreter) -> None:
        interpreter.run("n = 0")
        assert interpreter.run("n + 1") == 1

    def test_legacy_zero_lookup(self) -> None:
        interpreter = Interpreter(InterpreterConfig(legacy_zero_lookup=True))
        interpreter.run("n = 0")
        with pytest.raises(EvalError, match="'n'"):
            interpreter.run("n")

    def test_variables_is_a_snapshot(self, interpreter: Interpreter) -> None:
        interpreter.run("x = 1")
        snapshot = interpreter.variables
        snapshot["x"] = 99.0
        assert interpreter.run("x") == 1

    def test_reset(self, interpreter: Interpreter) -> None:
        interpreter.run("x = 1")
        interpreter.reset()
        assert interpreter.variables == {}
        with pytest.raises(EvalError):
            interpreter.run("x")

    def test_separate_interpreters_do_not_share_store(self) -> None:
        first, second = Interpreter(), Interpreter()
        first.run("x = 1")
        with pytest.raises(EvalError):
            second.run("x")


class TestMultipleStatements:
    """A line with several statements returns the last value."""

    def test_last_value_wins(self, interpreter: Interpreter) -> None:
        assert interpreter.run("x = 1 y = 2") == 2
        assert interpreter.variables == {"x": 1.0, "y": 2.0}

    def test_failure_keeps_earlier_assignments(self, interpreter: Interpreter) -> None:
        with pytest.raises(EvalError):
            interpreter.run("x = 10 unknown")
        assert interpreter.run("x") == 10

    def test_run_lines(self, interpreter: Interpreter) -> None:
        assert interpreter.run_lines(["x = 2", "x * x", "x"]) == [2, 4, 2]


class TestErrors:
    """Errors propagate unchanged and abort the line."""

    def test_lex_error(self, interpreter: Interpreter) -> None:
        with pytest.raises(LexError) as exc_info:
            interpreter.run("1 & 2")
        assert exc_info.value.pos == 2

    def test_parse_error_missing_rpar(self, interpreter: Interpreter) -> None:
        with pytest.raises(ParseError) as exc_info:
            interpreter.run("(1 + 2")
        assert exc_info.value.pos == 6

    def test_parse_error_does_not_evaluate(self, interpreter: Interpreter) -> None:
        with pytest.raises(ParseError):
            interpreter.run("x = 5 +")
        assert "x" not in interpreter.variables

    def test_empty_line(self, interpreter: Interpreter) -> None:
        with pytest.raises(ParseError):
            interpreter.run("   ")

    def test_recovers_after_error(self, interpreter: Interpreter) -> None:
        with pytest.raises(LexError):
            interpreter.run("1 $ 2")
        assert interpreter.run("1 + 2") == 3

    def test_format_snippet(self, interpreter: Interpreter) -> None:
        with pytest.raises(LexError) as exc_info:
            interpreter.run("1 & 2")
        snippet = exc_info.value.format_snippet("1 & 2")
        assert snippet.splitlines() == [
            "Unexpected character '&' at position 2",
            "  1 & 2",
            "    ^",
        ]


class TestConcurrency:
    """Concurrent callers are serialized on one interpreter."""

    def test_parallel_increments(self, interpreter: Interpreter) -> None:
        interpreter.run("count = 1")

        def worker() -> None:
            for _ in range(50):
                interpreter.run("count = count + 1")

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert interpreter.run("count") == 201


class TestVariableStore:
    """VariableStore behaves like a small mapping."""

    def test_assign_and_lookup(self) -> None:
        store = VariableStore()
        assert store.assign("a", 1.5) == 1.5
        assert store.lookup("a") == 1.5
        assert "a" in store
        assert len(store) == 1
        assert list(store) == ["a"]

    def test_missing(self) -> None:
        assert VariableStore().lookup("nope") is None

    def test_legacy_treats_nan_as_missing(self) -> None:
        store = VariableStore(legacy_zero_lookup=True)
        store.assign("n", math.nan)
        assert store.lookup("n") is None
        assert "n" in store

    def test_clear(self) -> None:
        store = VariableStore()
        store.assign("a", 1.0)
        store.clear()
        assert store.snapshot() == {}


class TestLongInput:
    """Evaluation depth does not grow with the length of a flat chain."""

    def test_long_flat_chain(self, interpreter: Interpreter) -> None:
        assert interpreter.run(" + ".join(["1"] * 1500)) == 1500

    def test_long_chain_assignment(self, interpreter: Interpreter) -> None:
        assert interpreter.run("total = " + " * ".join(["1"] * 2000)) == 1
        assert interpreter.run("total") == 1

    def test_long_chain_keeps_left_to_right_order(self, interpreter: Interpreter) -> None:
        source = "100" + " - 1" * 1500 + " / 2"
        assert interpreter.run(source) == (100 - 1500) / 2

    def test_deep_parentheses(self, interpreter: Interpreter) -> None:
        source = "(" * 2000 + "1" + ")" * 2000
        with pytest.raises(ParseError, match="nested too deeply"):
            interpreter.run(source)
        assert interpreter.run("1 + 1") == 2


class TestCompile:
    def test_compile_does_not_evaluate(self, interpreter: Interpreter) -> None:
        program = interpreter.compile("x = 1 + 2")
        assert len(program.statements) == 1
        assert interpreter.variables == {}

    def test_compile_alongside_run(self, interpreter: Interpreter) -> None:
        interpreter.run("x = 0")
        errors: list[Exception] = []

        def compiler() -> None:
            for _ in range(200):
                interpreter.compile("a * b * c * d")

        def runner() -> None:
            try:
                for _ in range(200):
                    interpreter.run("x = x + 1")
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=compiler), threading.Thread(target=runner)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert interpreter.run("x") == 200
