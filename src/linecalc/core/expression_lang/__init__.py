"""
linecalc expression language.

Tokenizer, parser, and evaluator for single-line arithmetic with
variables.

Usage:
    from linecalc.core.expression_lang import evaluate, parse, tokenize
    from linecalc.core.store import VariableStore

    store = VariableStore()
    result = evaluate(parse(tokenize("x = 2 + 3")), store)
    # result == 5.0, store.lookup("x") == 5.0
"""

from linecalc.core.expression_lang.evaluator import Evaluator, evaluate
from linecalc.core.expression_lang.parser import Parser, parse
from linecalc.core.expression_lang.tokenizer import Token, Tokenizer, TokenKind, tokenize

__all__ = [
    "Evaluator",
    "Parser",
    "Token",
    "TokenKind",
    "Tokenizer",
    "evaluate",
    "parse",
    "tokenize",
]
