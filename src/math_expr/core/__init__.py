"""
math-expr engine.

Tokenizer, token cursor, built-in registry, and evaluator.

Usage:
    from math_expr.core import evaluate, tokenize

    tokens = tokenize("2 ^ 3 ^ 2")
    result = evaluate(tokens)
    # result == 512.0
"""

from math_expr.core.errors import EvalError, EvalErrorKind, LexError, MathExprError
from math_expr.core.evaluator import evaluate, evaluate_expression
from math_expr.core.tokenizer import Token, TokenKind, TokenSequence, token_kind_name, tokenize

__all__ = [
    "EvalError",
    "EvalErrorKind",
    "LexError",
    "MathExprError",
    "Token",
    "TokenKind",
    "TokenSequence",
    "evaluate",
    "evaluate_expression",
    "token_kind_name",
    "tokenize",
]
