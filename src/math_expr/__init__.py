"""
math-expr - arithmetic expression tokenizer and evaluator.

Usage:
    from math_expr import evaluate_expression, tokenize

    evaluate_expression("max(3, sin(90))")
    # 3.0
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

from .core.errors import ErrorContext, EvalError, EvalErrorKind, LexError, MathExprError
from .core.evaluator import evaluate, evaluate_expression
from .core.tokenizer import Token, TokenKind, TokenSequence, token_kind_name, tokenize


def _get_version() -> str:
    """Get version from installed package metadata."""
    try:
        return _metadata_version("math-expr")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ErrorContext",
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
