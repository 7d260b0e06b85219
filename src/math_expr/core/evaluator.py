"""
Recursive descent evaluator for math-expr.

Values are computed while parsing; no AST is built.

Grammar (precedence low to high):
    expression  → term (("+"|"-") term)*
    term        → unary (("*"|"/"|"%") unary)*
    unary       → ("+"|"-") unary | power
    power       → primary ("^" power)?
    primary     → NUMBER | "(" expression ")" | func_call | constant
    func_call   → IDENT "(" (expression ("," expression)*)? ")"
    constant    → IDENT
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from math_expr.core.cursor import TokenCursor
from math_expr.core.errors import EvalError, EvalErrorKind
from math_expr.core.registry import c_fmod, c_pow, lookup_constant, lookup_function
from math_expr.core.tokenizer import Token, TokenKind, TokenSequence, tokenize

if TYPE_CHECKING:
    from math_expr.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100


class _Evaluator:
    """Precedence-climbing evaluator over a token cursor."""

    def __init__(self, tokens: TokenSequence, max_depth: int) -> None:
        self.cursor = TokenCursor(tokens)
        self.max_depth = max_depth
        self.depth = 0

    @contextmanager
    def _nested(self) -> Iterator[None]:
        """Track one level of grammar nesting."""
        if self.depth >= self.max_depth:
            tok = self.cursor.peek()
            raise self.cursor.error(
                EvalErrorKind.RECURSION_LIMIT_EXCEEDED,
                f"Expression nesting exceeds the limit of {self.max_depth}",
                token=tok,
            )
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    # -- Grammar rules --

    def parse_expression(self) -> float:
        """term (('+' | '-') term)*"""
        value = self.parse_term()
        while True:
            if self.cursor.match_operator("+"):
                value += self.parse_term()
            elif self.cursor.match_operator("-"):
                value -= self.parse_term()
            else:
                return value

    def parse_term(self) -> float:
        """unary (('*' | '/' | '%') unary)*"""
        value = self.parse_unary()
        while True:
            if self.cursor.match_operator("*"):
                value *= self.parse_unary()
            elif op := self.cursor.match_operator("/"):
                rhs = self.parse_unary()
                if rhs == 0.0:
                    raise self.cursor.error(
                        EvalErrorKind.DIVISION_BY_ZERO, "Division by zero", token=op
                    )
                value /= rhs
            elif op := self.cursor.match_operator("%"):
                rhs = self.parse_unary()
                if rhs == 0.0:
                    raise self.cursor.error(EvalErrorKind.MODULO_BY_ZERO, "Modulo by zero", token=op)
                value = c_fmod(value, rhs)
            else:
                return value

    def parse_unary(self) -> float:
        """('+' | '-') unary | power"""
        if self.cursor.match_operator("+"):
            with self._nested():
                return self.parse_unary()
        if self.cursor.match_operator("-"):
            with self._nested():
                return -self.parse_unary()
        return self.parse_power()

    def parse_power(self) -> float:
        """primary ('^' power)?"""
        base = self.parse_primary()
        if self.cursor.match_operator("^"):
            with self._nested():
                exponent = self.parse_power()
            return c_pow(base, exponent)
        return base

    def parse_primary(self) -> float:
        """NUMBER | '(' expression ')' | func_call | constant"""
        tok = self.cursor.peek()
        if tok is None:
            raise self.cursor.error(EvalErrorKind.UNEXPECTED_END, "Unexpected end of input")

        if tok.kind == TokenKind.NUMBER:
            self.cursor.consume()
            return tok.value

        # Parenthesized expression
        if tok.is_operator("("):
            self.cursor.consume()
            with self._nested():
                value = self.parse_expression()
            self.cursor.expect_operator(")")
            return value

        if tok.kind == TokenKind.IDENTIFIER:
            self.cursor.consume()
            if self.cursor.match_operator("("):
                return self._parse_func_call(tok)
            return self._resolve_constant(tok)

        raise self.cursor.error(
            EvalErrorKind.UNEXPECTED_TOKEN, f"Unexpected token: {tok.text!r}", token=tok
        )

    def _parse_func_call(self, name_tok: Token) -> float:
        """Arguments and closing paren of IDENT '(' ... ')'; '(' already consumed."""
        args: list[float] = []
        if not self.cursor.match_operator(")"):
            with self._nested():
                args.append(self.parse_expression())
                while self.cursor.match_operator(","):
                    args.append(self.parse_expression())
            self.cursor.expect_operator(")")

        entry = lookup_function(name_tok.text)
        if entry is None:
            raise self.cursor.error(
                EvalErrorKind.UNKNOWN_IDENTIFIER,
                f"Unknown function: {name_tok.text}()",
                token=name_tok,
                name=name_tok.text,
            )
        if len(args) != entry.arity:
            raise self.cursor.error(
                EvalErrorKind.ARITY_MISMATCH,
                f"{entry.name}() takes exactly {entry.arity} argument(s), got {len(args)}",
                token=name_tok,
                name=name_tok.text,
            )
        return entry(tuple(args))

    def _resolve_constant(self, name_tok: Token) -> float:
        entry = lookup_constant(name_tok.text)
        if entry is None:
            raise self.cursor.error(
                EvalErrorKind.UNKNOWN_IDENTIFIER,
                f"Unknown identifier: {name_tok.text}",
                token=name_tok,
                name=name_tok.text,
            )
        return entry.value


def evaluate(tokens: TokenSequence, *, max_depth: int = DEFAULT_MAX_DEPTH) -> float:
    """Evaluate a token sequence produced by :func:`tokenize`.

    Args:
        tokens: Tokens of one expression.
        max_depth: Maximum nesting of parentheses, arguments and unary/power chains.

    Returns:
        The computed value.

    Raises:
        EvalError: On the first failure; nothing is partially evaluated.
    """
    evaluator = _Evaluator(tokens, max_depth)
    try:
        value = evaluator.parse_expression()
        trailing = evaluator.cursor.peek()
        if trailing is not None:
            raise evaluator.cursor.error(
                EvalErrorKind.TRAILING_INPUT,
                f"Unexpected token after expression: {trailing.text!r}",
                token=trailing,
            )
    except RecursionError as e:
        raise EvalError(
            EvalErrorKind.RECURSION_LIMIT_EXCEEDED,
            "Expression nesting exceeds the interpreter stack",
        ) from e
    except EvalError as e:
        logger.debug("Evaluation of %r failed: %s (%s)", tokens.source, e.message, e.kind)
        raise

    return value


def evaluate_expression(source: str, *, settings: Settings | None = None) -> float:
    """Tokenize and evaluate an expression string.

    Args:
        source: Expression string (e.g., "2 + 3 * sin(30)")
        settings: Optional :class:`math_expr.config.Settings`; defaults apply otherwise.

    Returns:
        The computed value.

    Raises:
        EvalError: If the expression is invalid.
        LexError: If strict lexing is enabled and a character is unrecognized.
    """
    if settings is None:
        tokens = tokenize(source)
        return evaluate(tokens)

    tokens = tokenize(source, strict=settings.strict_lexing)
    return evaluate(tokens, max_depth=settings.max_depth)
