"""
Error types for math-expr tokenizing and evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class MathExprError(Exception):
    """Base exception for all math-expr errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class LexError(MathExprError):
    """
    Raised by the tokenizer in strict mode.

    Examples:
    - Unrecognized character such as '$' or '#'
    """

    def __init__(self, message: str, char: str, pos: int, context: ErrorContext | None = None):
        self.char = char
        self.pos = pos
        super().__init__(message, context)


class EvalErrorKind(StrEnum):
    """Failure categories reported by the evaluator."""

    UNEXPECTED_END = "unexpected_end"
    UNEXPECTED_TOKEN = "unexpected_token"
    UNKNOWN_IDENTIFIER = "unknown_identifier"
    ARITY_MISMATCH = "arity_mismatch"
    DIVISION_BY_ZERO = "division_by_zero"
    MODULO_BY_ZERO = "modulo_by_zero"
    TRAILING_INPUT = "trailing_input"
    RECURSION_LIMIT_EXCEEDED = "recursion_limit_exceeded"


class EvalError(MathExprError):
    """
    Raised when a token sequence cannot be evaluated.

    Attributes:
        kind: Failure category
        token: Text of the offending token, if any
        expected: Token text the parser wanted instead, if any
        name: Identifier involved (unknown names, arity mismatches)
        pos: Source offset of the failure, if known
    """

    def __init__(
        self,
        kind: EvalErrorKind,
        message: str,
        *,
        token: str | None = None,
        expected: str | None = None,
        name: str | None = None,
        pos: int | None = None,
        context: ErrorContext | None = None,
    ):
        self.kind = kind
        self.token = token
        self.expected = expected
        self.name = name
        self.pos = pos
        super().__init__(message, context)


@dataclass(frozen=True)
class ErrorContext:
    """
    Source location of an error inside an expression.

    Attributes:
        source: The full expression text
        pos: 0-based offset of the offending character
        width: Number of characters to underline
    """

    source: str
    pos: int
    width: int = 3

    def format(self) -> str:
        """
        Format the expression with a marker under the error position.

        Returns:
            Two lines: the source line holding the error and a "^^^" marker
        """
        pos = min(max(self.pos, 0), len(self.source))
        line_start = self.source.rfind("\n", 0, pos) + 1
        line_end = self.source.find("\n", pos)
        if line_end == -1:
            line_end = len(self.source)
        line = self.source[line_start:line_end]
        return f"{line}\n{' ' * (pos - line_start)}{'^' * self.width}"
