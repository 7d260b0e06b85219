"""
Read position over a token sequence.

SPACE tokens are invisible through the cursor: every peek and consume skips
them first.
"""

from __future__ import annotations

from math_expr.core.errors import ErrorContext, EvalError, EvalErrorKind
from math_expr.core.tokenizer import Token, TokenKind, TokenSequence


class TokenCursor:
    """Forward-only cursor used by the evaluator."""

    def __init__(self, tokens: TokenSequence) -> None:
        self.tokens = tokens
        self.index = 0

    def _skip_spaces(self) -> None:
        while self.index < len(self.tokens) and self.tokens[self.index].kind == TokenKind.SPACE:
            self.index += 1

    def peek(self) -> Token | None:
        """Next non-space token, or None at end of input."""
        self._skip_spaces()
        if self.index >= len(self.tokens):
            return None
        return self.tokens[self.index]

    def consume(self) -> Token | None:
        """Return the next non-space token and move past it."""
        tok = self.peek()
        if tok is not None:
            self.index += 1
        return tok

    def at_end(self) -> bool:
        return self.peek() is None

    def match_operator(self, text: str) -> Token | None:
        """Consume the next token if it is the operator *text*."""
        tok = self.peek()
        if tok is not None and tok.is_operator(text):
            self.index += 1
            return tok
        return None

    def expect_operator(self, text: str) -> Token:
        tok = self.match_operator(text)
        if tok is not None:
            return tok

        # A missing closer is reported as UNEXPECTED_TOKEN even at end of input
        found = self.peek()
        got = repr(found.text) if found is not None else "end of input"
        raise self.error(
            EvalErrorKind.UNEXPECTED_TOKEN,
            f"Expected {text!r}, got {got}",
            token=found,
            expected=text,
        )

    def end_pos(self) -> int:
        return len(self.tokens.source)

    def error(
        self,
        kind: EvalErrorKind,
        message: str,
        *,
        token: Token | None = None,
        expected: str | None = None,
        name: str | None = None,
    ) -> EvalError:
        """Build an EvalError located at *token* (or at end of input)."""
        pos = token.pos if token is not None else self.end_pos()
        context = None
        if self.tokens.source:
            context = ErrorContext(source=self.tokens.source, pos=pos)
        return EvalError(
            kind,
            message,
            token=token.text if token is not None else None,
            expected=expected,
            name=name,
            pos=pos,
            context=context,
        )
