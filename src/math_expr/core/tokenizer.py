"""
Tokenizer for math-expr.

Converts an expression string into a sequence of typed tokens. Whitespace
runs are kept as SPACE tokens so the token texts partition the source.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import overload

from math_expr.core.errors import ErrorContext, LexError

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types produced by the tokenizer."""

    IDENTIFIER = auto()
    OPERATOR = auto()
    NUMBER = auto()
    SPACE = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A single token from the expression tokenizer."""

    kind: TokenKind
    text: str
    pos: int
    value: float = 0.0

    def is_operator(self, text: str) -> bool:
        return self.kind == TokenKind.OPERATOR and self.text == text


@dataclass(frozen=True, slots=True)
class LexDiagnostic:
    """A character the tokenizer skipped because it matched no token."""

    char: str
    pos: int


class TokenSequence:
    """Tokens of one expression, in source order."""

    def __init__(self, source: str = "") -> None:
        self.source = source
        self.diagnostics: list[LexDiagnostic] = []
        self._tokens: list[Token] = []

    def append(self, token: Token) -> None:
        self._tokens.append(token)

    def text(self) -> str:
        """Concatenate every token text back into an expression."""
        return "".join(tok.text for tok in self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    @overload
    def __getitem__(self, index: int) -> Token: ...

    @overload
    def __getitem__(self, index: slice) -> list[Token]: ...

    def __getitem__(self, index: int | slice) -> Token | list[Token]:
        return self._tokens[index]

    def __repr__(self) -> str:
        return f"TokenSequence({self._tokens!r})"


_KIND_NAMES: dict[TokenKind, str] = {
    TokenKind.IDENTIFIER: "IDENTIFIER",
    TokenKind.OPERATOR: "OPERATOR",
    TokenKind.NUMBER: "NUMBER",
    TokenKind.SPACE: "SPACE",
}

OPERATORS = frozenset("+-*/^%=(),")

_SPACE_RE = re.compile(r"[ \t\n\r\f\v]+")
# Decimal literal: "12", "12.", "12.5", ".5", each with an optional exponent.
# A sign is never part of the literal.
_NUMBER_RE = re.compile(r"(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_IDENT_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")


def token_kind_name(kind: TokenKind) -> str:
    """Display name of a token kind ("NUMBER", "IDENTIFIER", ...)."""
    return _KIND_NAMES.get(kind, "UNKNOWN")


def tokenize(source: str, *, strict: bool = False) -> TokenSequence:
    """Tokenize an expression string into a token sequence.

    Unrecognized characters are skipped with a warning. With ``strict=True``
    they raise :class:`LexError` instead.
    """
    tokens = TokenSequence(source)
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        # Whitespace runs
        m = _SPACE_RE.match(source, i)
        if m:
            tokens.append(Token(TokenKind.SPACE, m.group(0), i))
            i = m.end()
            continue

        # Numbers, checked before operators so ".5" is a single token
        m = _NUMBER_RE.match(source, i)
        if m:
            text = m.group(0)
            value = float(text)
            if math.isinf(value):
                logger.warning("Numeric literal %r at position %d overflows to infinity", text, i)
            tokens.append(Token(TokenKind.NUMBER, text, i, value))
            i = m.end()
            continue

        # Identifiers
        m = _IDENT_RE.match(source, i)
        if m:
            tokens.append(Token(TokenKind.IDENTIFIER, m.group(0), i))
            i = m.end()
            continue

        # Single-character operators and punctuation
        if c in OPERATORS:
            tokens.append(Token(TokenKind.OPERATOR, c, i))
            i += 1
            continue

        if strict:
            raise LexError(
                f"Unrecognized character: {c!r}",
                c,
                i,
                ErrorContext(source=source, pos=i, width=1),
            )
        logger.warning("Skipping unrecognized character %r at position %d", c, i)
        tokens.diagnostics.append(LexDiagnostic(c, i))
        i += 1

    logger.debug("Tokenized %r into %d tokens", source, len(tokens))
    return tokens
