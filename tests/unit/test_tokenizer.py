"""Tests for the math-expr tokenizer."""

from __future__ import annotations

import dataclasses
import logging
import math

import pytest

from math_expr.core.errors import LexError
from math_expr.core.tokenizer import (
    LexDiagnostic,
    Token,
    TokenKind,
    TokenSequence,
    token_kind_name,
    tokenize,
)


def kinds(source: str) -> list[TokenKind]:
    return [t.kind for t in tokenize(source)]


class TestNumbers:
    """Numeric literals become single NUMBER tokens with eager values."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("3.1415", 3.1415),
            ("42", 42.0),
            ("1e3", 1000.0),
            (".5", 0.5),
            ("5.", 5.0),
            ("2.5E-3", 0.0025),
            ("7e+2", 700.0),
            ("0.000", 0.0),
        ],
    )
    def test_literal_value(self, source: str, expected: float) -> None:
        tokens = tokenize(source)
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.NUMBER
        assert tokens[0].text == source
        assert tokens[0].value == expected

    def test_sign_is_not_part_of_number(self) -> None:
        tokens = tokenize("-5")
        assert [t.kind for t in tokens] == [TokenKind.OPERATOR, TokenKind.NUMBER]
        assert tokens[1].value == 5.0

    def test_exponent_without_digits_is_not_consumed(self) -> None:
        tokens = tokenize("1e")
        assert [(t.kind, t.text) for t in tokens] == [
            (TokenKind.NUMBER, "1"),
            (TokenKind.IDENTIFIER, "e"),
        ]

    def test_second_dot_starts_new_number(self) -> None:
        tokens = tokenize("1.2.3")
        assert [t.text for t in tokens] == ["1.2", ".3"]
        assert [t.value for t in tokens] == [1.2, 0.3]

    def test_overflowing_literal_is_infinite(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="math_expr.core.tokenizer"):
            tokens = tokenize("1e999")
        assert math.isinf(tokens[0].value)
        assert "overflows" in caplog.text

    def test_non_number_tokens_have_zero_value(self) -> None:
        for tok in tokenize("sin ( + )"):
            assert tok.value == 0.0


class TestTokenKinds:
    """Identifiers, operators and whitespace runs."""

    def test_expression(self) -> None:
        assert kinds("3.1415 * radius^2 + sin(theta / 2)") == [
            TokenKind.NUMBER,
            TokenKind.SPACE,
            TokenKind.OPERATOR,
            TokenKind.SPACE,
            TokenKind.IDENTIFIER,
            TokenKind.OPERATOR,
            TokenKind.NUMBER,
            TokenKind.SPACE,
            TokenKind.OPERATOR,
            TokenKind.SPACE,
            TokenKind.IDENTIFIER,
            TokenKind.OPERATOR,
            TokenKind.IDENTIFIER,
            TokenKind.SPACE,
            TokenKind.OPERATOR,
            TokenKind.SPACE,
            TokenKind.NUMBER,
            TokenKind.OPERATOR,
        ]

    def test_all_operators(self) -> None:
        tokens = tokenize("+-*/^%=(),")
        assert all(t.kind == TokenKind.OPERATOR for t in tokens)
        assert [t.text for t in tokens] == list("+-*/^%=(),")

    def test_identifier_keeps_case(self) -> None:
        tokens = tokenize("Sin_2x")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.IDENTIFIER
        assert tokens[0].text == "Sin_2x"

    def test_identifier_may_start_with_underscore(self) -> None:
        assert kinds("_x1") == [TokenKind.IDENTIFIER]

    def test_digits_then_letters_split(self) -> None:
        tokens = tokenize("2pi")
        assert [(t.kind, t.text) for t in tokens] == [
            (TokenKind.NUMBER, "2"),
            (TokenKind.IDENTIFIER, "pi"),
        ]

    def test_whitespace_run_is_one_token(self) -> None:
        tokens = tokenize("1 \t\r\n\f\v2")
        assert [t.kind for t in tokens] == [TokenKind.NUMBER, TokenKind.SPACE, TokenKind.NUMBER]
        assert tokens[1].text == " \t\r\n\f\v"

    def test_positions(self) -> None:
        tokens = tokenize("ab + 12")
        assert [t.pos for t in tokens] == [0, 2, 3, 4, 5]

    def test_empty_input(self) -> None:
        tokens = tokenize("")
        assert len(tokens) == 0
        assert tokens.diagnostics == []


class TestLossless:
    """Token texts partition the source."""

    @pytest.mark.parametrize(
        "source",
        [
            "3.1415 * radius^2 + sin(theta / 2)",
            "  max( 3 ,\tsin(90) )\n",
            "1e3+.5-2.E1",
            "",
        ],
    )
    def test_concatenated_texts_reproduce_input(self, source: str) -> None:
        tokens = tokenize(source)
        assert tokens.text() == source
        assert tokenize(tokens.text()).text() == source


class TestUnrecognized:
    """Unknown characters are skipped unless strict lexing is on."""

    def test_lenient_skips_and_records(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="math_expr.core.tokenizer"):
            tokens = tokenize("2 $ 3")
        assert [t.text for t in tokens] == ["2", " ", " ", "3"]
        assert tokens.diagnostics == [LexDiagnostic("$", 2)]
        assert "unrecognized character '$'" in caplog.text

    def test_lone_dot_is_skipped(self) -> None:
        tokens = tokenize("1 . 2")
        assert [t.kind for t in tokens if t.kind != TokenKind.SPACE] == [
            TokenKind.NUMBER,
            TokenKind.NUMBER,
        ]
        assert tokens.diagnostics == [LexDiagnostic(".", 2)]

    def test_non_ascii_digit_is_skipped(self) -> None:
        tokens = tokenize("2²")
        assert [t.text for t in tokens] == ["2"]
        assert tokens.diagnostics[0].char == "²"

    def test_strict_raises(self) -> None:
        with pytest.raises(LexError, match="Unrecognized character") as exc_info:
            tokenize("2 $ 3", strict=True)
        assert exc_info.value.char == "$"
        assert exc_info.value.pos == 2
        assert "2 $ 3\n  ^" in str(exc_info.value)


class TestTokenTypes:
    def test_token_is_immutable(self) -> None:
        tok = Token(TokenKind.NUMBER, "1", 0, 1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            tok.text = "2"  # type: ignore[misc]

    def test_is_operator(self) -> None:
        assert Token(TokenKind.OPERATOR, "(", 0).is_operator("(")
        assert not Token(TokenKind.OPERATOR, ")", 0).is_operator("(")
        assert not Token(TokenKind.IDENTIFIER, "x", 0).is_operator("x")

    def test_sequence_is_appendable(self) -> None:
        seq = TokenSequence("1")
        seq.append(Token(TokenKind.NUMBER, "1", 0, 1.0))
        assert len(seq) == 1
        assert list(seq)[0].value == 1.0
        assert seq[0:1][0].text == "1"

    @pytest.mark.parametrize(
        ("kind", "name"),
        [
            (TokenKind.IDENTIFIER, "IDENTIFIER"),
            (TokenKind.OPERATOR, "OPERATOR"),
            (TokenKind.NUMBER, "NUMBER"),
            (TokenKind.SPACE, "SPACE"),
        ],
    )
    def test_kind_names(self, kind: TokenKind, name: str) -> None:
        assert token_kind_name(kind) == name
