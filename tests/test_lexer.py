from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import pytest

from lox_ref.lexer_rd import LexError, Lexer, TT, scan, tokenize
from lox_ref.token_types import KEYWORDS


@dataclass(frozen=True)
class Case:
    """Unified lexer case payload."""

    name: str
    source: str
    expected: Optional[Tuple[Tuple[TT, object], ...]] = None
    expected_types: Optional[Tuple[TT, ...]] = None
    expected_lines: Optional[Tuple[Tuple[str, int], ...]] = None
    msg: Optional[str] = None
    err_line: Optional[int] = None


LITERAL_CASES: List[Case] = [
    Case("number-int", "123", expected=((TT.NUMBER, 123.0),)),
    Case("number-float", "3.14", expected=((TT.NUMBER, 3.14),)),
    Case("number-leading-zero", "007", expected=((TT.NUMBER, 7.0),)),
    Case("string-plain", '"hello"', expected=((TT.STRING, "hello"),)),
    Case("string-empty", '""', expected=((TT.STRING, ""),)),
    Case("string-backslash-kept", r'"a\nb"', expected=((TT.STRING, "a\\nb"),)),
    Case("ident-single", "x", expected=((TT.IDENTIFIER, "x"),)),
    Case("ident-snake", "foo_bar", expected=((TT.IDENTIFIER, "foo_bar"),)),
    Case("ident-leading-underscore", "_tmp1", expected=((TT.IDENTIFIER, "_tmp1"),)),
    Case("ident-keyword-prefix", "orchid", expected=((TT.IDENTIFIER, "orchid"),)),
]

SINGLE_TOKEN_CASES: List[Case] = [
    Case("left-paren", "(", expected_types=(TT.LEFT_PAREN,)),
    Case("right-paren", ")", expected_types=(TT.RIGHT_PAREN,)),
    Case("left-brace", "{", expected_types=(TT.LEFT_BRACE,)),
    Case("right-brace", "}", expected_types=(TT.RIGHT_BRACE,)),
    Case("comma", ",", expected_types=(TT.COMMA,)),
    Case("dot", ".", expected_types=(TT.DOT,)),
    Case("minus", "-", expected_types=(TT.MINUS,)),
    Case("plus", "+", expected_types=(TT.PLUS,)),
    Case("semicolon", ";", expected_types=(TT.SEMICOLON,)),
    Case("slash", "/", expected_types=(TT.SLASH,)),
    Case("star", "*", expected_types=(TT.STAR,)),
    Case("bang", "!", expected_types=(TT.BANG,)),
    Case("bang-equal", "!=", expected_types=(TT.BANG_EQUAL,)),
    Case("equal", "=", expected_types=(TT.EQUAL,)),
    Case("equal-equal", "==", expected_types=(TT.EQUAL_EQUAL,)),
    Case("greater", ">", expected_types=(TT.GREATER,)),
    Case("greater-equal", ">=", expected_types=(TT.GREATER_EQUAL,)),
    Case("less", "<", expected_types=(TT.LESS,)),
    Case("less-equal", "<=", expected_types=(TT.LESS_EQUAL,)),
] + [
    Case(f"keyword-{word}", word, expected_types=(kind,))
    for word, kind in sorted(KEYWORDS.items())
]

SEQUENCE_CASES: List[Case] = [
    Case(
        "operators-greedy",
        "!==<=>",
        expected_types=(TT.BANG_EQUAL, TT.EQUAL, TT.LESS_EQUAL, TT.GREATER),
    ),
    Case(
        "number-trailing-dot",
        "1.",
        expected_types=(TT.NUMBER, TT.DOT),
    ),
    Case(
        "number-leading-dot",
        ".5",
        expected_types=(TT.DOT, TT.NUMBER),
    ),
    Case(
        "number-method-like",
        "1.2.3",
        expected_types=(TT.NUMBER, TT.DOT, TT.NUMBER),
    ),
    Case(
        "expression",
        "-(1 + 2) * 3",
        expected_types=(
            TT.MINUS, TT.LEFT_PAREN, TT.NUMBER, TT.PLUS, TT.NUMBER,
            TT.RIGHT_PAREN, TT.STAR, TT.NUMBER,
        ),
    ),
    Case(
        "whitespace-only",
        " \t\r\n ",
        expected_types=(),
    ),
]

POSITION_CASES: List[Case] = [
    Case("first-line", "a", expected_lines=(("a", 1),)),
    Case("after-newlines", "a\n\nb", expected_lines=(("a", 1), ("b", 3))),
    Case("after-comment", "// note\nx", expected_lines=(("x", 2),)),
    Case("multiline-string", '"one\ntwo" y', expected_lines=(("y", 2),)),
]

ERROR_CASES: List[Case] = [
    Case("unexpected-char", "1 @ 2", msg="Unexpected character.", err_line=1),
    Case("unexpected-char-later-line", "1\n\n#", msg="Unexpected character.", err_line=3),
    Case("unterminated-string", '"abc', msg="Unterminated string.", err_line=1),
    Case("unterminated-string-start-line", '1\n"abc\ndef', msg="Unterminated string.", err_line=2),
]


def _non_eof_tokens(source: str):
    tokens = tokenize(source)
    assert tokens[-1].type == TT.EOF
    return tokens[:-1]


@pytest.mark.parametrize("case", LITERAL_CASES, ids=lambda case: case.name)
def test_literal_tokens(case: Case) -> None:
    tokens = _non_eof_tokens(case.source)

    assert case.expected is not None
    assert len(tokens) == len(case.expected)
    for token, (expected_type, expected_literal) in zip(tokens, case.expected):
        assert token.type == expected_type
        assert token.literal == expected_literal
        assert token.lexeme == case.source


@pytest.mark.parametrize("case", SINGLE_TOKEN_CASES, ids=lambda case: case.name)
def test_single_token_lexemes(case: Case) -> None:
    tokens = tokenize(case.source)

    assert case.expected_types is not None
    assert [token.type for token in tokens] == list(case.expected_types) + [TT.EOF]
    assert tokens[0].lexeme == case.source
    assert tokens[0].literal is None


@pytest.mark.parametrize("case", SEQUENCE_CASES, ids=lambda case: case.name)
def test_token_sequences(case: Case) -> None:
    tokens = _non_eof_tokens(case.source)
    assert case.expected_types is not None
    assert [token.type for token in tokens] == list(case.expected_types)


@pytest.mark.parametrize("case", POSITION_CASES, ids=lambda case: case.name)
def test_position_tracking(case: Case) -> None:
    assert case.expected_lines is not None
    by_lexeme = {token.lexeme: token.line for token in tokenize(case.source)}

    for lexeme, expected_line in case.expected_lines:
        assert by_lexeme[lexeme] == expected_line


@pytest.mark.parametrize("case", ERROR_CASES, ids=lambda case: case.name)
def test_lex_errors(case: Case) -> None:
    with pytest.raises(LexError) as exc_info:
        tokenize(case.source)

    err = exc_info.value
    assert err.message == case.msg
    assert err.line == case.err_line
    assert str(err) == f"[line {case.err_line}] Error: {case.msg}"


def test_comment_produces_no_token() -> None:
    tokens = tokenize("// comment\n123")

    assert [token.type for token in tokens] == [TT.NUMBER, TT.EOF]
    assert tokens[0].literal == 123.0
    assert tokens[0].line == 2
    assert tokens[1].line == 2


def test_eof_token_shape() -> None:
    eof = tokenize("1\n2\n")[-1]

    assert eof.type == TT.EOF
    assert eof.lexeme == ""
    assert eof.literal is None
    assert eof.line == 3


def test_empty_source_is_only_eof() -> None:
    assert [token.type for token in tokenize("")] == [TT.EOF]


def test_scan_is_tokenize() -> None:
    assert scan("1 + 2") == tokenize("1 + 2")


def test_lexer_instance_stops_at_first_error() -> None:
    lexer = Lexer("1 + @ 2")

    with pytest.raises(LexError):
        lexer.tokenize()

    assert [token.type for token in lexer.tokens] == [TT.NUMBER, TT.PLUS]


def test_unicode_identifier_and_string() -> None:
    tokens = _non_eof_tokens('café "naïve"')

    assert [token.type for token in tokens] == [TT.IDENTIFIER, TT.STRING]
    assert tokens[0].lexeme == "café"
    assert tokens[1].literal == "naïve"


def test_non_ascii_digit_is_not_a_number() -> None:
    with pytest.raises(LexError):
        tokenize("١")


@pytest.mark.parametrize(
    "source",
    [
        pytest.param("1 + 2 * 3", id="arith"),
        pytest.param('"a" == "b"', id="strings"),
        pytest.param("!(true != nil)", id="logic"),
        pytest.param("12.5 >= 0.25", id="decimals"),
    ],
)
def test_rescanning_lexemes_is_stable(source: str) -> None:
    tokens = tokenize(source)

    for token in tokens[:-1]:
        again = tokenize(token.lexeme)
        assert len(again) == 2
        assert again[0].type == token.type
        assert again[0].literal == token.literal
