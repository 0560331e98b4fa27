"""prompt_toolkit lexer for live Lox syntax highlighting in the REPL."""

from __future__ import annotations

from typing import Callable

from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .lexer_rd import Lexer as LoxScanner, LexError
from .token_types import KEYWORDS, TT

# Map highlight groups → prompt_toolkit style strings.
GROUP_STYLE = {
    "keyword": "bold ansicyan",
    "boolean": "ansicyan",
    "constant": "ansicyan",
    "number": "ansimagenta",
    "string": "ansigreen",
    "identifier": "",
    "operator": "",
    "punctuation": "",
    "comment": "italic ansigray",
}

_OPERATORS = (
    TT.MINUS, TT.PLUS, TT.SLASH, TT.STAR,
    TT.BANG, TT.BANG_EQUAL, TT.EQUAL, TT.EQUAL_EQUAL,
    TT.GREATER, TT.GREATER_EQUAL, TT.LESS, TT.LESS_EQUAL,
)

_PUNCTUATION = (
    TT.LEFT_PAREN, TT.RIGHT_PAREN, TT.LEFT_BRACE, TT.RIGHT_BRACE,
    TT.COMMA, TT.DOT, TT.SEMICOLON,
)

# Token type → highlight group.
_TT_GROUP = {kind: "keyword" for kind in KEYWORDS.values()}
_TT_GROUP.update({kind: "operator" for kind in _OPERATORS})
_TT_GROUP.update({kind: "punctuation" for kind in _PUNCTUATION})
_TT_GROUP.update({
    TT.TRUE: "boolean",
    TT.FALSE: "boolean",
    TT.NIL: "constant",
    TT.NUMBER: "number",
    TT.STRING: "string",
    TT.IDENTIFIER: "identifier",
})


def _tail(text: str) -> StyleAndTextTuples:
    """Split trailing text into plain whitespace and a `//` comment."""
    idx = text.find("//")
    if idx < 0:
        return [("", text)]

    spans: StyleAndTextTuples = []
    if idx > 0:
        spans.append(("", text[:idx]))
    spans.append((GROUP_STYLE["comment"], text[idx:]))
    return spans


def _highlight_line(text: str) -> StyleAndTextTuples:
    """Tokenize a single line and return styled fragments."""
    if not text:
        return [("", "")]

    try:
        tokens = LoxScanner(text).tokenize()
    except LexError:
        return [("", text)]

    result: StyleAndTextTuples = []
    pos = 0

    for tok in tokens:
        if tok.type is TT.EOF or not tok.lexeme:
            continue

        # Find actual position of this lexeme in the line from pos onwards.
        idx = text.find(tok.lexeme, pos)
        if idx < 0:
            continue

        # Unstyled gap before token.
        if idx > pos:
            result.append(("", text[pos:idx]))

        style = GROUP_STYLE.get(_TT_GROUP.get(tok.type, ""), "")
        result.append((style, tok.lexeme))
        pos = idx + len(tok.lexeme)

    if pos < len(text):
        result.extend(_tail(text[pos:]))

    return result if result else [("", text)]


class LoxLexer(Lexer):
    """prompt_toolkit Lexer that highlights Lox source using the RD lexer."""

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines

        cache: dict[int, StyleAndTextTuples] = {}

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno not in cache:
                if lineno < len(lines):
                    cache[lineno] = _highlight_line(lines[lineno])
                else:
                    cache[lineno] = [("", "")]

            return cache[lineno]

        return get_line
