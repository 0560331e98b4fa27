"""
Token Types for the Lox expression core

Shared between lexer, parser, evaluator and the lark cross-check parser to
avoid circular dependencies.
"""

from typing import Union
from dataclasses import dataclass
from enum import Enum, auto


class TT(Enum):
    """Token Types - mirrors grammar terminals"""

    # Single-character tokens
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    # One or two character tokens
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # Literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # Keywords
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    # Special
    EOF = auto()


KEYWORDS = {
    'and': TT.AND,
    'class': TT.CLASS,
    'else': TT.ELSE,
    'false': TT.FALSE,
    'for': TT.FOR,
    'fun': TT.FUN,
    'if': TT.IF,
    'nil': TT.NIL,
    'or': TT.OR,
    'print': TT.PRINT,
    'return': TT.RETURN,
    'super': TT.SUPER,
    'this': TT.THIS,
    'true': TT.TRUE,
    'var': TT.VAR,
    'while': TT.WHILE,
}

# Keywords that open a statement; the parser resynchronizes in front of them.
STATEMENT_KEYWORDS = frozenset({
    TT.CLASS,
    TT.FOR,
    TT.FUN,
    TT.IF,
    TT.PRINT,
    TT.RETURN,
    TT.VAR,
    TT.WHILE,
})

Literal = Union[str, float, None]


@dataclass(frozen=True)
class Tok:
    """Token with its exact lexeme, the line its scan ended on, and payload.

    `literal` is the identifier name, the string contents between the quotes
    or the parsed float; every other kind carries None.
    """

    type: TT
    lexeme: str
    line: int = 0
    literal: Literal = None

    def matches(self, kind: TT) -> bool:
        """Kind-only comparison; the payload is never consulted."""
        return self.type is kind

    def __repr__(self):
        if self.literal is None:
            return f"Tok({self.type.name}, {self.lexeme!r}, line {self.line})"
        return f"Tok({self.type.name}, {self.lexeme!r}, {self.literal!r}, line {self.line})"


def eof_token(line: int = 0) -> Tok:
    return Tok(TT.EOF, '', line)
