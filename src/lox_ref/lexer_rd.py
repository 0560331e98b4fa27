"""
Lexer for the Lox expression core - Recursive Descent Parser front end

Tokenizes source text into a list of tokens terminated by EOF.

Features:
- Single-pass tokenization, stops at the first error
- Line tracking (1-based, counted on '\\n')
- `//` line comments
- String literals may span lines; no escape processing
"""

import logging
from typing import List

from .token_types import KEYWORDS, TT, Tok, eof_token
from .types import LoxSyntaxError

logger = logging.getLogger(__name__)

# ============================================================================
# Lexer Implementation
# ============================================================================

class Lexer:
    """
    Lox lexer.

    Each call to scan_token() snaps `start` to `pos` and emits at most one
    token; the lexeme is always source[start:pos].
    """

    KEYWORDS = KEYWORDS

    SINGLE_CHAR = {
        '(': TT.LEFT_PAREN,
        ')': TT.RIGHT_PAREN,
        '{': TT.LEFT_BRACE,
        '}': TT.RIGHT_BRACE,
        ',': TT.COMMA,
        '.': TT.DOT,
        '-': TT.MINUS,
        '+': TT.PLUS,
        ';': TT.SEMICOLON,
        '*': TT.STAR,
    }

    # First char => (kind when followed by '=', kind otherwise)
    ONE_OR_TWO_CHAR = {
        '!': (TT.BANG_EQUAL, TT.BANG),
        '=': (TT.EQUAL_EQUAL, TT.EQUAL),
        '<': (TT.LESS_EQUAL, TT.LESS),
        '>': (TT.GREATER_EQUAL, TT.GREATER),
    }

    WHITESPACE = (' ', '\r', '\t')

    def __init__(self, source: str):
        self.source = source
        self.start = 0
        self.pos = 0
        self.line = 1
        self.tokens: List[Tok] = []

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def tokenize(self) -> List[Tok]:
        """Tokenize entire source, return token list"""
        while not self.is_at_end():
            self.start = self.pos
            self.scan_token()

        self.tokens.append(eof_token(self.line))
        logger.debug("scanned %d tokens over %d line(s)", len(self.tokens), self.line)
        return self.tokens

    def scan_token(self):
        """Scan next token"""
        ch = self.advance()

        if ch in self.SINGLE_CHAR:
            self.emit(self.SINGLE_CHAR[ch])
            return

        if ch in self.ONE_OR_TWO_CHAR:
            double, single = self.ONE_OR_TWO_CHAR[ch]
            self.emit(double if self.match('=') else single)
            return

        if ch == '/':
            if self.match('/'):
                self.skip_comment()
            else:
                self.emit(TT.SLASH)
            return

        if ch in self.WHITESPACE:
            return

        if ch == '\n':
            self.line += 1
            return

        if ch == '"':
            self.scan_string()
            return

        if is_digit(ch):
            self.scan_number()
            return

        if ch.isalpha() or ch == '_':
            self.scan_identifier()
            return

        raise LexError("Unexpected character.", self.line)

    # ========================================================================
    # Token Scanners
    # ========================================================================

    def scan_string(self):
        """Scan string literal: "..." (opening quote already consumed)"""
        start_line = self.line

        while self.peek() != '"' and not self.is_at_end():
            if self.peek() == '\n':
                self.line += 1
            self.advance()

        if self.is_at_end():
            raise LexError("Unterminated string.", start_line)

        self.advance()  # Closing quote
        self.emit(TT.STRING, self.source[self.start + 1:self.pos - 1])

    def scan_number(self):
        """Scan number literal: digits, optionally '.' and more digits"""
        while is_digit(self.peek()):
            self.advance()

        # A '.' belongs to the number only when a digit follows it
        if self.peek() == '.' and is_digit(self.peek(1)):
            self.advance()
            while is_digit(self.peek()):
                self.advance()

        lexeme = self.current_lexeme()
        try:
            value = float(lexeme)
        except ValueError:
            raise LexError("Invalid number literal.", self.line) from None

        self.emit(TT.NUMBER, value)

    def scan_identifier(self):
        """Scan identifier or keyword"""
        while self.peek().isalnum() or self.peek() == '_':
            self.advance()

        word = self.current_lexeme()
        token_type = self.KEYWORDS.get(word)
        if token_type is None:
            self.emit(TT.IDENTIFIER, word)
        else:
            self.emit(token_type)

    # ========================================================================
    # Utilities
    # ========================================================================

    def is_at_end(self) -> bool:
        return self.pos >= len(self.source)

    def peek(self, offset: int = 0) -> str:
        """Look ahead at character"""
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def advance(self) -> str:
        """Consume one character and return it"""
        ch = self.peek()
        self.pos += 1
        return ch

    def match(self, expected: str) -> bool:
        """Consume the next character only if it is `expected`"""
        if self.is_at_end() or self.source[self.pos] != expected:
            return False
        self.pos += 1
        return True

    def skip_comment(self):
        """Skip comment until end of line; the newline itself is left"""
        while self.peek() != '\n' and not self.is_at_end():
            self.advance()

    def current_lexeme(self) -> str:
        return self.source[self.start:self.pos]

    def emit(self, token_type: TT, literal=None):
        """Emit a token for source[start:pos] on the current line"""
        tok = Tok(
            type=token_type,
            lexeme=self.current_lexeme(),
            line=self.line,
            literal=literal,
        )
        self.tokens.append(tok)

class LexError(LoxSyntaxError):
    """Lexical analysis error"""
    pass

def is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'

# ============================================================================
# Convenience
# ============================================================================

def tokenize(source: str) -> List[Tok]:
    """Convenience function to tokenize source"""
    lexer = Lexer(source)
    return lexer.tokenize()


def scan(source: str) -> List[Tok]:
    """Pipeline entry point; alias of tokenize()"""
    return tokenize(source)


if __name__ == '__main__':
    import sys

    test_source = sys.argv[1] if len(sys.argv) > 1 else '(1 + 2) * -3 >= 4 // done'

    try:
        tokens = tokenize(test_source)
    except LexError as exc:
        print(exc, file=sys.stderr)
        sys.exit(65)

    for tok in tokens:
        print(tok)
