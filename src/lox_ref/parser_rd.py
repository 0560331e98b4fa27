"""
Recursive Descent Parser for Lox expressions

This serves as:
1. The parser used by the runner and the REPL
2. The reference the lark grammar (grammar.lark) is checked against
3. Documentation of the precedence ladder

Structure:
- Lexer: Token list from source (lexer_rd)
- Parser: one method per precedence level, lowest first
- AST: frozen dataclasses from tree.py
"""

import logging
from typing import List, Optional

from .token_types import STATEMENT_KEYWORDS, TT, Tok
from .tree import Binary, Expr, Grouping, Literal, Unary
from .types import LoxSyntaxError

logger = logging.getLogger(__name__)

# ============================================================================
# Parser
# ============================================================================

class ParseError(LoxSyntaxError):
    """Parse error carrying the offending token when there is one"""
    def __init__(self, message: str, token: Optional[Tok] = None):
        super().__init__(message, token.line if token is not None else 0)
        self.token = token

class Parser:
    """
    Recursive descent parser for Lox expressions.

    Expression precedence (lowest to highest):
    1. equality (==, !=)
    2. comparison (>, >=, <, <=)
    3. term (-, +)
    4. factor (/, *)
    5. unary (!, -)
    6. primary (literals, parens)

    Every binary level is left-associative.
    """

    LITERAL_TYPES = (TT.NUMBER, TT.STRING, TT.TRUE, TT.FALSE, TT.NIL)

    def __init__(self, tokens: List[Tok]):
        self.tokens = tokens
        self.pos = 0

    # ========================================================================
    # Token Navigation
    # ========================================================================

    def peek(self) -> Optional[Tok]:
        """Current token, or None past the end of the list"""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def previous(self) -> Tok:
        """Most recently consumed token"""
        return self.tokens[self.pos - 1]

    def is_at_end(self) -> bool:
        tok = self.peek()
        return tok is None or tok.matches(TT.EOF)

    def advance(self) -> Tok:
        """Consume current token and return it"""
        if not self.is_at_end():
            self.pos += 1
        return self.previous()

    def check(self, *types: TT) -> bool:
        """Check if current token is one of the given kinds (never EOF)"""
        if self.is_at_end():
            return False
        tok = self.peek()
        return any(tok.matches(kind) for kind in types)

    def match(self, *types: TT) -> bool:
        """Check and consume if current token matches"""
        if self.check(*types):
            self.advance()
            return True
        return False

    def expect(self, token_type: TT, message: str) -> Tok:
        """Consume token of expected type or raise error"""
        if not self.check(token_type):
            raise ParseError(message, self.peek())
        return self.advance()

    # ========================================================================
    # Top-Level Parsing
    # ========================================================================

    def parse(self) -> Expr:
        """Parse a single expression"""
        expr = self.parse_expression()
        logger.debug("parsed expression ending at token %d/%d", self.pos, len(self.tokens))
        return expr

    # ========================================================================
    # Expressions
    # ========================================================================

    def parse_expression(self) -> Expr:
        """expression -> equality"""
        return self.parse_equality()

    def parse_equality(self) -> Expr:
        """equality -> comparison ( ( != | == ) comparison )*"""
        expr = self.parse_comparison()

        while self.match(TT.BANG_EQUAL, TT.EQUAL_EQUAL):
            op = self.previous()
            right = self.parse_comparison()
            expr = Binary(expr, op, right)

        return expr

    def parse_comparison(self) -> Expr:
        """comparison -> term ( ( > | >= | < | <= ) term )*"""
        expr = self.parse_term()

        while self.match(TT.GREATER, TT.GREATER_EQUAL, TT.LESS, TT.LESS_EQUAL):
            op = self.previous()
            right = self.parse_term()
            expr = Binary(expr, op, right)

        return expr

    def parse_term(self) -> Expr:
        """term -> factor ( ( - | + ) factor )*"""
        expr = self.parse_factor()

        while self.match(TT.MINUS, TT.PLUS):
            op = self.previous()
            right = self.parse_factor()
            expr = Binary(expr, op, right)

        return expr

    def parse_factor(self) -> Expr:
        """factor -> unary ( ( / | * ) unary )*"""
        expr = self.parse_unary()

        while self.match(TT.SLASH, TT.STAR):
            op = self.previous()
            right = self.parse_unary()
            expr = Binary(expr, op, right)

        return expr

    def parse_unary(self) -> Expr:
        """unary -> ( ! | - ) unary | primary (right recursive)"""
        if self.match(TT.BANG, TT.MINUS):
            op = self.previous()
            return Unary(op, self.parse_unary())

        return self.parse_primary()

    def parse_primary(self) -> Expr:
        """primary -> NUMBER | STRING | true | false | nil | ( expression )"""
        if self.match(*self.LITERAL_TYPES):
            return Literal(self.previous())

        if self.match(TT.LEFT_PAREN):
            expr = self.parse_expression()
            self.expect(TT.RIGHT_PAREN, "Expected ')' after expression.")
            return Grouping(expr)

        raise ParseError("Expected expression.", self.peek())

    # ========================================================================
    # Error Recovery
    # ========================================================================

    def synchronize(self) -> None:
        """
        Discard tokens up to a statement boundary after an error.

        Stops just past a ';', in front of a statement keyword, or at EOF.
        Unused by the single-expression entry point; kept for a statement
        grammar that reports several errors per input.
        """
        self.advance()

        while not self.is_at_end():
            if self.previous().matches(TT.SEMICOLON):
                return

            if self.peek().type in STATEMENT_KEYWORDS:
                return

            self.advance()

# ============================================================================
# Convenience
# ============================================================================

def parse(tokens: List[Tok]) -> Expr:
    """Pipeline entry point: parse one expression from a scanned token list"""
    return Parser(tokens).parse()


def parse_source(source: str) -> Expr:
    """Tokenize and parse source text"""
    from .lexer_rd import tokenize

    return parse(tokenize(source))


if __name__ == '__main__':
    import sys

    from .tree import pretty

    source = sys.argv[1] if len(sys.argv) > 1 else sys.stdin.read()

    try:
        tree = parse_source(source)
    except LoxSyntaxError as e:
        print(e, file=sys.stderr)
        sys.exit(65)

    print(pretty(tree))
