"""Grammar-driven parser built from grammar.lark.

Produces the same `Expr` dataclasses as parser_rd so the two can be compared
node for node (see `cross_check`). Selected from the CLI with `--lark`.

Both parsers read the token list from lexer_rd, so lexical errors are
identical. Like `Parser.parse`, parsing stops at the first token that cannot
extend a complete expression; the rest of the list is not examined.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterator, List, Optional, Set

from lark import Lark, Token, Transformer, v_args
from lark.lexer import Lexer as LarkLexer

from .lexer_rd import tokenize
from .token_types import TT, Tok
from .tree import Binary, Expr, Grouping, Literal, Unary, same_shape
from .parser_rd import ParseError

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).resolve().with_name("grammar.lark")

END = "$END"


def _read_grammar(grammar_path: Optional[str] = None) -> str:
    path = Path(grammar_path) if grammar_path else GRAMMAR_PATH
    if not path.exists():
        raise FileNotFoundError(f"grammar not found: {path}")
    return path.read_text(encoding="utf-8")


def to_lark_token(tok: Tok) -> Token:
    return Token(tok.type.name, tok.lexeme, line=tok.line, end_line=tok.line)


class ScannerLexer(LarkLexer):
    """Hands lark the tokens lexer_rd already produced."""

    def __init__(self, lexer_conf):
        pass

    def lex(self, data: List[Tok]) -> Iterator[Token]:
        for tok in data:
            if tok.type is not TT.EOF:
                yield to_lark_token(tok)


@lru_cache(maxsize=None)
def build_parser(grammar_path: Optional[str] = None) -> Lark:
    return Lark(
        _read_grammar(grammar_path),
        parser="lalr",
        lexer=ScannerLexer,
        start="start",
        maybe_placeholders=False,
    )


def to_tok(token: Token) -> Tok:
    """Convert a lark token into the scanner's token record.

    The line is the token's last line, as the scanner reports it for strings
    that span lines.
    """
    kind = TT[token.type]
    lexeme = str(token)
    literal = None

    if kind is TT.NUMBER:
        literal = float(lexeme)
    elif kind is TT.STRING:
        literal = lexeme[1:-1]

    line = token.end_line if token.end_line is not None else token.line
    return Tok(kind, lexeme, line, literal)


@v_args(inline=True)
class ToExpr(Transformer):
    """Rebuild the lark parse tree as `Expr` nodes."""

    def literal(self, tok):
        return Literal(to_tok(tok))

    def grouping(self, _lpar, inner, _rpar):
        return Grouping(inner)

    def unary(self, op, right):
        return Unary(to_tok(op), right)

    def binary(self, left, op, right):
        return Binary(left, to_tok(op), right)


def _rejected(tok: Optional[Tok], accepted: Set[str], open_parens: int) -> ParseError:
    if open_parens > 0 and "RIGHT_PAREN" in accepted:
        return ParseError("Expected ')' after expression.", tok)
    return ParseError("Expected expression.", tok)


def parse_lark_tokens(tokens: List[Tok], grammar_path: Optional[str] = None) -> Expr:
    """Parse one expression from a scanned token list."""
    ip = build_parser(grammar_path).parse_interactive()
    last: Optional[Token] = None
    open_parens = 0

    for tok in tokens:
        kind = END if tok.type is TT.EOF else tok.type.name
        accepted = ip.accepts()

        if kind not in accepted:
            if END in accepted:
                logger.debug("lark stopped before %r", tok)
                break
            raise _rejected(tok, accepted, open_parens)

        if kind == END:
            break

        last = to_lark_token(tok)
        ip.feed_token(last)
        if tok.type is TT.LEFT_PAREN:
            open_parens += 1
        elif tok.type is TT.RIGHT_PAREN:
            open_parens -= 1
    else:
        # Token list without EOF; end of list acts as end of input
        accepted = ip.accepts()
        if END not in accepted:
            raise _rejected(None, accepted, open_parens)

    tree = ip.feed_eof(last)
    expr = ToExpr().transform(tree)
    logger.debug("lark tree root: %s", type(expr).__name__)
    return expr


def parse_lark(source: str, grammar_path: Optional[str] = None) -> Expr:
    """Tokenize with lexer_rd and parse with the lark grammar."""
    return parse_lark_tokens(tokenize(source), grammar_path)


def cross_check(source: str) -> bool:
    """True when both parsers accept `source` and build the same tree."""
    from .parser_rd import parse_source

    return same_shape(parse_source(source), parse_lark(source))
