"""Expression tree nodes shared by both parsers and the evaluator.

The node set is closed: every consumer matches on exactly these four
classes and treats anything else as an internal error.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List
from typing_extensions import TypeAlias

from .token_types import TT, Tok


@dataclass(frozen=True)
class Literal:
    token: Tok


@dataclass(frozen=True)
class Grouping:
    expression: Expr


@dataclass(frozen=True)
class Unary:
    operator: Tok
    right: Expr


@dataclass(frozen=True)
class Binary:
    left: Expr
    operator: Tok
    right: Expr


Expr: TypeAlias = Literal | Grouping | Unary | Binary


def node_label(node: Expr) -> str:
    return type(node).__name__.lower()


def children(node: Expr) -> List[Expr]:
    match node:
        case Literal():
            return []
        case Grouping(expression=inner):
            return [inner]
        case Unary(right=right):
            return [right]
        case Binary(left=left, right=right):
            return [left, right]
    return []


def depth(node: Expr) -> int:
    kids = children(node)
    if not kids:
        return 1
    return 1 + max(depth(kid) for kid in kids)


def _literal_text(tok: Tok) -> str:
    if tok.type is TT.STRING:
        return repr(tok.literal)
    return tok.lexeme


def pretty(node: Expr, indent: str = '  ') -> str:
    """Return an indented, one-node-per-line rendering of the tree."""
    def _pretty(n: Expr, level: int) -> List[str]:
        pad = indent * level
        match n:
            case Literal(token=tok):
                return [f'{pad}literal\t{tok.type.name} {_literal_text(tok)}']
            case Grouping(expression=inner):
                return [f'{pad}grouping'] + _pretty(inner, level + 1)
            case Unary(operator=op, right=right):
                return [f'{pad}unary\t{op.lexeme}'] + _pretty(right, level + 1)
            case Binary(left=left, operator=op, right=right):
                return [f'{pad}binary\t{op.lexeme}'] + _pretty(left, level + 1) + _pretty(right, level + 1)
        raise TypeError(f"not an expression node: {n!r}")

    return '\n'.join(_pretty(node, 0))


def parenthesize(node: Expr) -> str:
    """Lisp-style one-line rendering, e.g. `(* (- 1) (group 2))`."""
    match node:
        case Literal(token=tok):
            return _literal_text(tok)
        case Grouping(expression=inner):
            return f'(group {parenthesize(inner)})'
        case Unary(operator=op, right=right):
            return f'({op.lexeme} {parenthesize(right)})'
        case Binary(left=left, operator=op, right=right):
            return f'({op.lexeme} {parenthesize(left)} {parenthesize(right)})'
    raise TypeError(f"not an expression node: {node!r}")


def same_shape(a: Expr, b: Expr) -> bool:
    """Structural equality ignoring token lines.

    Operators compare by kind; literals by kind and payload.
    """
    match (a, b):
        case (Literal(token=ta), Literal(token=tb)):
            return ta.type is tb.type and ta.literal == tb.literal
        case (Grouping(expression=ia), Grouping(expression=ib)):
            return same_shape(ia, ib)
        case (Unary(operator=oa, right=ra), Unary(operator=ob, right=rb)):
            return oa.type is ob.type and same_shape(ra, rb)
        case (Binary(left=la, operator=oa, right=ra), Binary(left=lb, operator=ob, right=rb)):
            return oa.type is ob.type and same_shape(la, lb) and same_shape(ra, rb)
    return False
