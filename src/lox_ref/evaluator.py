from __future__ import annotations

import logging
import sys
from typing import Callable, Optional, TextIO

from .token_types import TT, Tok
from .tree import Binary, Expr, Grouping, Literal, Unary
from .types import (
    LoxBool,
    LoxInternalError,
    LoxNil,
    LoxNumber,
    LoxString,
    LoxTypeError,
    LoxValue,
)
from .eval.expr import apply_binary_operator, eval_unary
from .utils import report_error

logger = logging.getLogger(__name__)

# ---------------- Public API ----------------

def evaluate(expr: Expr) -> LoxValue:
    """Pipeline entry point: walk the tree and return its value."""
    return eval_node(expr)

def interpret(expr: Expr, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> Optional[LoxValue]:
    """Evaluate once and print the display form, or report the type error.

    The error is reported and not re-raised so an interactive caller keeps
    going with its next input.
    """
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr

    try:
        value = evaluate(expr)
    except LoxTypeError as exc:
        logger.debug("evaluation failed: %s", exc)
        report_error(exc, err)
        return None

    print(value, file=out)
    return value

# ---------------- Core evaluator ----------------

def eval_node(n: Expr) -> LoxValue:
    match n:
        case Literal(token=tok):
            return _eval_literal(tok)
        case Grouping(expression=inner):
            return eval_node(inner)
        case Unary(operator=op, right=right):
            return eval_unary(op, eval_node(right))
        case Binary(left=left, operator=op, right=right):
            lhs = eval_node(left)
            rhs = eval_node(right)
            return apply_binary_operator(op, lhs, rhs)
        case _:
            raise LoxInternalError(f"Unknown node: {n!r}")

# ---------------- Tokens ----------------

def _eval_literal(t: Tok) -> LoxValue:
    handler = _LITERAL_DISPATCH.get(t.type)
    if handler is None:
        raise LoxInternalError(f"Invalid literal value {t.lexeme!r}")

    return handler(t)

_LITERAL_DISPATCH: dict[TT, Callable[[Tok], LoxValue]] = {
    TT.NUMBER: lambda t: LoxNumber(float(t.literal)),
    TT.STRING: lambda t: LoxString(str(t.literal)),
    TT.TRUE: lambda _: LoxBool(True),
    TT.FALSE: lambda _: LoxBool(False),
    TT.NIL: lambda _: LoxNil(),
}
