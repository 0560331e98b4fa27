from __future__ import annotations

import math
import operator
from typing import Callable, Dict

from ..token_types import TT, Tok
from ..types import (
    LoxBool,
    LoxInternalError,
    LoxNumber,
    LoxString,
    LoxTypeError,
    LoxValue,
)
from ..utils import lox_equals
from .helpers import is_truthy

def _divide(a: float, b: float) -> float:
    # float division by zero raises in Python; IEEE yields inf or nan
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b

# Operators that take two numbers; arithmetic results are wrapped as numbers,
# comparison results as booleans.
_ARITHMETIC: Dict[TT, Callable[[float, float], float]] = {
    TT.MINUS: operator.sub,
    TT.STAR: operator.mul,
    TT.SLASH: _divide,
}

_COMPARISON: Dict[TT, Callable[[float, float], bool]] = {
    TT.GREATER: operator.gt,
    TT.GREATER_EQUAL: operator.ge,
    TT.LESS: operator.lt,
    TT.LESS_EQUAL: operator.le,
}

def require_number(value: LoxValue, op: Tok) -> float:
    if isinstance(value, LoxNumber):
        return value.value

    raise LoxTypeError("Expected number", op.line)

def eval_unary(op: Tok, rhs: LoxValue) -> LoxValue:
    match op.type:
        case TT.MINUS:
            return LoxNumber(-require_number(rhs, op))
        case TT.BANG:
            return LoxBool(not is_truthy(rhs))
        case _:
            raise LoxInternalError(f"Invalid unary operator {op.lexeme!r}")

def apply_binary_operator(op: Tok, lhs: LoxValue, rhs: LoxValue) -> LoxValue:
    kind = op.type

    if kind in _ARITHMETIC:
        a = require_number(lhs, op)
        b = require_number(rhs, op)
        return LoxNumber(_ARITHMETIC[kind](a, b))

    if kind in _COMPARISON:
        a = require_number(lhs, op)
        b = require_number(rhs, op)
        return LoxBool(_COMPARISON[kind](a, b))

    match kind:
        case TT.PLUS:
            return _add(op, lhs, rhs)
        case TT.EQUAL_EQUAL:
            return LoxBool(lox_equals(lhs, rhs))
        case TT.BANG_EQUAL:
            return LoxBool(not lox_equals(lhs, rhs))

    raise LoxInternalError(f"Invalid binary operator {op.lexeme!r}")

def _add(op: Tok, lhs: LoxValue, rhs: LoxValue) -> LoxValue:
    match (lhs, rhs):
        case (LoxNumber(value=a), LoxNumber(value=b)):
            return LoxNumber(a + b)
        case (LoxString(value=a), LoxString(value=b)):
            return LoxString(a + b)

    raise LoxTypeError("Invalid operand types for '+'", op.line)
