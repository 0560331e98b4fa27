from __future__ import annotations

import logging
import math
import os
import sys
import traceback
from decimal import Decimal
from typing import TextIO

from .types import LoxBool, LoxNil, LoxNumber, LoxString, LoxValue

_TRUTHY_ENV = ("1", "true", "yes", "on")

_ESCAPES = {
    "\\": "\\\\",
    "\"": "\\\"",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}

# Remaining C0 controls and DEL print as `\u{1b}`
for _code in [*range(0x20), 0x7f]:
    _ESCAPES.setdefault(chr(_code), f"\\u{{{_code:x}}}")

_STRING_ESCAPES = str.maketrans(_ESCAPES)

_LOGGING_CONFIGURED = False


def lox_equals(lhs: LoxValue, rhs: LoxValue) -> bool:
    match (lhs, rhs):
        case (LoxNil(), LoxNil()):
            return True
        case (LoxNumber(value=a), LoxNumber(value=b)):
            return a == b
        case (LoxString(value=a), LoxString(value=b)):
            return a == b
        case (LoxBool(value=a), LoxBool(value=b)):
            return a == b
        case _:
            return False


def format_number(value: float) -> str:
    """Shortest round-trip digits, never in exponent form, no trailing `.0`."""
    if math.isnan(value):
        return "NaN"

    if math.isinf(value):
        return "inf" if value > 0 else "-inf"

    text = format(Decimal(repr(value)), "f")
    if text.endswith(".0"):
        text = text[:-2]

    return text


def quote_string(text: str) -> str:
    return '"' + text.translate(_STRING_ESCAPES) + '"'


def format_value(value: LoxValue) -> str:
    return repr(value)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY_ENV


def debug_py_trace_enabled() -> bool:
    return _env_flag("LOX_DEBUG_PY_TRACE")


def set_debug_py_trace(enabled: bool) -> None:
    if enabled:
        os.environ["LOX_DEBUG_PY_TRACE"] = "1"
    else:
        os.environ.pop("LOX_DEBUG_PY_TRACE", None)


def configure_logging(level: str | None = None) -> None:
    """Install the stderr handler once; LOX_LOG_LEVEL picks the level."""
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        return

    name = (level or os.environ.get("LOX_LOG_LEVEL") or "WARNING").upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        resolved = logging.WARNING

    logging.basicConfig(
        level=resolved,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    _LOGGING_CONFIGURED = True


def report_error(exc: BaseException, stream: TextIO | None = None) -> None:
    """Print the diagnostic, plus the Python traceback when LOX_DEBUG_PY_TRACE is set."""
    stream = stream if stream is not None else sys.stderr
    print(exc, file=stream)
    if debug_py_trace_enabled():
        print("\nPython traceback:", file=stream)
        traceback.print_exception(type(exc), exc, exc.__traceback__, file=stream)
