from __future__ import annotations

from dataclasses import dataclass
from typing_extensions import TypeAlias

# ---------- Value Model ----------

@dataclass(frozen=True)
class LoxNil:
    def __repr__(self) -> str:
        return "nil"

@dataclass(frozen=True)
class LoxNumber:
    value: float
    def __repr__(self) -> str:
        from .utils import format_number
        return format_number(self.value)

@dataclass(frozen=True)
class LoxString:
    value: str
    def __repr__(self) -> str:
        from .utils import quote_string
        return quote_string(self.value)

@dataclass(frozen=True)
class LoxBool:
    value: bool
    def __repr__(self) -> str:
        return "true" if self.value else "false"

LoxValue: TypeAlias = LoxNil | LoxNumber | LoxString | LoxBool

# ---------- Exceptions ----------

class LoxError(Exception):
    """User-facing failure tied to a source line."""

    label = "Error"

    def __init__(self, message: str, line: int = 0):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        return f"[line {self.line}] {self.label}: {self.message}"

class LoxSyntaxError(LoxError):
    """Raised by scanning or parsing."""

class LoxTypeError(LoxError):
    """Raised by evaluation when operand types do not fit the operator."""

    label = "TypeError"

class LoxInternalError(Exception):
    """Invariant violation between pipeline stages; never a user error."""
