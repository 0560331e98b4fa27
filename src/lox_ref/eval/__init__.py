"""Evaluator helper modules for the Lox expression core."""

__all__ = [
    "expr",
    "helpers",
]
