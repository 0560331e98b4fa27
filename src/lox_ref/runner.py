from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

from .evaluator import evaluate, interpret
from .lexer_rd import tokenize
from .parser_rd import parse
from .tree import Expr, depth, node_label, pretty
from .types import LoxSyntaxError, LoxValue
from .utils import configure_logging, report_error

logger = logging.getLogger(__name__)

# sysexits.h
EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70

USAGE = "Usage: lox-ref [--lark] [--tree] [script | source | -]"


def parse_text(src: str, use_lark: bool = False) -> Expr:
    tokens = tokenize(src)
    logger.debug("scanned %d tokens", len(tokens))

    if use_lark:
        from .parse_lark import parse_lark_tokens

        tree = parse_lark_tokens(tokens)
    else:
        tree = parse(tokens)

    logger.debug("parsed %s node, depth %d", node_label(tree), depth(tree))
    return tree


def run(src: str, *, use_lark: bool = False) -> LoxValue:
    """Scan, parse and evaluate one expression. Lox errors propagate."""
    return evaluate(parse_text(src, use_lark=use_lark))


def run_file(path: str, *, use_lark: bool = False) -> LoxValue:
    source = Path(path).read_text(encoding="utf-8")
    value = run(source, use_lark=use_lark)
    print(value)
    return value


def repl_eval(text: str, show_tree: bool = False) -> Optional[LoxValue]:
    """Parse one REPL input and hand it to `interpret`.

    Syntax errors propagate. A type error is reported by `interpret` and
    yields None.
    """
    tree = parse_text(text)
    if show_tree:
        print(pretty(tree))
    return interpret(tree)


class _NoInput(Exception):
    pass


def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - None or "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal source.
    """

    if arg is None or arg == "-":
        data = sys.stdin.read()
        if not data:
            raise _NoInput("No input provided on stdin")
        return data

    candidate = Path(arg)
    if candidate.exists():
        try:
            return candidate.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise _NoInput(f"Could not read {arg}: {exc}") from exc

    return arg


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging()

    args = sys.argv[1:] if argv is None else argv
    use_lark = False
    show_tree = False
    arg = None

    for token in args:
        if token == "--lark":
            use_lark = True
            continue

        if token == "--tree":
            show_tree = True
            continue

        if token in ("-h", "--help"):
            print(USAGE)
            return EX_OK

        if token.startswith("--"):
            print(f"Unknown option: {token}", file=sys.stderr)
            print(USAGE, file=sys.stderr)
            return EX_USAGE

        if arg is None:
            arg = token
        else:
            print(USAGE, file=sys.stderr)
            return EX_USAGE

    if arg is None and sys.stdin.isatty():
        from .repl import repl

        repl()
        return EX_OK

    try:
        source = _load_source(arg)
    except _NoInput as exc:
        print(exc, file=sys.stderr)
        return EX_NOINPUT

    try:
        tree = parse_text(source, use_lark=use_lark)
    except LoxSyntaxError as exc:
        report_error(exc)
        return EX_DATAERR

    if show_tree:
        print(pretty(tree))
        return EX_OK

    # evaluate never yields None, so None means a reported type error
    if interpret(tree) is None:
        return EX_SOFTWARE

    return EX_OK


if __name__ == "__main__":
    sys.exit(main())
