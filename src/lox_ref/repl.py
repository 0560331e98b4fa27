"""Interactive REPL for Lox expressions, powered by prompt_toolkit."""

from __future__ import annotations

import re
import sys
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.shortcuts import clear

from .repl_highlight import LoxLexer
from .runner import repl_eval
from .types import LoxSyntaxError
from .utils import debug_py_trace_enabled, report_error, set_debug_py_trace

# Zero-width and invisible characters to strip from input.
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0\r]")

# Slash commands: name => (description, argument_hint).
_SLASH_CMDS = {
    "/clear": ("Clear the terminal screen", ""),
    "/py-traceback": ("Toggle Python traceback on errors", "[on|off]"),
    "/tree": ("Print the parsed tree before each value", "[on|off]"),
}

_ON = ("on", "1", "true", "yes")
_OFF = ("off", "0", "false", "no")


class ReplState:
    def __init__(self) -> None:
        self.show_tree = False


class _SlashCompleter(Completer):
    """Autocomplete slash commands on the prompt."""

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        for cmd, (desc, hint) in _SLASH_CMDS.items():
            if cmd.startswith(text):
                yield Completion(
                    cmd,
                    start_position=-len(text),
                    display_meta=f"{desc} {hint}".rstrip(),
                )


def _toggle(arg: str, current: bool, usage: str) -> bool | None:
    """Resolve an on/off argument; empty flips. None means bad usage."""
    word = arg.lower()
    if word in _ON:
        return True
    if word in _OFF:
        return False
    if word == "":
        return not current

    print(usage, file=sys.stderr)
    return None


def _handle_slash(line: str, state: ReplState) -> bool:
    """Handle slash commands. Returns True if the line was a command."""
    stripped = line.strip()
    if not stripped.startswith("/"):
        return False

    parts = stripped.split(None, 1)
    cmd = parts[0]
    arg = parts[1].strip() if len(parts) > 1 else ""

    if cmd == "/clear":
        clear()
        return True

    if cmd == "/py-traceback":
        enabled = _toggle(arg, debug_py_trace_enabled(), "Usage: /py-traceback [on|off]")
        if enabled is not None:
            set_debug_py_trace(enabled)
            print(f"Python traceback: {'on' if enabled else 'off'}")
        return True

    if cmd == "/tree":
        enabled = _toggle(arg, state.show_tree, "Usage: /tree [on|off]")
        if enabled is not None:
            state.show_tree = enabled
            print(f"Tree display: {'on' if enabled else 'off'}")
        return True

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return True


def _normalize(text: str) -> str:
    """Strip invisible characters from input."""
    return _INVISIBLE_RE.sub("", text)


def eval_line(text: str, state: ReplState) -> None:
    """Evaluate one submitted line, printing the value or the error."""
    text = _normalize(text)
    if not text.strip():
        return

    if _handle_slash(text, state):
        return

    try:
        repl_eval(text, show_tree=state.show_tree)
    except LoxSyntaxError as exc:
        report_error(exc)


def repl() -> None:
    """Interactive read-eval-print loop with prompt_toolkit."""
    state = ReplState()
    bindings = KeyBindings()

    @bindings.add("backspace")
    def _backspace(event):
        buf = event.app.current_buffer
        buf.delete_before_cursor(1)
        if buf.text.startswith("/"):
            buf.start_completion()

    session: PromptSession[str] = PromptSession(
        history=InMemoryHistory(),
        lexer=LoxLexer(),
        completer=_SlashCompleter(),
        complete_while_typing=True,
        key_bindings=bindings,
    )

    print("lox repl, Ctrl-D to exit, / for commands")

    while True:
        try:
            text = session.prompt("> ")
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            continue

        eval_line(text, state)
