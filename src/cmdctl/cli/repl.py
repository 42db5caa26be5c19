"""
REPL (Read-Eval-Print Loop) for the command controller.
"""

from __future__ import annotations

import shlex
import sys
from typing import TYPE_CHECKING, Callable, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout

from cmdctl.core.sinks import StreamSink

if TYPE_CHECKING:
    from cmdctl.core.controller import Controller

# ANSI escape codes for grey text
GREY = "\033[90m"
RESET = "\033[0m"

EXIT_WORDS = ("quit", "exit")


def feedback(msg: str) -> None:
    """Print feedback message in grey to stderr."""
    print(f"{GREY}{msg}{RESET}", file=sys.stderr)


class ControllerCompleter(Completer):
    """Completes the word before the cursor from every registered handler."""

    def __init__(self, controller: "Controller"):
        self.controller = controller

    def get_completions(self, document, complete_event):
        word = document.get_word_before_cursor(WORD=True)
        for suggestion in self.controller.autocomplete(word):
            yield Completion(suggestion, start_position=-len(word))


def handle_line(controller: "Controller", line: str, sink) -> bool:
    """Dispatch one input line.

    Returns:
        False when the loop should stop, True otherwise.
    """
    line = line.strip()
    if not line:
        return True

    try:
        tokens = shlex.split(line)
    except ValueError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return True

    if tokens and tokens[0] in EXIT_WORDS and tokens[0] not in controller.registry:
        return False

    controller.dispatch(tokens, sink)
    return True


def simple_repl(
    controller: "Controller",
    prompt: str = "> ",
    input_fn: Callable[[str], str] = input,
) -> None:
    """Line REPL on plain input(), without completion."""
    sink = StreamSink()
    while True:
        try:
            line = input_fn(prompt)
        except KeyboardInterrupt:
            print()
            continue
        except EOFError:
            print()
            break
        if not handle_line(controller, line, sink):
            break

    feedback("Waiting for running commands...")
    controller.shutdown(wait=True)


def repl(controller: "Controller", prompt: str = "> ", session: Optional[PromptSession] = None) -> None:
    """Run the interactive REPL.

    Features:
        - Tab completion aggregated from every registered handler
        - Results printed as commands finish, above the prompt
        - Ctrl+C to cancel input, Ctrl+D to exit

    Args:
        controller: The Controller to dispatch to.
        prompt: Prompt string.
        session: Optional preconfigured PromptSession.
    """
    session = session or PromptSession(
        completer=ControllerCompleter(controller),
        history=InMemoryHistory(),
        complete_while_typing=False,
    )
    sink = StreamSink()

    feedback("Type 'help' for commands, 'quit' to exit.")
    with patch_stdout():
        while True:
            try:
                line = session.prompt(prompt)
            except KeyboardInterrupt:
                continue
            except EOFError:
                break
            if not handle_line(controller, line, sink):
                break

        feedback("Waiting for running commands...")
        controller.shutdown(wait=True)
