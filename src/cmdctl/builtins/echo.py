"""Echo command - print the arguments back."""
from __future__ import annotations

from cmdctl.core.handler import FunctionHandler


def cmd_echo(args: list[str]) -> str:
    """Print arguments separated by single spaces."""
    return " ".join(args)


echo_handler = FunctionHandler(command_name="echo", callable_fn=cmd_echo)
