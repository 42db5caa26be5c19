"""
Built-in commands.

Registered explicitly by the CLI at startup:

    from cmdctl.builtins import register_builtins
    register_builtins(registry)
"""

from __future__ import annotations

from cmdctl.builtins.echo import echo_handler
from cmdctl.builtins.greeting import GreetingCommand
from cmdctl.builtins.help import HelpCommand
from cmdctl.core.registry import HandlerRegistry


def register_builtins(registry: HandlerRegistry) -> HandlerRegistry:
    """Register every built-in command on the given registry."""
    registry.register(GreetingCommand())
    registry.register(echo_handler)
    registry.register(HelpCommand(registry))
    return registry


__all__ = ["GreetingCommand", "HelpCommand", "echo_handler", "register_builtins"]
