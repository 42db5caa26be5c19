"""
cmdctl - command-line tool controller

Dispatches command names to registered handlers, runs them on a worker
pool without blocking the caller, and aggregates tab completions across
every handler.

Example usage:
    from cmdctl import Controller, HandlerRegistry, StreamSink

    registry = HandlerRegistry()

    @registry.command("greet", completions=["--loud"])
    def greet(args: list[str]) -> str:
        return "hello " + " ".join(args)

    with Controller(registry, sink=StreamSink()) as controller:
        controller.dispatch(["greet", "world"])
        controller.autocomplete("--")  # ["--loud"]
"""

__version__ = "0.1.0"

from cmdctl.core import (
    CollectingSink,
    CommandError,
    CommandNotFoundError,
    CommandResult,
    CommandStatus,
    Controller,
    DispatchHandle,
    FunctionHandler,
    Handler,
    HandlerRegistry,
    InvalidHandlerError,
    MalformedRequestError,
    Sink,
    StreamSink,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "HandlerRegistry",
    "Controller",
    "DispatchHandle",
    "Handler",
    "FunctionHandler",
    "CommandResult",
    "CommandStatus",
    "Sink",
    "StreamSink",
    "CollectingSink",
    "CommandError",
    "CommandNotFoundError",
    "InvalidHandlerError",
    "MalformedRequestError",
]
