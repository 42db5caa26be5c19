"""
Handler registry mapping command names to handlers.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterator

from cmdctl.core.exceptions import CommandNotFoundError, InvalidHandlerError
from cmdctl.core.handler import FunctionHandler, Handler

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Registry for command handlers.

    Writers publish a fresh dict under a lock; readers use whichever dict
    is current, so lookups never see a half-applied mutation.
    """

    def __init__(self):
        self._handlers: dict[str, Handler] = {}
        self._write_lock = threading.Lock()

    def register(self, handler: Handler) -> bool:
        """Register a handler under its own name.

        A later registration under the same name replaces the earlier one.

        Args:
            handler: Object implementing name(), execute() and complete().

        Returns:
            True if an existing entry was replaced.

        Raises:
            InvalidHandlerError: If the handler breaks the contract or has
                an empty name.
        """
        name = _validated_name(handler)
        with self._write_lock:
            handlers = dict(self._handlers)
            replaced = name in handlers
            handlers[name] = handler
            self._handlers = handlers

        if replaced:
            logger.debug(f"Replaced handler: {name}")
        else:
            logger.debug(f"Registered handler: {name}")
        return replaced

    def command(
        self,
        name: str,
        completions: list[str] | None = None,
        description: str | None = None,
    ) -> Callable:
        """Decorator to register a function as a command.

        Usage:
            @registry.command("greet", completions=["--loud"])
            def greet(args: list[str]) -> str:
                return "hello " + " ".join(args)
        """
        def decorator(func: Callable) -> Callable:
            self.register(FunctionHandler(
                command_name=name,
                callable_fn=func,
                completions=completions or [],
                description=description,
            ))
            return func
        return decorator

    def unregister(self, name: str) -> bool:
        """Remove a handler. Returns True if one was registered."""
        with self._write_lock:
            if name not in self._handlers:
                return False
            handlers = dict(self._handlers)
            del handlers[name]
            self._handlers = handlers
        logger.debug(f"Unregistered handler: {name}")
        return True

    def lookup(self, name: str) -> Handler | None:
        """Exact-match lookup. Returns None when not registered."""
        return self._handlers.get(name)

    def get(self, name: str) -> Handler:
        """Resolve a handler by name or raise CommandNotFoundError."""
        handler = self.lookup(name)
        if handler is None:
            raise CommandNotFoundError(f"Unknown command: {name}")
        return handler

    def all(self) -> list[Handler]:
        """Snapshot of every registered handler."""
        return list(self._handlers.values())

    def names(self) -> list[str]:
        return list(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __iter__(self) -> Iterator[Handler]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._handlers)


def _validated_name(handler: object) -> str:
    if not isinstance(handler, Handler):
        raise InvalidHandlerError(
            f"{type(handler).__name__} must implement name(), execute() and complete()"
        )
    try:
        name = handler.name()
    except Exception as e:
        raise InvalidHandlerError(f"Handler name() failed: {e}") from e
    if not isinstance(name, str) or not name.strip():
        raise InvalidHandlerError(f"Handler name must be a non-empty string, got {name!r}")
    return name
