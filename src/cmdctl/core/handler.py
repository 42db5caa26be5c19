"""
Handler contract and the function-backed handler adapter.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel, Field


@runtime_checkable
class Handler(Protocol):
    """Anything that can be registered as a command.

    The name is the registry key and must be stable for as long as the
    handler stays registered.
    """

    def name(self) -> str: ...

    def execute(self, args: Sequence[str]) -> str: ...

    def complete(self, prefix: str) -> list[str]: ...


class FunctionHandler(BaseModel):
    """Handler backed by a plain function taking the argument list."""
    command_name: str
    callable_fn: Callable[[list[str]], Any] = Field(exclude=True)
    completions: list[str] = Field(default_factory=list)
    description: str | None = None

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    def name(self) -> str:
        return self.command_name

    def execute(self, args: Sequence[str]) -> str:
        output = self.callable_fn(list(args))
        if output is None:
            return ""
        if isinstance(output, str):
            return output
        return str(output)

    def complete(self, prefix: str) -> list[str]:
        return [c for c in self.completions if c.startswith(prefix)]

    def get_description(self) -> str:
        """Get description from override or docstring."""
        if self.description:
            return self.description
        doc = inspect.getdoc(self.callable_fn) or ""
        return doc.split("\n\n", 1)[0].strip()


def describe(handler: Handler) -> str:
    """Best-effort one-line description for any handler."""
    getter = getattr(handler, "get_description", None)
    if callable(getter):
        return getter()
    doc = inspect.getdoc(type(handler)) or ""
    return doc.split("\n\n", 1)[0].strip()
