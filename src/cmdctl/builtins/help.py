"""Help command - show available commands."""
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from cmdctl.core.handler import describe

if TYPE_CHECKING:
    from cmdctl.core.registry import HandlerRegistry


class HelpCommand:
    """Show available commands."""

    def __init__(self, registry: "HandlerRegistry"):
        self._registry = registry

    def name(self) -> str:
        return "help"

    def execute(self, args: Sequence[str]) -> str:
        handlers = sorted(self._registry.all(), key=lambda h: h.name())
        if args:
            wanted = set(args)
            handlers = [h for h in handlers if h.name() in wanted]
            if not handlers:
                return f"No such command: {' '.join(args)}"

        lines = ["Commands:"]
        for handler in handlers:
            desc = describe(handler)
            lines.append(f"  {handler.name():<16} - {desc}" if desc else f"  {handler.name()}")
        return "\n".join(lines)

    def complete(self, prefix: str) -> list[str]:
        return sorted(n for n in self._registry.names() if n.startswith(prefix))
