"""Demo command - prints a greeting."""
from __future__ import annotations

from typing import Sequence


class GreetingCommand:
    """Say hello."""

    def name(self) -> str:
        return "my-command"

    def execute(self, args: Sequence[str]) -> str:
        return "Hello, World!"

    def complete(self, prefix: str) -> list[str]:
        return []
