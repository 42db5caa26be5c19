"""
Data models for dispatch outcomes.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence
from uuid import uuid4

from pydantic import BaseModel, Field


class CommandStatus(str, Enum):
    """Outcome of a single dispatch."""
    OK = "ok"
    FAILED = "failed"
    UNKNOWN = "unknown"
    INVALID = "invalid"


class CommandResult(BaseModel):
    """Result delivered to a sink for one dispatch."""
    id: str
    command: str | None = None
    args: list[str] = Field(default_factory=list)
    status: CommandStatus
    output: str = ""
    error: str | None = None

    @staticmethod
    def new_id(command: str | None) -> str:
        return f"{command or 'request'}_{uuid4().hex}"

    @classmethod
    def success(cls, dispatch_id: str, command: str, args: Sequence[str], output: str) -> CommandResult:
        return cls(id=dispatch_id, command=command, args=list(args),
                   status=CommandStatus.OK, output=output)

    @classmethod
    def failure(cls, dispatch_id: str, command: str, args: Sequence[str], error: str) -> CommandResult:
        return cls(id=dispatch_id, command=command, args=list(args),
                   status=CommandStatus.FAILED, error=error)

    @classmethod
    def unknown(cls, command: str, args: Sequence[str]) -> CommandResult:
        return cls(id=cls.new_id(command), command=command, args=list(args),
                   status=CommandStatus.UNKNOWN, error=f"Unknown command: {command}")

    @classmethod
    def invalid(cls, error: str) -> CommandResult:
        return cls(id=cls.new_id(None), status=CommandStatus.INVALID, error=error)

    @property
    def ok(self) -> bool:
        return self.status is CommandStatus.OK

    def render(self) -> str:
        """Format the result as the line a driver prints."""
        if self.status is CommandStatus.OK:
            return self.output
        if self.status is CommandStatus.UNKNOWN:
            return f"Unknown command: {self.command}"
        if self.status is CommandStatus.INVALID:
            return f"Invalid input: {self.error}"
        return f"{self.command}: {self.error}"
