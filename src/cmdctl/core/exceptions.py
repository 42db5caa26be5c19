"""
Exception classes for the command registry and controller.
"""


class CommandError(Exception):
    """Base exception for command-related errors."""


class InvalidHandlerError(CommandError):
    """Handler does not satisfy the handler contract."""


class CommandNotFoundError(CommandError):
    """Command not found in registry."""


class MalformedRequestError(CommandError):
    """Dispatch request has no command name."""
