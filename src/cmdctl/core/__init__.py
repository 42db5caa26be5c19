"""
Core module for the cmdctl package.

Provides the handler registry, the dispatch controller and related models.
"""

from cmdctl.core.controller import Controller, DispatchHandle
from cmdctl.core.datamodels import CommandResult, CommandStatus
from cmdctl.core.exceptions import (
    CommandError,
    CommandNotFoundError,
    InvalidHandlerError,
    MalformedRequestError,
)
from cmdctl.core.handler import FunctionHandler, Handler
from cmdctl.core.registry import HandlerRegistry
from cmdctl.core.sinks import CollectingSink, Sink, StreamSink

__all__ = [
    # Registry
    "HandlerRegistry",
    # Controller
    "Controller",
    "DispatchHandle",
    # Handlers
    "Handler",
    "FunctionHandler",
    # Models
    "CommandResult",
    "CommandStatus",
    # Sinks
    "Sink",
    "StreamSink",
    "CollectingSink",
    # Exceptions
    "CommandError",
    "CommandNotFoundError",
    "InvalidHandlerError",
    "MalformedRequestError",
]
