"""
Controller: resolves commands, schedules their execution and aggregates
completions across registered handlers.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Sequence

from cmdctl.core.datamodels import CommandResult
from cmdctl.core.exceptions import MalformedRequestError
from cmdctl.core.handler import Handler
from cmdctl.core.registry import HandlerRegistry
from cmdctl.core.sinks import Sink
from cmdctl.log import log_exception

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


class DispatchHandle:
    """Handle for one dispatched command.

    Cancelling before the handler starts keeps it from running; cancelling
    while it runs suppresses its result. Either way no result is delivered.
    """

    def __init__(self, dispatch_id: str, command: str | None):
        self.id = dispatch_id
        self.command = command
        self._future: Future[CommandResult] = Future()
        self._task: Future | None = None
        self._claimed = False
        self._lock = threading.Lock()

    def cancel(self) -> bool:
        with self._lock:
            if self._claimed or self._future.done():
                return False
            if self._task is not None:
                self._task.cancel()
            return self._future.cancel()

    def cancelled(self) -> bool:
        return self._future.cancelled()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: float | None = None) -> CommandResult:
        """Wait for the result. Raises CancelledError if cancelled."""
        return self._future.result(timeout=timeout)

    def _resolve(self, result: CommandResult, sink: Sink | None, deliver) -> bool:
        # Once claimed the handle can no longer be cancelled, so the sink runs
        # without holding the handle lock.
        with self._lock:
            if self._future.cancelled():
                return False
            self._claimed = True
        deliver(result, sink)
        self._future.set_result(result)
        return True

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled() else "done" if self.done() else "pending"
        return f"<DispatchHandle {self.id} {state}>"


class Controller:
    """Single entry point for dispatch and completion."""

    def __init__(
        self,
        registry: HandlerRegistry,
        sink: Sink | None = None,
        executor: Executor | None = None,
        max_workers: int | None = None,
    ):
        self.registry = registry
        self.sink = sink
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=DEFAULT_MAX_WORKERS if max_workers is None else max_workers,
            thread_name_prefix="cmdctl-worker",
        )
        # Reentrant so a sink may dispatch from inside delivery
        self._deliver_lock = threading.RLock()

    def dispatch(self, tokens: Sequence[str] | None, sink: Sink | None = None) -> DispatchHandle:
        """Resolve tokens[0] and schedule the handler with tokens[1:].

        Returns immediately; the outcome goes to `sink` (or the controller's
        default sink) and to the returned handle. Never raises.
        """
        if sink is None:
            sink = self.sink

        try:
            name, args = _split(tokens)
        except MalformedRequestError as e:
            logger.info(f"Rejected dispatch: {e}")
            return self._report(CommandResult.invalid(str(e)), sink)

        handler = self.registry.lookup(name)
        if handler is None:
            logger.info(f"Unknown command: {name}")
            return self._report(CommandResult.unknown(name, args), sink)

        handle = DispatchHandle(CommandResult.new_id(name), name)
        try:
            with handle._lock:
                handle._task = self._executor.submit(self._execute, handle, handler, args, sink)
        except RuntimeError as e:
            logger.warning(f"Could not schedule {name}: {e}")
            result = CommandResult.failure(handle.id, name, args, "controller is shut down")
            handle._resolve(result, sink, self._deliver)
            return handle

        logger.debug(f"Scheduled {name} ({handle.id})")
        return handle

    def run(self, tokens: Sequence[str] | None, timeout: float | None = None) -> CommandResult:
        """Dispatch and wait for the result."""
        return self.dispatch(tokens).result(timeout=timeout)

    def autocomplete(self, prefix: str | None) -> list[str]:
        """Deduplicated union of every handler's completions for prefix.

        Keeps first-occurrence order. Handlers whose complete() raises are
        skipped.
        """
        prefix = prefix or ""
        suggestions: dict[str, None] = {}
        for handler in self.registry.all():
            for item in self._complete_one(handler, prefix):
                suggestions.setdefault(item, None)
        return list(suggestions)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work. Leaves injected executors running."""
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> Controller:
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown(wait=True)

    def _execute(self, handle: DispatchHandle, handler: Handler, args: list[str], sink: Sink | None) -> None:
        name = handle.command
        if handle.cancelled():
            return

        try:
            output = handler.execute(list(args))
            if not isinstance(output, str):
                output = "" if output is None else str(output)
            result = CommandResult.success(handle.id, name, args, output)
        except Exception as e:
            error = log_exception(e, context=f"Command '{name}' failed ({handle.id})", logger=logger)
            result = CommandResult.failure(handle.id, name, args, error)

        if not handle._resolve(result, sink, self._deliver):
            logger.debug(f"Dropped result of cancelled {name} ({handle.id})")

    def _report(self, result: CommandResult, sink: Sink | None) -> DispatchHandle:
        handle = DispatchHandle(result.id, result.command)
        handle._resolve(result, sink, self._deliver)
        return handle

    def _deliver(self, result: CommandResult, sink: Sink | None) -> None:
        if sink is None:
            return
        with self._deliver_lock:
            try:
                sink(result)
            except Exception:
                logger.exception(f"Sink failed for {result.command} ({result.id})")

    def _complete_one(self, handler: Handler, prefix: str) -> list[str]:
        try:
            return [s for s in handler.complete(prefix) or [] if isinstance(s, str)]
        except Exception as e:
            logger.warning(f"Completion failed for {_safe_name(handler)}: {e}")
            return []


def _split(tokens: Sequence[str] | None) -> tuple[str, list[str]]:
    if isinstance(tokens, str):
        raise MalformedRequestError("expected a token sequence, got a string")
    if not tokens:
        raise MalformedRequestError("empty command")
    tokens = list(tokens)
    if not isinstance(tokens[0], str) or not tokens[0]:
        raise MalformedRequestError("missing command name")
    return tokens[0], tokens[1:]


def _safe_name(handler: Handler) -> str:
    try:
        return handler.name()
    except Exception:
        return type(handler).__name__
