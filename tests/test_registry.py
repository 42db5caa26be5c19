#!/usr/bin/env python3
"""
Tests for the handler registry, handler contract and exceptions.
"""

import threading

import pytest

from cmdctl.core import (
    CommandError,
    CommandNotFoundError,
    FunctionHandler,
    Handler,
    HandlerRegistry,
    InvalidHandlerError,
    MalformedRequestError,
)


class StaticHandler:
    """Handler with a fixed reply."""

    def __init__(self, name, reply="", completions=None):
        self._name = name
        self.reply = reply
        self.completions = completions or []

    def name(self):
        return self._name

    def execute(self, args):
        return self.reply

    def complete(self, prefix):
        return [c for c in self.completions if c.startswith(prefix)]


# ============================================================================
# Exception Tests
# ============================================================================

class TestExceptions:
    """Tests for custom exceptions."""

    def test_command_error_is_base(self):
        """Test CommandError is the base exception."""
        assert issubclass(InvalidHandlerError, CommandError)
        assert issubclass(CommandNotFoundError, CommandError)
        assert issubclass(MalformedRequestError, CommandError)

    def test_command_error_message(self):
        """Test CommandError can carry a message."""
        err = CommandError("Something went wrong")
        assert str(err) == "Something went wrong"


# ============================================================================
# FunctionHandler Tests
# ============================================================================

class TestFunctionHandler:
    """Tests for FunctionHandler."""

    def test_satisfies_protocol(self):
        """Test FunctionHandler is a Handler."""
        handler = FunctionHandler(command_name="x", callable_fn=lambda args: "")
        assert isinstance(handler, Handler)
        assert handler.name() == "x"

    def test_execute_passes_args(self):
        """Test execute receives the argument list."""
        handler = FunctionHandler(command_name="join", callable_fn=lambda args: "-".join(args))
        assert handler.execute(("a", "b")) == "a-b"

    def test_execute_coerces_output(self):
        """Test None becomes empty string and other values are stringified."""
        none_handler = FunctionHandler(command_name="n", callable_fn=lambda args: None)
        int_handler = FunctionHandler(command_name="i", callable_fn=lambda args: 42)
        assert none_handler.execute([]) == ""
        assert int_handler.execute([]) == "42"

    def test_complete_filters_by_prefix(self):
        """Test complete keeps declaration order and filters by prefix."""
        handler = FunctionHandler(
            command_name="x",
            callable_fn=lambda args: "",
            completions=["start", "stop", "status", "restart"],
        )
        assert handler.complete("st") == ["start", "stop", "status"]
        assert handler.complete("") == ["start", "stop", "status", "restart"]
        assert handler.complete("zz") == []

    def test_description_from_docstring(self):
        """Test description falls back to the first docstring paragraph."""
        def fn(args):
            """Do the thing.

            More details here.
            """
        handler = FunctionHandler(command_name="x", callable_fn=fn)
        assert handler.get_description() == "Do the thing."

    def test_description_override(self):
        """Test explicit description wins over docstring."""
        def fn(args):
            """Docstring."""
        handler = FunctionHandler(command_name="x", callable_fn=fn, description="Custom")
        assert handler.get_description() == "Custom"


# ============================================================================
# HandlerRegistry Tests
# ============================================================================

class TestHandlerRegistry:
    """Tests for HandlerRegistry."""

    def test_register_basic(self):
        """Test basic registration."""
        registry = HandlerRegistry()
        replaced = registry.register(StaticHandler("greet", "hi"))

        assert replaced is False
        assert "greet" in registry
        assert len(registry) == 1

    def test_register_duplicate_replaces(self):
        """Test a second registration under the same name wins."""
        registry = HandlerRegistry()
        first = StaticHandler("greet", "first")
        second = StaticHandler("greet", "second")

        assert registry.register(first) is False
        assert registry.register(second) is True

        assert len(registry) == 1
        assert registry.lookup("greet") is second
        assert registry.lookup("greet").execute([]) == "second"

    def test_lookup_exact_match(self):
        """Test lookup is exact and case-sensitive."""
        registry = HandlerRegistry()
        handler = StaticHandler("status")
        registry.register(handler)

        assert registry.lookup("status") is handler
        assert registry.lookup("stat") is None
        assert registry.lookup("Status") is None
        assert registry.lookup("status ") is None

    def test_get_not_found(self):
        """Test get() raises CommandNotFoundError."""
        registry = HandlerRegistry()
        with pytest.raises(CommandNotFoundError, match="nonexistent"):
            registry.get("nonexistent")

    def test_get_found(self):
        """Test get() returns the handler."""
        registry = HandlerRegistry()
        handler = StaticHandler("x")
        registry.register(handler)
        assert registry.get("x") is handler

    def test_all_returns_every_handler(self):
        """Test all() returns each handler once."""
        registry = HandlerRegistry()
        handlers = [StaticHandler(n) for n in ("a", "b", "c")]
        for h in handlers:
            registry.register(h)

        snapshot = registry.all()
        assert len(snapshot) == 3
        assert {h.name() for h in snapshot} == {"a", "b", "c"}

    def test_all_is_snapshot(self):
        """Test later registrations don't change an earlier snapshot."""
        registry = HandlerRegistry()
        registry.register(StaticHandler("a"))
        snapshot = registry.all()

        registry.register(StaticHandler("b"))

        assert [h.name() for h in snapshot] == ["a"]
        assert len(registry.all()) == 2

    def test_iter_and_names(self):
        """Test iteration and names()."""
        registry = HandlerRegistry()
        registry.register(StaticHandler("a"))
        registry.register(StaticHandler("b"))

        assert sorted(h.name() for h in registry) == ["a", "b"]
        assert sorted(registry.names()) == ["a", "b"]

    def test_unregister(self):
        """Test unregister removes and reports presence."""
        registry = HandlerRegistry()
        registry.register(StaticHandler("a"))

        assert registry.unregister("a") is True
        assert registry.unregister("a") is False
        assert registry.lookup("a") is None
        assert len(registry) == 0

    def test_command_decorator(self):
        """Test @registry.command wraps and registers a function."""
        registry = HandlerRegistry()

        @registry.command("shout", completions=["--loud"], description="Shout it")
        def shout(args):
            return " ".join(args).upper()

        assert shout(["a"]) == "A"
        handler = registry.get("shout")
        assert handler.execute(["hey", "you"]) == "HEY YOU"
        assert handler.complete("--") == ["--loud"]
        assert handler.get_description() == "Shout it"

    @pytest.mark.parametrize("bad_name", ["", "   ", None, 42])
    def test_register_rejects_bad_names(self, bad_name):
        """Test empty, blank and non-string names are rejected."""
        registry = HandlerRegistry()
        with pytest.raises(InvalidHandlerError):
            registry.register(StaticHandler(bad_name))
        assert len(registry) == 0

    def test_register_rejects_non_handler(self):
        """Test objects without the handler methods are rejected."""
        registry = HandlerRegistry()
        with pytest.raises(InvalidHandlerError, match="must implement"):
            registry.register(object())

    def test_register_rejects_failing_name(self):
        """Test a handler whose name() raises is rejected."""
        class Broken(StaticHandler):
            def name(self):
                raise RuntimeError("no name")

        registry = HandlerRegistry()
        with pytest.raises(InvalidHandlerError, match="no name"):
            registry.register(Broken("x"))

    def test_concurrent_registration(self):
        """Test registrations from many threads are all kept."""
        registry = HandlerRegistry()
        barrier = threading.Barrier(8)

        def worker(idx):
            barrier.wait()
            for n in range(50):
                registry.register(StaticHandler(f"cmd-{idx}-{n}"))

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(registry) == 400
        assert len(registry.all()) == 400
