"""
CLI module for cmdctl.

Provides the cmdctl entry point and the interactive REPL.
"""

from cmdctl.cli.main import main
from cmdctl.cli.repl import ControllerCompleter, repl, simple_repl

__all__ = ["main", "repl", "simple_repl", "ControllerCompleter"]
