"""Console output for CLI commands and service diagnostics."""

from .console import ConsoleProtocol, MockConsole, RichConsole, Style

__all__ = ["ConsoleProtocol", "MockConsole", "RichConsole", "Style"]
