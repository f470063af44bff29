"""Human-facing output for ghrel.

Command results (a version, a release URL, a commit SHA) are written to
stdout by the CLI with ``typer.echo``. Everything else goes through a
``ConsoleProtocol``: services take an optional console and report what they
did at ``debug`` level, the CLI reports outcomes with the other levels.
Failures still travel as ``Err`` values; the console only describes them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    DEFAULT = "default"
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    DIM = "dim"

    def __str__(self) -> str:
        return self.value


# Plain-text prefix per level; RichConsole colours it.
_PREFIXES: dict[Style, str] = {
    Style.SUCCESS: "OK",
    Style.ERROR: "error:",
    Style.WARNING: "warning:",
    Style.INFO: "info:",
}

_RICH_STYLES: dict[Style, str] = {
    Style.SUCCESS: "green",
    Style.ERROR: "red bold",
    Style.WARNING: "yellow",
    Style.INFO: "cyan",
    Style.DIM: "dim",
}


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def debug(self, message: str) -> None:
        """Diagnostic line (requests made, bump chosen); may be hidden."""
        ...


class RichConsole:
    """Rich console on stderr; debug lines are dropped unless ``verbose``."""

    def __init__(self, *, verbose: bool = False) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self.verbose = verbose
        self._console = Console(stderr=True, highlight=False)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(message, style=_RICH_STYLES.get(style), markup=False)

    def _labelled(self, style: Style, message: str) -> None:
        colour = _RICH_STYLES[style]
        prefix = _PREFIXES[style]
        self._console.print(f"[{colour}]{prefix}[/{colour}] ", end="")
        self._console.print(message, markup=False)

    def success(self, message: str) -> None:
        self._labelled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._labelled(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._labelled(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._labelled(Style.INFO, message)

    def debug(self, message: str) -> None:
        if self.verbose:
            self.print(message, Style.DIM)


@dataclass(frozen=True, slots=True)
class OutputRecord:
    message: str
    style: Style


@dataclass
class MockConsole:
    """Records every line, debug included, for assertions in tests."""

    outputs: list[OutputRecord] = field(default_factory=lambda: list[OutputRecord]())

    def _record(self, style: Style, message: str) -> None:
        prefix = _PREFIXES.get(style)
        text = f"{prefix} {message}" if prefix else message
        self.outputs.append(OutputRecord(text, style))

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self._record(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._record(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._record(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._record(Style.INFO, message)

    def debug(self, message: str) -> None:
        self._record(Style.DIM, message)

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style is Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
