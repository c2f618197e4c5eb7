"""Console output abstraction.

Resolution steps report through ``ConsoleProtocol`` so that the same code
can print styled text locally (Rich), emit GitHub Actions workflow commands
on a runner, or record messages in tests.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol, TextIO

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "GitHubConsole",
    "MockConsole",
    "escape_command_data",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DEBUG = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Diagnostics sink for informational, warning and error messages."""

    def error(self, message: str) -> None:
        """Report a fatal failure. The caller is responsible for exiting."""
        ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def debug(self, message: str) -> None:
        """Print a message only when debug output is enabled."""
        ...

    def start_group(self, title: str) -> None:
        """Open a collapsible section (plain header outside of Actions)."""
        ...

    def end_group(self) -> None: ...

    @property
    def is_debug(self) -> bool: ...


class RichConsole:
    """Console implementation using Rich, for local terminals.

    Diagnostics go to stderr; stdout is left for the emitted outputs.
    """

    def __init__(self, *, debug: bool = False) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console(stderr=True)
        self._debug = debug

    @property
    def is_debug(self) -> bool:
        return self._debug

    def error(self, message: str) -> None:
        self._console.print(f"[red bold]error:[/red bold] {_escape_markup(message)}")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]warning:[/yellow] {_escape_markup(message)}")

    def info(self, message: str) -> None:
        self._console.print(f"[cyan]info:[/cyan] {_escape_markup(message)}")

    def debug(self, message: str) -> None:
        if self._debug:
            self._console.print(f"[dim]debug: {_escape_markup(message)}[/dim]")

    def start_group(self, title: str) -> None:
        self._console.print(f"\n[blue bold]{_escape_markup(title)}[/blue bold]")

    def end_group(self) -> None:
        self._console.print()


def _escape_markup(message: str) -> str:
    from rich.markup import escape

    return escape(message)


def escape_command_data(message: str) -> str:
    """Escape a message for use as workflow command data."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GitHubConsole:
    """Console implementation emitting GitHub Actions workflow commands.

    Warnings and errors become annotations on the run; debug lines are only
    shown by the runner when step debug logging is enabled, but are also
    suppressed here unless ``debug`` is set.
    """

    def __init__(self, *, debug: bool = False, stream: TextIO | None = None) -> None:
        self._debug = debug
        self._stream = stream

    @property
    def is_debug(self) -> bool:
        return self._debug

    def _write(self, line: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(line + "\n")
        stream.flush()

    def error(self, message: str) -> None:
        self._write(f"::error::{escape_command_data(message)}")

    def warning(self, message: str) -> None:
        self._write(f"::warning::{escape_command_data(message)}")

    def info(self, message: str) -> None:
        self._write(message)

    def debug(self, message: str) -> None:
        if self._debug:
            self._write(f"::debug::{escape_command_data(message)}")

    def start_group(self, title: str) -> None:
        self._write(f"::group::{escape_command_data(title)}")

    def end_group(self) -> None:
        self._write("::endgroup::")


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)
    debug_enabled: bool = False

    @property
    def is_debug(self) -> bool:
        return self.debug_enabled

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def debug(self, message: str) -> None:
        if self.debug_enabled:
            self.outputs.append(OutputRecord(f"debug: {message}", Style.DEBUG))

    def start_group(self, title: str) -> None:
        self.outputs.append(OutputRecord(title, Style.HEADER))

    def end_group(self) -> None:
        self.outputs.append(OutputRecord("", Style.DEFAULT))

    # Test helper methods

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style == style)
