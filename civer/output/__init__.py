"""Diagnostics output."""

from .console import ConsoleProtocol, GitHubConsole, MockConsole, RichConsole, Style

__all__ = ["ConsoleProtocol", "GitHubConsole", "MockConsole", "RichConsole", "Style"]
