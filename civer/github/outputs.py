"""Expose the resolved version to later workflow steps."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from civer.core.config import OutputsConfig
from civer.core.result import Err, Ok, Result
from civer.version.model import ResolutionResult

__all__ = ["OutputError", "env_lines", "output_lines", "emit_result"]


@dataclass(frozen=True, slots=True)
class OutputError:
    message: str
    path: Path | None = None

    def pretty(self) -> str:
        if self.path is not None:
            return f"{self.message} ({self.path})"
        return self.message


def _flag(value: bool) -> str:
    return "true" if value else "false"


def env_lines(result: ResolutionResult, names: OutputsConfig) -> list[str]:
    return [
        f"{names.version_env}={result.version_string}",
        f"{names.is_for_release_env}={_flag(result.is_for_release)}",
    ]


def output_lines(result: ResolutionResult, names: OutputsConfig) -> list[str]:
    return [
        f"{names.version_output}={result.version_string}",
        f"{names.is_for_release_output}={_flag(result.is_for_release)}",
    ]


def _append(path: Path, lines: list[str]) -> Result[None, OutputError]:
    try:
        with open(path, "a", encoding="utf-8") as f:
            for line in lines:
                f.write(f"{line}\n")
    except OSError as e:
        return Err(OutputError(f"Cannot write outputs: {e}", path=path))
    return Ok(None)


def emit_result(
    result: ResolutionResult,
    env: Mapping[str, str],
    names: OutputsConfig,
    *,
    dry_run: bool = False,
) -> Result[list[str], OutputError]:
    """Write the result to ``$GITHUB_ENV`` and ``$GITHUB_OUTPUT``.

    Returns the lines that were not written anywhere and should be printed
    instead: everything on a dry run or outside of Actions, nothing otherwise.
    """
    if dry_run:
        return Ok(env_lines(result, names) + output_lines(result, names))

    written = False
    env_file = env.get("GITHUB_ENV")
    if env_file:
        appended = _append(Path(env_file), env_lines(result, names))
        if isinstance(appended, Err):
            return appended
        written = True

    output_file = env.get("GITHUB_OUTPUT")
    if output_file:
        appended = _append(Path(output_file), output_lines(result, names))
        if isinstance(appended, Err):
            return appended
        written = True

    if written:
        return Ok([])
    return Ok(env_lines(result, names))
