from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import typer

from civer.core.config import DEFAULT_CONFIG_NAME, Config, load_config, load_config_or_default
from civer.core.errors import ErrorCode
from civer.core.result import Err
from civer.output.console import ConsoleProtocol, GitHubConsole, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    env: Mapping[str, str]
    config: Config
    console: ConsoleProtocol


def make_console(env: Mapping[str, str], *, debug: bool = False) -> ConsoleProtocol:
    """Workflow commands on a GitHub runner, Rich everywhere else."""
    debug = debug or env.get("RUNNER_DEBUG") == "1"
    if env.get("GITHUB_ACTIONS") == "true":
        return GitHubConsole(debug=debug)
    return RichConsole(debug=debug)


def build_context(*, config_path: Path | None = None, debug: bool = False) -> CLIContext:
    env = dict(os.environ)
    console = make_console(env, debug=debug)

    if config_path is not None:
        config_result = load_config(config_path)
    else:
        config_result = load_config_or_default(Path.cwd() / DEFAULT_CONFIG_NAME)
    if isinstance(config_result, Err):
        console.error(config_result.error.pretty())
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(env=env, config=config_result.value, console=console)
