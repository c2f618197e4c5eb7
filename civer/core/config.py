"""Typed configuration loading and access.

Configuration is optional. When a ``civer.toml`` is present it can override
the GitHub API endpoint, the fallback default branch and the names under
which the resolved version is exported.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "GitHubConfig",
    "OutputsConfig",
    "ResolveConfig",
    "DEFAULT_CONFIG_NAME",
    "load_config",
    "load_config_or_default",
]

DEFAULT_CONFIG_NAME = "civer.toml"

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_BRANCH = "main"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None

    def pretty(self) -> str:
        if self.path is not None:
            return f"{self.message} ({self.path})"
        return self.message


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    """GitHub REST API access."""

    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class ResolveConfig:
    """Resolution defaults used when the event payload is silent."""

    default_branch: str = DEFAULT_BRANCH


@dataclass(frozen=True, slots=True)
class OutputsConfig:
    """Names under which the result is exported.

    ``*_env`` names go to ``$GITHUB_ENV``, ``*_output`` names to
    ``$GITHUB_OUTPUT``.
    """

    version_env: str = "CiBuildVersion"
    is_for_release_env: str = "CiIsForRelease"
    version_output: str = "version"
    is_for_release_output: str = "is-for-release"


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    github: GitHubConfig = field(default_factory=GitHubConfig)
    resolve: ResolveConfig = field(default_factory=ResolveConfig)
    outputs: OutputsConfig = field(default_factory=OutputsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        github: StrDict = get_table(data, "github") or {}
        resolve: StrDict = get_table(data, "resolve") or {}
        outputs: StrDict = get_table(data, "outputs") or {}
        defaults = OutputsConfig()

        return cls(
            github=GitHubConfig(
                api_url=(get_str(github, "api_url") or DEFAULT_API_URL).rstrip("/"),
                timeout=get_float(github, "timeout") or DEFAULT_TIMEOUT_SECONDS,
            ),
            resolve=ResolveConfig(
                default_branch=get_str(resolve, "default_branch") or DEFAULT_BRANCH,
            ),
            outputs=OutputsConfig(
                version_env=get_str(outputs, "version_env") or defaults.version_env,
                is_for_release_env=get_str(outputs, "is_for_release_env")
                or defaults.is_for_release_env,
                version_output=get_str(outputs, "version_output") or defaults.version_output,
                is_for_release_output=get_str(outputs, "is_for_release_output")
                or defaults.is_for_release_output,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to civer.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return Ok(Config.from_dict(result.value))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config from file, or defaults if the file does not exist.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
