"""Tests for civer.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from civer.core.config import (
    Config,
    GitHubConfig,
    OutputsConfig,
    ResolveConfig,
    load_config,
    load_config_or_default,
)
from civer.core.result import Err, Ok


class TestDefaults:
    def test_config_defaults(self) -> None:
        config = Config()
        assert config.github == GitHubConfig(api_url="https://api.github.com", timeout=30.0)
        assert config.resolve == ResolveConfig(default_branch="main")
        assert config.outputs.version_env == "CiBuildVersion"
        assert config.outputs.is_for_release_env == "CiIsForRelease"
        assert config.outputs.version_output == "version"
        assert config.outputs.is_for_release_output == "is-for-release"

    def test_frozen(self) -> None:
        config = Config()
        with pytest.raises(AttributeError):
            config.github = GitHubConfig()  # type: ignore[misc]


class TestFromDict:
    def test_empty_uses_defaults(self) -> None:
        assert Config.from_dict({}) == Config()

    def test_overrides(self) -> None:
        config = Config.from_dict(
            {
                "github": {"api_url": "https://ghe.example.com/api/v3/", "timeout": 5},
                "resolve": {"default_branch": "develop"},
                "outputs": {"version_env": "BUILD_VERSION"},
            }
        )
        assert config.github.api_url == "https://ghe.example.com/api/v3"
        assert config.github.timeout == 5.0
        assert config.resolve.default_branch == "develop"
        assert config.outputs.version_env == "BUILD_VERSION"
        assert config.outputs.is_for_release_env == OutputsConfig().is_for_release_env

    def test_wrong_types_fall_back_to_defaults(self) -> None:
        config = Config.from_dict(
            {
                "github": {"api_url": 42, "timeout": True},
                "resolve": "main",
            }
        )
        assert config.github == GitHubConfig()
        assert config.resolve == ResolveConfig()

    def test_non_positive_timeout_ignored(self) -> None:
        config = Config.from_dict({"github": {"timeout": 0}})
        assert config.github.timeout == 30.0


class TestLoadConfig:
    def test_load_valid(self, tmp_path: Path) -> None:
        path = tmp_path / "civer.toml"
        path.write_text('[resolve]\ndefault_branch = "trunk"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.resolve.default_branch == "trunk"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "missing.toml")
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "civer.toml"
        path.write_text("[resolve\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path


class TestLoadConfigOrDefault:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        result = load_config_or_default(tmp_path / "civer.toml")
        assert result == Ok(Config())

    def test_broken_file_is_still_an_error(self, tmp_path: Path) -> None:
        path = tmp_path / "civer.toml"
        path.write_text("not toml at all =", encoding="utf-8")
        assert isinstance(load_config_or_default(path), Err)
