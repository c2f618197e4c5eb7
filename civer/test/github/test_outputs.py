from __future__ import annotations

from pathlib import Path

from semver import Version

from civer.core.config import OutputsConfig
from civer.core.result import Err, Ok
from civer.github.outputs import emit_result, env_lines, output_lines
from civer.version.model import ResolutionResult

_RESULT = ResolutionResult(version=Version.parse("1.2.4-feature-x-ci42"), is_for_release=False)


def test_lines() -> None:
    names = OutputsConfig()
    assert env_lines(_RESULT, names) == [
        "CiBuildVersion=1.2.4-feature-x-ci42",
        "CiIsForRelease=false",
    ]
    assert output_lines(_RESULT, names) == [
        "version=1.2.4-feature-x-ci42",
        "is-for-release=false",
    ]


def test_custom_names() -> None:
    names = OutputsConfig(version_env="V", is_for_release_env="R")
    result = ResolutionResult(version=Version(2, 0, 0), is_for_release=True)
    assert env_lines(result, names) == ["V=2.0.0", "R=true"]


def test_writes_github_env_and_output(tmp_path: Path) -> None:
    env_file = tmp_path / "env"
    output_file = tmp_path / "output"
    env_file.write_text("EXISTING=1\n", encoding="utf-8")

    result = emit_result(
        _RESULT,
        {"GITHUB_ENV": str(env_file), "GITHUB_OUTPUT": str(output_file)},
        OutputsConfig(),
    )

    assert result == Ok([])
    assert env_file.read_text(encoding="utf-8") == (
        "EXISTING=1\nCiBuildVersion=1.2.4-feature-x-ci42\nCiIsForRelease=false\n"
    )
    assert output_file.read_text(encoding="utf-8") == (
        "version=1.2.4-feature-x-ci42\nis-for-release=false\n"
    )


def test_outside_actions_returns_lines_to_print() -> None:
    assert emit_result(_RESULT, {}, OutputsConfig()) == Ok(env_lines(_RESULT, OutputsConfig()))


def test_dry_run_writes_nothing(tmp_path: Path) -> None:
    env_file = tmp_path / "env"

    result = emit_result(_RESULT, {"GITHUB_ENV": str(env_file)}, OutputsConfig(), dry_run=True)

    assert isinstance(result, Ok)
    assert len(result.value) == 4
    assert not env_file.exists()


def test_write_failure(tmp_path: Path) -> None:
    target = tmp_path / "missing-dir" / "env"

    result = emit_result(_RESULT, {"GITHUB_ENV": str(target)}, OutputsConfig())

    assert isinstance(result, Err)
    assert result.error.path == target
