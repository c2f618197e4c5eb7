"""End-to-end resolution scenarios over a fake release lookup."""

from __future__ import annotations

import pytest
from semver import Version

from civer.core.result import Err, Ok
from civer.output.console import MockConsole
from civer.version.model import (
    DispatchTrigger,
    LookupFailure,
    PullRequestTrigger,
    PushTrigger,
    ReleaseTrigger,
    Repository,
    ResolutionResult,
    Trigger,
    TriggerContext,
    UnrecognizedTrigger,
)
from civer.version.resolver import resolve
from civer.version.semver import parse_version

from ._fakes import FakeLookup

_REPO = Repository(owner="acme", name="widgets")


def _ctx(
    event: Trigger,
    *,
    ref: str = "refs/heads/main",
    run_number: int = 1,
    repository: Repository | None = _REPO,
) -> TriggerContext:
    return TriggerContext(
        event=event,
        ref=ref,
        run_number=run_number,
        default_branch="main",
        repository=repository,
    )


def _version(result: Ok[ResolutionResult] | Err[object]) -> str:
    assert isinstance(result, Ok), result
    return result.value.version_string


class TestReleaseEvents:
    @pytest.mark.parametrize("tag", ["0.0.1", "1.2.3", "10.20.30", "2.0.0"])
    def test_stable_tag_is_used_verbatim(self, tag: str) -> None:
        lookup = FakeLookup(tag="99.0.0")
        result = resolve(
            _ctx(ReleaseTrigger(tag=tag, prerelease=False)), lookup, console=MockConsole()
        )

        assert isinstance(result, Ok)
        assert result.value.version_string == tag
        assert result.value.is_for_release is True
        assert lookup.calls == []

    def test_prerelease_mismatch(self) -> None:
        result = resolve(
            _ctx(ReleaseTrigger(tag="1.2.3-rc.1", prerelease=False)),
            FakeLookup(),
            console=MockConsole(),
        )
        assert isinstance(result, Err)
        assert result.error.kind == "prerelease_mismatch"

    def test_release_with_build_metadata_fails(self) -> None:
        result = resolve(
            _ctx(ReleaseTrigger(tag="1.2.3+exp.sha.1", prerelease=False)),
            FakeLookup(),
            console=MockConsole(),
        )
        assert isinstance(result, Err)
        assert result.error.kind == "unexpected_build_metadata"


class TestDispatchEvents:
    def test_publish_without_version_fails(self) -> None:
        lookup = FakeLookup(tag="1.0.0")
        result = resolve(_ctx(DispatchTrigger(will_publish="true")), lookup, console=MockConsole())

        assert isinstance(result, Err)
        assert result.error.kind == "explicit_version_required"
        assert lookup.calls == []

    def test_explicit_version_build_metadata_is_stripped(self) -> None:
        console = MockConsole()
        result = resolve(
            _ctx(DispatchTrigger(version="1.0.0+exp.sha.1")), FakeLookup(), console=console
        )

        assert _version(result) == "1.0.0"
        assert console.has_warning()

    def test_explicit_version_for_publishing(self) -> None:
        result = resolve(
            _ctx(DispatchTrigger(version="v3.0.0-rc.2", will_publish="true")),
            FakeLookup(),
            console=MockConsole(),
        )
        assert result == Ok(
            ResolutionResult(version=Version.parse("3.0.0-rc.2"), is_for_release=True)
        )

    def test_without_version_uses_fallback(self) -> None:
        result = resolve(
            _ctx(DispatchTrigger(), run_number=5), FakeLookup(tag="2.1.0"), console=MockConsole()
        )
        assert _version(result) == "2.1.1-ci5"


class TestFallbackPath:
    def test_feature_branch_after_stable_release(self) -> None:
        result = resolve(
            _ctx(PushTrigger(), ref="refs/heads/feature/x", run_number=42),
            FakeLookup(tag="1.2.3"),
            console=MockConsole(),
        )

        assert isinstance(result, Ok)
        assert result.value.version_string == "1.2.4-feature-x-ci42"
        assert result.value.is_for_release is False

    def test_default_branch_after_prerelease(self) -> None:
        # The in-flight prerelease is dropped before the CI suffix is added.
        result = resolve(
            _ctx(PushTrigger(), run_number=7), FakeLookup(tag="1.2.3-beta.1"), console=MockConsole()
        )
        assert _version(result) == "1.2.3-ci7"

    def test_no_releases(self) -> None:
        console = MockConsole()
        result = resolve(_ctx(PushTrigger(), run_number=1), FakeLookup(), console=console)

        assert _version(result) == "0.0.0-ci1"
        assert console.find("falling back on 0.0.0")

    def test_pull_request_ref(self) -> None:
        result = resolve(
            _ctx(PullRequestTrigger(), ref="refs/pull/12/merge", run_number=3),
            FakeLookup(tag="v0.4.0"),
            console=MockConsole(),
        )
        assert _version(result) == "0.4.1-refs-pull-12-merge-ci3"

    def test_tag_push(self) -> None:
        result = resolve(
            _ctx(PushTrigger(), ref="refs/tags/v1.0.0", run_number=9),
            FakeLookup(tag="1.0.0"),
            console=MockConsole(),
        )
        assert _version(result) == "1.0.1-tag-v1-0-0-ci9"

    def test_unrecognized_event_continues_with_warning(self) -> None:
        console = MockConsole()
        result = resolve(
            _ctx(UnrecognizedTrigger(name="schedule"), run_number=2),
            FakeLookup(tag="1.0.0"),
            console=console,
        )

        assert _version(result) == "1.0.1-ci2"
        assert console.has_warning()

    def test_lookup_failure_aborts_with_single_error(self) -> None:
        result = resolve(
            _ctx(PushTrigger()),
            FakeLookup(failure=LookupFailure(message="HTTP 500: Server Error", status=500)),
            console=MockConsole(),
        )
        assert isinstance(result, Err)
        assert result.error.kind == "release_lookup_failed"

    def test_missing_repository(self) -> None:
        result = resolve(_ctx(PushTrigger(), repository=None), FakeLookup(), console=MockConsole())
        assert isinstance(result, Err)
        assert result.error.kind == "internal_invariant_violation"


@pytest.mark.parametrize(
    ("event", "ref", "latest"),
    [
        (ReleaseTrigger(tag="1.2.3", prerelease=False), "refs/tags/1.2.3", None),
        (ReleaseTrigger(tag="1.2.3-rc.1", prerelease=True), "refs/tags/1.2.3-rc.1", None),
        (DispatchTrigger(version="4.0.0+meta"), "refs/heads/main", None),
        (PushTrigger(), "refs/heads/main", "1.2.3"),
        (PushTrigger(), "refs/heads/release/1.x", "1.2.3-beta.1"),
        (PullRequestTrigger(), "refs/pull/1/merge", None),
    ],
)
def test_output_reparses_to_identical_version(event: Trigger, ref: str, latest: str | None) -> None:
    result = resolve(
        _ctx(event, ref=ref, run_number=11), FakeLookup(tag=latest), console=MockConsole()
    )

    assert isinstance(result, Ok)
    reparsed = parse_version(result.value.version_string)
    assert reparsed is not None
    assert reparsed.to_tuple() == result.value.version.to_tuple()


def test_resolution_is_repeatable() -> None:
    ctx = _ctx(PushTrigger(), ref="refs/heads/topic", run_number=4)
    first = resolve(ctx, FakeLookup(tag="1.0.0"), console=MockConsole())
    second = resolve(ctx, FakeLookup(tag="1.0.0"), console=MockConsole())
    assert first == second
