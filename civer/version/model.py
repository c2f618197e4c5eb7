from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

from semver import Version

from civer.core.result import Result


ResolutionErrorKind = Literal[
    "missing_version",
    "invalid_version",
    "invalid_release_metadata",
    "prerelease_mismatch",
    "explicit_version_required",
    "release_lookup_failed",
    "unexpected_build_metadata",
    "internal_invariant_violation",
]


@dataclass(frozen=True, slots=True)
class ResolutionError:
    """A fatal resolution failure. Exactly one is reported per run."""

    kind: ResolutionErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


@dataclass(frozen=True, slots=True)
class ReleaseTrigger:
    tag: str | None
    # Raw payload value; anything but a real bool is rejected.
    prerelease: object = None


@dataclass(frozen=True, slots=True)
class DispatchTrigger:
    version: str | None = None
    will_publish: str | None = None


@dataclass(frozen=True, slots=True)
class PushTrigger:
    pass


@dataclass(frozen=True, slots=True)
class PullRequestTrigger:
    pass


@dataclass(frozen=True, slots=True)
class UnrecognizedTrigger:
    name: str


type Trigger = (
    ReleaseTrigger | DispatchTrigger | PushTrigger | PullRequestTrigger | UnrecognizedTrigger
)


@dataclass(frozen=True, slots=True)
class Repository:
    owner: str
    name: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True, slots=True)
class TriggerContext:
    """Everything resolution needs to know about the CI run."""

    event: Trigger
    ref: str
    run_number: int
    default_branch: str = "main"
    repository: Repository | None = None

    @property
    def default_branch_ref(self) -> str:
        return f"refs/heads/{self.default_branch}"


@dataclass(frozen=True, slots=True)
class Classification:
    explicit_version: Version | None
    use_fallback: bool
    is_for_release: bool


@dataclass(frozen=True, slots=True)
class ReleaseInfo:
    tag: str


@dataclass(frozen=True, slots=True)
class LookupFailure:
    """A release lookup failure other than "not found"."""

    message: str
    status: int = 0


class ReleaseLookup(Protocol):
    def latest_release(self, owner: str, name: str) -> Result[ReleaseInfo | None, LookupFailure]:
        """Return the latest release, ``Ok(None)`` if the repository has none."""
        ...


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    version: Version
    is_for_release: bool

    @property
    def version_string(self) -> str:
        return str(self.version)
