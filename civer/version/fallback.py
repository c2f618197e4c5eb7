"""Derive a base version from the repository's latest release."""

from __future__ import annotations

from semver import Version

from civer.core.result import Err, Ok, Result
from civer.output.console import ConsoleProtocol
from civer.version.model import ReleaseLookup, Repository, ResolutionError
from civer.version.semver import (
    next_patch,
    parse_version,
    prerelease_identifiers,
    without_build,
    without_prerelease,
)

INITIAL_VERSION = Version(0, 0, 0)


def next_base_version(latest: Version) -> Version:
    """Version CI should build after ``latest`` was published.

    An in-flight prerelease is presumed to be the next version to ship, so it
    is kept without its prerelease part. After a stable release CI heads
    towards the next patch. Minor and major bumps are never inferred.
    """
    if prerelease_identifiers(latest):
        return without_build(without_prerelease(latest))
    return next_patch(latest)


def resolve_fallback(
    repository: Repository | None,
    lookup: ReleaseLookup,
    *,
    is_for_release: bool,
    console: ConsoleProtocol,
) -> Result[Version, ResolutionError]:
    if repository is None:
        return Err(
            ResolutionError(
                kind="internal_invariant_violation",
                message="Repository owner and name are required to look up the latest release",
            )
        )

    console.info("Determining version to use based off of last release version...")
    result = lookup.latest_release(repository.owner, repository.name)
    if isinstance(result, Err):
        return Err(
            ResolutionError(
                kind="release_lookup_failed",
                message=f"Failed to get the latest release of {repository.slug}",
                hint=result.error.message,
            )
        )

    release = result.value
    if release is None:
        # A release-bound build always carries an explicit version.
        if is_for_release:
            return Err(
                ResolutionError(
                    kind="internal_invariant_violation",
                    message="Fell back on the initial version for a release-bound build",
                )
            )
        console.info(
            f"Repository does not appear to have any releases, falling back on {INITIAL_VERSION}"
        )
        return Ok(INITIAL_VERSION)

    latest = parse_version(release.tag)
    if latest is None:
        return Err(
            ResolutionError(
                kind="invalid_version",
                message=f"Most recent release '{release.tag}' is not a valid semver version",
            )
        )

    console.info(f"Got most recent release version: {latest}")
    if prerelease_identifiers(latest):
        console.info(
            "Version is a pre-release version, CI version will be the same "
            "except without the pre-release suffix"
        )
    return Ok(next_base_version(latest))
