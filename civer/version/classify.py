"""Classify the triggering event into an initial version decision."""

from __future__ import annotations

from typing import assert_never

from civer.core.result import Err, Ok, Result
from civer.output.console import ConsoleProtocol
from civer.version.model import (
    Classification,
    DispatchTrigger,
    PullRequestTrigger,
    PushTrigger,
    ReleaseTrigger,
    ResolutionError,
    TriggerContext,
    UnrecognizedTrigger,
)
from civer.version.semver import parse_version, prerelease_identifiers

# workflow_dispatch inputs arrive as strings; only this exact value publishes.
WILL_PUBLISH_TRUE = "true"

_FALLBACK = Classification(explicit_version=None, use_fallback=True, is_for_release=False)


def classify(
    context: TriggerContext, *, console: ConsoleProtocol
) -> Result[Classification, ResolutionError]:
    event = context.event
    match event:
        case ReleaseTrigger():
            return _classify_release(event, console=console)
        case DispatchTrigger():
            return _classify_dispatch(event, console=console)
        case PushTrigger() | PullRequestTrigger():
            return Ok(_FALLBACK)
        case UnrecognizedTrigger(name=name):
            console.warning(
                f"Event '{name}' is not recognized; resolving the version as for a push build"
            )
            return Ok(_FALLBACK)
        case _:
            assert_never(event)


def _classify_release(
    event: ReleaseTrigger, *, console: ConsoleProtocol
) -> Result[Classification, ResolutionError]:
    tag = event.tag
    if not tag:
        return Err(ResolutionError(kind="missing_version", message="Release version is missing"))

    version = parse_version(tag)
    if version is None:
        return Err(
            ResolutionError(
                kind="invalid_version",
                message=f"Release tag '{tag}' is not a valid semver version",
            )
        )

    if not isinstance(event.prerelease, bool):
        return Err(
            ResolutionError(
                kind="invalid_release_metadata",
                message=(
                    "Release prerelease status is invalid or unspecified: "
                    f"{event.prerelease!r}"
                ),
            )
        )

    # Later workflow steps read the release's prerelease flag directly.
    if prerelease_identifiers(version) and not event.prerelease:
        return Err(
            ResolutionError(
                kind="prerelease_mismatch",
                message=(
                    f"The version to be released '{tag}' indicates a pre-release version, "
                    "but the release is not marked as a pre-release"
                ),
                hint="mark the release as a pre-release or drop the pre-release suffix",
            )
        )

    console.info(f"Got version {version} from release event")
    return Ok(Classification(explicit_version=version, use_fallback=False, is_for_release=True))


def _classify_dispatch(
    event: DispatchTrigger, *, console: ConsoleProtocol
) -> Result[Classification, ResolutionError]:
    version = None
    if event.version:
        version = parse_version(event.version)
        if version is None:
            return Err(
                ResolutionError(
                    kind="invalid_version",
                    message=f"Specified version '{event.version}' is not a valid semver version",
                )
            )
        console.info(f"Got version {version} from workflow dispatch event")

    is_for_release = event.will_publish == WILL_PUBLISH_TRUE
    if is_for_release and version is None:
        return Err(
            ResolutionError(
                kind="explicit_version_required",
                message=(
                    "Publishing packages without specifying a specific version is not permitted"
                ),
                hint="set the 'version' input when 'will_publish_packages' is true",
            )
        )

    return Ok(
        Classification(
            explicit_version=version,
            use_fallback=version is None,
            is_for_release=is_for_release,
        )
    )
