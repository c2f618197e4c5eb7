from __future__ import annotations

from semver import Version

from civer.core.result import Err, Ok, Result
from civer.output.console import ConsoleProtocol
from civer.version.model import ResolutionError
from civer.version.semver import is_valid, without_build


def finalize(
    version: Version, *, is_for_release: bool, console: ConsoleProtocol
) -> Result[Version, ResolutionError]:
    """Reject or strip build metadata, then re-check the final text."""
    if version.build:
        if is_for_release:
            return Err(
                ResolutionError(
                    kind="unexpected_build_metadata",
                    message=(
                        f"Version '{version}' has unexpected build metadata "
                        f"'{version.build}', aborting"
                    ),
                )
            )
        console.warning(
            f"Version '{version}' had build metadata '{version.build}', it will be ignored"
        )
        version = without_build(version)

    text = str(version)
    if not is_valid(text):
        return Err(
            ResolutionError(
                kind="internal_invariant_violation",
                message=f"Internal error: version '{text}' is not a valid semver version",
            )
        )
    return Ok(version)
