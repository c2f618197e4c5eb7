"""CI prerelease suffix.

Fallback versions get a ``ci<run>`` prerelease suffix so they sort below the
next real release, qualified by the ref name on anything but the default
branch so builds of different refs never share a version.
"""

from __future__ import annotations

import re

from semver import Version

from civer.version.semver import prerelease_identifiers, with_prerelease

BRANCH_PREFIX = "refs/heads/"
TAG_PREFIX = "refs/tags/"

_ILLEGAL_IDENTIFIER_CHARS = re.compile(r"[^0-9A-Za-z-]")


def sanitize_ref(ref: str) -> str:
    """Turn a git ref into a legal SemVer identifier fragment."""
    if ref.startswith(BRANCH_PREFIX):
        name = ref[len(BRANCH_PREFIX) :]
    elif ref.startswith(TAG_PREFIX):
        name = f"tag-{ref[len(TAG_PREFIX) :]}"
    else:
        name = ref
    return _ILLEGAL_IDENTIFIER_CHARS.sub("-", name)


def ci_suffix(ref: str, default_branch: str, run_number: int) -> str:
    suffix = f"ci{run_number}"
    if ref == f"{BRANCH_PREFIX}{default_branch}":
        return suffix
    return f"{sanitize_ref(ref)}-{suffix}"


def merge_prerelease(identifiers: tuple[str, ...], suffix: str) -> tuple[str, ...]:
    """Merge ``suffix`` into existing prerelease identifiers.

    Multi-part prereleases get the suffix as a new leading identifier; a
    single identifier is extended in place so no new dot-part appears.
    """
    if len(identifiers) > 1:
        return (suffix, *identifiers)
    if len(identifiers) == 1:
        return (f"{identifiers[0]}-{suffix}",)
    return (suffix,)


def append_ci_suffix(
    version: Version,
    *,
    ref: str,
    default_branch: str,
    run_number: int,
) -> Version:
    suffix = ci_suffix(ref, default_branch, run_number)
    return with_prerelease(version, merge_prerelease(prerelease_identifiers(version), suffix))
