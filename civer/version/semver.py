"""SemVer helpers on top of ``semver.Version``.

``semver.Version`` is immutable; every helper here returns a new value.
"""

from __future__ import annotations

from semver import Version

__all__ = [
    "Version",
    "parse_version",
    "is_valid",
    "prerelease_identifiers",
    "with_prerelease",
    "without_prerelease",
    "without_build",
    "next_patch",
]


def parse_version(text: str | None) -> Version | None:
    """Parse a SemVer 2.0 string, or return None.

    Surrounding whitespace and a single leading ``v`` are accepted, since
    release tags are commonly written as ``v1.2.3``.
    """
    if text is None:
        return None
    candidate = text.strip()
    if candidate.startswith("v"):
        candidate = candidate[1:]
    if not candidate:
        return None
    try:
        return Version.parse(candidate)
    except ValueError:
        return None


def is_valid(text: str) -> bool:
    """Strict grammar check, no ``v`` prefix or whitespace allowed."""
    return Version.is_valid(text)


def prerelease_identifiers(version: Version) -> tuple[str, ...]:
    if not version.prerelease:
        return ()
    return tuple(version.prerelease.split("."))


def with_prerelease(version: Version, identifiers: tuple[str, ...]) -> Version:
    return version.replace(prerelease=".".join(identifiers) if identifiers else None)


def without_prerelease(version: Version) -> Version:
    return version.replace(prerelease=None)


def without_build(version: Version) -> Version:
    return version.replace(build=None)


def next_patch(version: Version) -> Version:
    """Increment patch, dropping prerelease and build metadata."""
    return Version(version.major, version.minor, version.patch + 1)
