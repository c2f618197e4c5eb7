"""Latest release lookup through the GitHub REST API."""

from __future__ import annotations

from urllib.parse import quote

from civer.core.result import Err, Ok, Result
from civer.github.http import HttpClient
from civer.version.model import LookupFailure, ReleaseInfo

__all__ = ["GitHubReleases", "latest_release_url"]


def latest_release_url(api_url: str, owner: str, name: str) -> str:
    base = api_url.rstrip("/")
    return f"{base}/repos/{quote(owner, safe='')}/{quote(name, safe='')}/releases/latest"


class GitHubReleases:
    """``ReleaseLookup`` backed by ``GET /repos/{owner}/{repo}/releases/latest``.

    GitHub answers 404 both for a repository without published releases and
    for one the token cannot see; only the former is expected in practice,
    and both are reported as "no release". Every other failure is fatal and
    never retried.
    """

    def __init__(self, http: HttpClient, *, api_url: str = "https://api.github.com") -> None:
        self._http = http
        self._api_url = api_url

    def latest_release(self, owner: str, name: str) -> Result[ReleaseInfo | None, LookupFailure]:
        url = latest_release_url(self._api_url, owner, name)
        result = self._http.get_json(url)
        if isinstance(result, Err):
            error = result.error
            if error.is_not_found:
                return Ok(None)
            return Err(LookupFailure(message=str(error), status=error.status))

        tag = result.value.get("tag_name")
        if not isinstance(tag, str):
            return Err(LookupFailure(message=f"Missing tag_name in response ({url})"))
        return Ok(ReleaseInfo(tag=tag))
