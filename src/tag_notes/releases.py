"""Thin client for the GitHub releases API, plus the orphaned-tag filter."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import requests

from tag_notes.config import Config

logger = logging.getLogger(__name__)

GITHUB_API_VERSION = "2022-11-28"
RELEASES_PER_PAGE = 100


class ReleaseError(Exception):
    """Raised when the releases API returns an error or is unreachable."""

    pass


@dataclass(frozen=True)
class Release:
    """Release metadata for one tag."""

    tag: str
    name: str
    body: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any], tag: str | None = None) -> Release:
        """Build a Release from an API payload; an empty name falls back to the tag."""
        tag_name = tag if tag is not None else str(data.get("tag_name") or "")
        return cls(
            tag=tag_name,
            name=str(data.get("name") or tag_name),
            body=str(data.get("body") or ""),
        )


class GitHubClient:
    """Authenticated access to one repository's releases."""

    def __init__(self, config: Config, session: requests.Session | None = None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {config.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        })

    def _url(self, *parts: str) -> str:
        path = "/".join(parts)
        return f"{self.config.api_url}/repos/{self.config.repo_owner}/{self.config.repo_name}/{path}"

    def _get(self, url: str, **kwargs) -> Any:
        try:
            resp = self.session.get(url, timeout=self.config.timeout, **kwargs)
            resp.raise_for_status()
            return resp.json()
        except requests.HTTPError as e:
            status = getattr(e.response, "status_code", None)
            raise ReleaseError(f"GET {url} failed with HTTP {status}") from e
        except requests.RequestException as e:
            raise ReleaseError(f"GET {url} failed: {e}") from e
        except ValueError as e:
            raise ReleaseError(f"GET {url} returned invalid JSON: {e}") from e

    def list_releases(self) -> list[Release]:
        """
        Return the releases on the first page of the repository's release list.

        Raises:
            ReleaseError: On HTTP error, connection/timeout error or bad payload.
        """
        data = self._get(self._url("releases"), params={"per_page": RELEASES_PER_PAGE})
        if not isinstance(data, list):
            raise ReleaseError(f"Unexpected release list payload for {self.config.repo_slug}")
        return [Release.from_api(item) for item in data if isinstance(item, dict)]

    def get_release(self, tag: str) -> Release:
        """
        Return the release published for ``tag``.

        Raises:
            ReleaseError: If there is no release for the tag or the request fails.
        """
        url = self._url("releases", "tags", quote(tag, safe=""))
        try:
            data = self._get(url)
        except ReleaseError as e:
            cause = e.__cause__
            if isinstance(cause, requests.HTTPError) and getattr(cause.response, "status_code", None) == 404:
                raise ReleaseError(f"No release found for tag {tag}") from cause
            raise
        if not isinstance(data, dict):
            raise ReleaseError(f"Unexpected release payload for tag {tag}")
        return Release.from_api(data, tag=tag)


def release_tag_names(client: GitHubClient) -> set[str]:
    """
    Return the tag names that have a published release.

    If the release list cannot be fetched, the error is logged and an empty
    set is returned, so every tag is then treated as orphaned.
    """
    try:
        releases = client.list_releases()
    except ReleaseError as e:
        logger.error(
            "Error fetching releases for %s (%s); treating every tag as orphaned.",
            client.config.repo_slug,
            e,
        )
        return set()
    names = {r.tag for r in releases if r.tag}
    logger.debug("Release tags: %s", sorted(names))
    return names


def split_orphaned(tags: Iterable[str], release_tags: Iterable[str]) -> tuple[list[str], list[str]]:
    """Split tags into (with_release, orphaned), keeping input order."""
    known = set(release_tags)
    with_release: list[str] = []
    orphaned: list[str] = []
    for tag in tags:
        (with_release if tag in known else orphaned).append(tag)
    return with_release, orphaned
