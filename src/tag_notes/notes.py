"""Fetch release notes for a list of tags and format them as text."""

from __future__ import annotations

import concurrent.futures
import functools
import logging
from collections.abc import Iterable, Sequence

from tag_notes.releases import GitHubClient, Release, ReleaseError

logger = logging.getLogger(__name__)


def fetch_release_note(client: GitHubClient, tag: str) -> Release | None:
    """Fetch the release for one tag; log and return None on failure."""
    try:
        return client.get_release(tag)
    except ReleaseError as e:
        logger.error("Error fetching release notes for tag %s: %s", tag, e)
        return None


def fetch_release_notes(
    client: GitHubClient,
    tags: Sequence[str],
    max_workers: int,
) -> list[Release | None]:
    """
    Fetch release notes for all tags concurrently.

    At most ``max_workers`` requests are in flight. Waits for the whole batch;
    the result list follows the order of ``tags`` (None where a fetch failed).
    """
    if not tags:
        return []
    workers = max(1, min(max_workers, len(tags)))
    logger.debug("Fetching release notes for %d tag(s) using %d worker(s)", len(tags), workers)
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(functools.partial(fetch_release_note, client), tags))


def format_release(release: Release) -> str:
    """Format one release as a header line and its body."""
    if release.name == release.tag:
        header = release.name
    else:
        header = f"{release.name} ({release.tag})"
    return f"{header}\n {release.body}\n"


def format_release_notes(releases: Iterable[Release | None]) -> str:
    """Join formatted releases, each followed by a blank line; None entries are skipped."""
    return "".join(f"{format_release(r)}\n" for r in releases if r is not None)
