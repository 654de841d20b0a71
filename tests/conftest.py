"""Shared fixtures: fake GitHub API sessions and a tagged git repository."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

import pytest
import requests
from git import Actor, Repo

from tag_notes.config import Config


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None):
        self.status_code = status_code
        self._payload = payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """
    Stand-in for requests.Session keyed by URL suffix.

    ``routes`` maps a URL suffix to a FakeResponse or an exception to raise.
    Unknown URLs answer 404.
    """

    def __init__(self, routes: dict[str, Any] | None = None):
        self.routes = dict(routes or {})
        self.headers: dict[str, str] = {}
        self.calls: list[tuple[str, dict]] = []
        self._lock = threading.Lock()

    def get(self, url: str, **kwargs) -> FakeResponse:
        with self._lock:
            self.calls.append((url, kwargs))
        for suffix, outcome in self.routes.items():
            if url.endswith(suffix):
                if isinstance(outcome, Exception):
                    raise outcome
                return outcome
        return FakeResponse(404, {"message": "Not Found"})

    def called_urls(self) -> list[str]:
        return [url for url, _ in self.calls]


def release_payload(tag: str, name: str | None = None, body: str | None = "") -> dict:
    return {"tag_name": tag, "name": tag if name is None else name, "body": body}


@pytest.fixture
def config() -> Config:
    return Config(token="t0k3n", repo_owner="acme", repo_name="widgets", max_workers=4, timeout=7)


AUTHOR = Actor("Test User", "test@example.com")


@pytest.fixture
def tagged_repo(tmp_path: Path) -> Path:
    """Linear history tagged v0.1.0 -> v1.0.0 -> v1.1.0, plus v2.0.0-beta on a side branch."""
    repo_dir = tmp_path / "repo"
    repo = Repo.init(repo_dir)
    for tag in ("v0.1.0", "v1.0.0", "v1.1.0"):
        repo.index.commit(f"release {tag}", author=AUTHOR, committer=AUTHOR)
        repo.create_tag(tag)
    side = repo.create_head("side", "v1.0.0")
    side.checkout()
    repo.index.commit("beta work", author=AUTHOR, committer=AUTHOR)
    repo.create_tag("v2.0.0-beta")
    return repo_dir
