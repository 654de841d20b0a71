"""Configuration loading for tag-notes (environment + optional .env)."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Default .env search order (optional; already-set env vars win).
DEFAULT_DOTENV_PATHS: list[Path] = [
    Path.cwd() / ".env",
    Path.home() / ".config" / "tag-notes" / ".env",
]

# Env var names.
ENV_TOKEN_VAR_NAME = "GITHUB_TOKEN_VAR_NAME"
ENV_REPO_OWNER = "GITHUB_REPO_OWNER"
ENV_REPO_NAME = "GITHUB_REPO_NAME"
ENV_API_URL = "GITHUB_API_URL"
ENV_MAX_WORKERS = "TAG_NOTES_MAX_WORKERS"
ENV_TIMEOUT = "TAG_NOTES_TIMEOUT"
ENV_LOG_LEVEL = "TAG_NOTES_LOG_LEVEL"

DEFAULT_TOKEN_VAR_NAME = "GITHUB_TOKEN"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_MAX_WORKERS = 8
DEFAULT_TIMEOUT = 30
DEFAULT_LOG_LEVEL = "INFO"


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid.

    ``messages`` holds one diagnostic per problem so the caller can report
    every missing key, not just the first one.
    """

    def __init__(self, messages: list[str]):
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


def load_dotenv_for_app() -> None:
    """Load .env from first existing path in DEFAULT_DOTENV_PATHS (no override of existing env)."""
    for p in DEFAULT_DOTENV_PATHS:
        if p.exists():
            load_dotenv(p, override=False)
            break


def log_level_from_env(environ: Mapping[str, str] | None = None) -> int:
    """Return the logging level named by TAG_NOTES_LOG_LEVEL (INFO when unset or unknown)."""
    env = os.environ if environ is None else environ
    name = (env.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _positive_int(env: Mapping[str, str], key: str, default: int, errors: list[str]) -> int:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        errors.append(f"{key} must be an integer, got {raw!r}.")
        return default
    if value < 1:
        errors.append(f"{key} must be greater than zero, got {value}.")
        return default
    return value


@dataclass(frozen=True)
class Config:
    """Resolved settings; built once at startup and passed to every component."""

    token: str
    repo_owner: str
    repo_name: str
    token_var_name: str = DEFAULT_TOKEN_VAR_NAME
    api_url: str = DEFAULT_API_URL
    max_workers: int = DEFAULT_MAX_WORKERS
    timeout: int = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """
        Build Config from environment variables.

        The token is read from the variable named by GITHUB_TOKEN_VAR_NAME
        (default GITHUB_TOKEN). Raises ConfigError listing every missing
        required key.
        """
        env = os.environ if environ is None else environ
        errors: list[str] = []

        token_var_name = (env.get(ENV_TOKEN_VAR_NAME) or "").strip()
        if not token_var_name:
            logger.info(
                "The %s environment variable is not defined. Using the default: %s",
                ENV_TOKEN_VAR_NAME,
                DEFAULT_TOKEN_VAR_NAME,
            )
            token_var_name = DEFAULT_TOKEN_VAR_NAME

        token = (env.get(token_var_name) or "").strip()
        if not token:
            errors.append(
                f"The GitHub token is not defined in the environment. "
                f"Based on {ENV_TOKEN_VAR_NAME}, {token_var_name} must be defined."
            )
        repo_owner = (env.get(ENV_REPO_OWNER) or "").strip()
        if not repo_owner:
            errors.append(f"{ENV_REPO_OWNER} must be defined in the environment or .env file.")
        repo_name = (env.get(ENV_REPO_NAME) or "").strip()
        if not repo_name:
            errors.append(f"{ENV_REPO_NAME} must be defined in the environment or .env file.")

        max_workers = _positive_int(env, ENV_MAX_WORKERS, DEFAULT_MAX_WORKERS, errors)
        timeout = _positive_int(env, ENV_TIMEOUT, DEFAULT_TIMEOUT, errors)

        if errors:
            raise ConfigError(errors)

        api_url = (env.get(ENV_API_URL) or "").strip() or DEFAULT_API_URL
        return cls(
            token=token,
            repo_owner=repo_owner,
            repo_name=repo_name,
            token_var_name=token_var_name,
            api_url=api_url.rstrip("/"),
            max_workers=max_workers,
            timeout=timeout,
        )

    @property
    def repo_slug(self) -> str:
        """owner/name, e.g. for log messages."""
        return f"{self.repo_owner}/{self.repo_name}"

    def describe(self) -> list[str]:
        """Informational lines about the resolved values; the token is reported by length only."""
        return [
            f"{self.token_var_name} is {len(self.token)} characters in length.",
            f"{ENV_REPO_OWNER} is {self.repo_owner}.",
            f"{ENV_REPO_NAME} is {self.repo_name}.",
        ]

    def __repr__(self) -> str:
        return (
            f"Config(token=<{len(self.token)} chars>, repo={self.repo_slug!r}, "
            f"api_url={self.api_url!r}, max_workers={self.max_workers}, timeout={self.timeout})"
        )
