"""List tags merged into a ref and diff two such lists."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

# A missing git binary must surface as GitCommandNotFound at call time, not as
# an ImportError when GitPython is first imported.
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

logger = logging.getLogger(__name__)


def _split_lines(output: str) -> list[str]:
    """Split command output into non-empty, stripped lines."""
    return [line.strip() for line in output.splitlines() if line.strip()]


def merged_tags(ref: str, repo_path: Path | str = ".") -> list[str]:
    """
    Return the tags reachable from ``ref`` (``git tag --merged <ref>``).

    Any git failure (unknown ref, not a repository, git missing) is logged and
    an empty list is returned so the caller carries on with no tags.
    """
    # Imported here so that loading the CLI runs no git subprocess.
    from git import Repo
    from git.exc import GitCommandError, GitError

    command = f"git tag --merged {ref}"
    try:
        repo = Repo(repo_path, search_parent_directories=True)
        output = repo.git.tag("--merged", ref)
    except GitCommandError as e:
        logger.error("Error executing command '%s': %s", command, str(e).strip())
        return []
    except GitError as e:
        logger.error("Error executing command '%s' in %s: %s", command, repo_path, e)
        return []
    return _split_lines(output)


def exclusive_tags(source_tags: Iterable[str], target_tags: Iterable[str]) -> list[str]:
    """Tags in target_tags but not in source_tags, in target order, each listed once."""
    excluded = set(source_tags)
    result: list[str] = []
    for tag in target_tags:
        if tag in excluded:
            continue
        excluded.add(tag)
        result.append(tag)
    return result


def find_exclusive_tags(
    source_ref: str,
    target_ref: str,
    repo_path: Path | str = ".",
) -> list[str]:
    """Tags merged into target_ref that are not merged into source_ref."""
    target_merged = merged_tags(target_ref, repo_path)
    source_merged = merged_tags(source_ref, repo_path)
    return exclusive_tags(source_merged, target_merged)
