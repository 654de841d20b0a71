"""CLI entry point for tag-notes."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from tag_notes.config import Config, ConfigError, load_dotenv_for_app, log_level_from_env
from tag_notes.notes import fetch_release_notes, format_release_notes
from tag_notes.releases import GitHubClient, release_tag_names, split_orphaned
from tag_notes.tags import find_exclusive_tags

logger = logging.getLogger("tag_notes")


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tag-notes",
        description=(
            "Print the GitHub release notes of every tag merged into TARGET_TAG "
            "but not into SOURCE_TAG."
        ),
    )
    parser.add_argument("source_tag", metavar="SOURCE_TAG", help="Tag or ref the comparison starts from.")
    parser.add_argument("target_tag", metavar="TARGET_TAG", help="Tag or ref whose new tags are reported.")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run tag-notes and return exit code."""
    load_dotenv_for_app()
    args = _parse_args(argv)
    logging.basicConfig(
        level=log_level_from_env(),
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = Config.from_env()
    except ConfigError as e:
        for message in e.messages:
            logger.error("%s", message)
        return 1
    for line in config.describe():
        logger.info("%s", line)

    logger.debug("Source tag: %s", args.source_tag)
    logger.debug("Target tag: %s", args.target_tag)

    tags = find_exclusive_tags(args.source_tag, args.target_tag)
    logger.debug("Exclusive tags: %s", tags)
    if not tags:
        logger.info("No tags merged into %s that are not merged into %s.", args.target_tag, args.source_tag)
        return 0

    client = GitHubClient(config)
    with_release, orphaned = split_orphaned(tags, release_tag_names(client))
    if orphaned:
        logger.warning(
            "These tags were not associated with any releases, and will be skipped: %s",
            ", ".join(orphaned),
        )

    releases = fetch_release_notes(client, with_release, config.max_workers)
    report = format_release_notes(releases)
    if report:
        print(report, end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
