"""Command-line entry point.

Usage:
    submodule-commitmsg [-C <path>] [-v] [<path-or-name> ...]

Prints a commit message describing every submodule whose checked-out
commit differs from the one recorded in the superproject. Positional
arguments restrict the report to submodules with exactly that path (or
name, for submodules without one).
"""

import argparse
import logging
import sys

from submodule_commitmsg.commitmsg import SubmoduleUpdate, diff_submodule, format_commit_message
from submodule_commitmsg.config import Config, ConfigError, load_config
from submodule_commitmsg.git import (
    GitError,
    Submodule,
    discover_repository,
    list_submodules,
)

PROG = "submodule-commitmsg"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Write a commit message summarizing submodule pointer changes",
    )
    parser.add_argument(
        "-C", dest="directory", default=".",
        help="Look for the repository starting at this directory",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Log diagnostics to stderr (repeat for debug output)",
    )
    parser.add_argument(
        "filters", nargs="*", metavar="path-or-name",
        help="Only report these submodules",
    )
    return parser


def _configure_logging(verbosity: int) -> None:
    logger = logging.getLogger("submodule_commitmsg")
    logger.handlers.clear()
    logger.propagate = False

    if verbosity <= 0:
        logger.addHandler(logging.NullHandler())
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbosity > 1 else logging.WARNING)


def collect_updates(
    submodules: list[Submodule],
    filters: list[str],
    config: Config,
) -> list[SubmoduleUpdate]:
    """Diff the selected submodules, in enumeration order."""
    updates = []
    for submodule in submodules:
        name = submodule.display_name
        if filters and name not in filters:
            continue
        if name in config.exclude:
            continue
        update = diff_submodule(submodule, placeholder=config.placeholder)
        if update is not None:
            updates.append(update)
    return updates


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        repo = discover_repository(args.directory)
    except GitError as e:
        print(f"{parser.prog}: no repository found: {e}", file=sys.stderr)
        return 1

    try:
        config = load_config(repo.path)
    except ConfigError as e:
        print(f"{parser.prog}: ignoring invalid configuration: {e}", file=sys.stderr)
        config = Config()

    try:
        submodules = list_submodules(repo)
    except GitError as e:
        print(f"{parser.prog}: failed to enumerate submodules: {e}", file=sys.stderr)
        return 1

    updates = collect_updates(submodules, args.filters, config)
    if not updates:
        return 0

    print(format_commit_message(updates, title_prefix=config.title_prefix))
    return 0


if __name__ == "__main__":
    sys.exit(main())
