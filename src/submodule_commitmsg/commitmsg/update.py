"""Submodule pointer moves.

``build_update`` turns a name, two endpoint ids and the added/dropped
commit lists into a title fragment and message. ``diff_submodule``
gathers those inputs from a submodule's own repository.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from submodule_commitmsg.commitmsg.commit import (
    CommitSummary,
    short_id_for_commit,
    summarize_commit,
)
from submodule_commitmsg.config import DEFAULT_PLACEHOLDER
from submodule_commitmsg.git.repository import GitError, Repository, RevWalkError
from submodule_commitmsg.git.submodules import Submodule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmoduleUpdate:
    """Title fragment and optional message body for one submodule."""

    name: str
    title: str
    message: str | None = None


def build_update(
    name: str,
    from_id: str,
    to_id: str,
    added: list[CommitSummary],
    dropped: list[CommitSummary],
) -> SubmoduleUpdate:
    """Describe a pointer move from ``from_id`` to ``to_id``.

    The title uses ``..`` for a pure advance and ``...`` as soon as any
    commit was dropped. The message lists added commits (``+``) before
    dropped ones (``-``), each group in the given order, and is None when
    both lists are empty.
    """
    separator = "..." if dropped else ".."
    title = f"{name} ({from_id}{separator}{to_id})"

    lines = [commit.line("+") for commit in added]
    lines += [commit.line("-") for commit in dropped]

    return SubmoduleUpdate(
        name=name,
        title=title,
        message="\n".join(lines) if lines else None,
    )


def _short_id_or_placeholder(repo: Repository, commit_id: str, placeholder: str) -> str:
    try:
        return short_id_for_commit(repo, commit_id)
    except GitError as e:
        logger.warning(f"No short id for {commit_id}: {e}")
        return placeholder


def _walk(repo: Repository, start: str, exclude: str) -> list[CommitSummary]:
    """Summaries of commits reachable from ``start`` but not ``exclude``.

    Raises:
        RevWalkError: If either endpoint cannot seed the walk.
    """
    walk = repo.revwalk()
    walk.hide(exclude)
    walk.push(start)

    commits = []
    try:
        for commit_id in walk:
            try:
                commits.append(summarize_commit(repo, commit_id))
            except GitError as e:
                logger.debug(f"Skipping unreadable commit {commit_id}: {e}")
    except GitError as e:
        logger.warning(f"History walk {exclude}..{start} in {repo.path} failed: {e}")
    return commits


def diff_submodule(
    submodule: Submodule,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> SubmoduleUpdate | None:
    """Describe how a submodule's checkout moved away from its recorded commit.

    Returns None when there is nothing to compare (either endpoint
    unknown), nothing moved, or the history walk cannot be set up. If the
    submodule's repository cannot be opened, the update is still produced
    with placeholder ids and no message.
    """
    name = submodule.display_name
    from_id = submodule.head_id
    to_id = submodule.workdir_id
    if from_id is None or to_id is None:
        logger.debug(f"Skipping {name}: not checked out or not committed")
        return None
    if from_id == to_id:
        return None

    try:
        repo = submodule.open()
    except GitError as e:
        logger.warning(f"Cannot open repository of {name}: {e}")
        return build_update(name, placeholder, placeholder, [], [])

    from_short = _short_id_or_placeholder(repo, from_id, placeholder)
    to_short = _short_id_or_placeholder(repo, to_id, placeholder)

    try:
        added = _walk(repo, to_id, from_id)
        dropped = _walk(repo, from_id, to_id)
    except RevWalkError as e:
        logger.warning(f"Cannot walk history of {name}: {e}")
        return None

    return build_update(name, from_short, to_short, added, dropped)
