"""Commit display records."""

from __future__ import annotations

from dataclasses import dataclass

from submodule_commitmsg.git.repository import Repository


@dataclass(frozen=True)
class CommitSummary:
    """Short id plus the first line of the commit message, if any."""

    id: str
    title: str | None = None

    def line(self, sign: str) -> str:
        if self.title is None:
            return f"{sign}{self.id}"
        return f"{sign}{self.id} {self.title}"


def short_id_for_commit(repo: Repository, commit_id: str) -> str:
    """Return the shortest unambiguous prefix of a commit id in ``repo``.

    A short id is only meaningful inside the repository that owns the
    commit, so pass the submodule's repository, not the superproject.

    Raises:
        ObjectNotFoundError: If ``commit_id`` is not a commit in ``repo``.
        AmbiguityResolutionError: If git cannot abbreviate it.
    """
    full_id = repo.resolve_commit(commit_id)
    return repo.short_id(full_id)


def commit_title(raw: bytes) -> str | None:
    """Extract the first message line from a raw commit object.

    Returns None for an empty message or one that is not valid UTF-8.
    """
    _, sep, message = raw.partition(b"\n\n")
    if not sep:
        return None
    try:
        text = message.decode("utf-8")
    except UnicodeDecodeError:
        return None
    first = text.split("\n", 1)[0].rstrip("\r")
    return first or None


def summarize_commit(repo: Repository, commit_id: str) -> CommitSummary:
    """Build the display record for one commit.

    Raises:
        GitError: If the commit cannot be loaded or abbreviated.
    """
    raw = repo.find_commit(commit_id)
    return CommitSummary(repo.short_id(commit_id), commit_title(raw))
