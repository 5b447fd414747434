"""Submodule enumeration for a superproject.

A submodule is known to the superproject either through ``.gitmodules``
or through a gitlink (mode 160000 entry) in the HEAD tree. Both sources
are merged; the result is ordered by path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from submodule_commitmsg.git.repository import (
    Repository,
    SubmoduleEnumerationError,
    run_git,
)

logger = logging.getLogger(__name__)

GITMODULES = ".gitmodules"
UNKNOWN_NAME = "???"


@dataclass(frozen=True)
class Submodule:
    """One submodule entry of a superproject.

    ``head_id`` is the commit recorded in the superproject's HEAD tree,
    ``workdir_id`` the commit checked out in the submodule's work tree.
    Either is None when unknown (not committed yet, not initialized).
    """

    path: str
    superproject: Path
    name: str | None = None
    head_id: str | None = None
    workdir_id: str | None = None

    @property
    def display_name(self) -> str:
        return self.path or self.name or UNKNOWN_NAME

    def open(self) -> Repository:
        """Open the submodule's own repository."""
        return Repository.open(self.superproject / self.path)


def _configured_names(repo: Repository) -> dict[str, str]:
    """Map submodule path → configured name, from .gitmodules."""
    if not (repo.path / GITMODULES).is_file():
        return {}

    result = repo.git([
        "config", "--file", GITMODULES, "-z",
        "--get-regexp", r"^submodule\..*\.path$",
    ])
    # Exit status 1 means no matching keys.
    if result.returncode == 1:
        return {}
    if result.returncode != 0:
        raise SubmoduleEnumerationError(
            f"cannot read {GITMODULES}: {result.stderr.strip()}"
        )

    names = {}
    for record in result.stdout.split("\0"):
        if not record:
            continue
        key, _, path = record.partition("\n")
        name = key[len("submodule."):-len(".path")]
        names[path.strip("/")] = name
    return names


def _recorded_heads(repo: Repository) -> dict[str, str]:
    """Map submodule path → commit id recorded in the HEAD tree."""
    head = repo.git(["rev-parse", "--verify", "--quiet", "HEAD^{commit}"])
    if head.returncode != 0:
        # Unborn branch: nothing recorded yet.
        return {}

    result = repo.git(["ls-tree", "-r", "-z", "--full-tree", "HEAD"])
    if result.returncode != 0:
        raise SubmoduleEnumerationError(
            f"cannot read HEAD tree: {result.stderr.strip()}"
        )

    heads = {}
    for entry in result.stdout.split("\0"):
        if not entry:
            continue
        meta, _, path = entry.partition("\t")
        parts = meta.split()
        if len(parts) == 3 and parts[1] == "commit":
            heads[path] = parts[2]
    return heads


def _workdir_head(path: Path) -> str | None:
    """Return the checked-out commit of a submodule work tree, if any."""
    if not (path / ".git").exists():
        return None
    result = run_git(["rev-parse", "--verify", "--quiet", "HEAD"], path)
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def list_submodules(repo: Repository) -> list[Submodule]:
    """Enumerate the submodules of ``repo``.

    Raises:
        SubmoduleEnumerationError: If .gitmodules or the HEAD tree
            cannot be read.
    """
    names = _configured_names(repo)
    heads = _recorded_heads(repo)

    submodules = []
    for path in sorted(set(names) | set(heads)):
        workdir_id = _workdir_head(repo.path / path)
        logger.debug(f"Submodule {path}: head={heads.get(path)} workdir={workdir_id}")
        submodules.append(Submodule(
            path=path,
            superproject=repo.path,
            name=names.get(path),
            head_id=heads.get(path),
            workdir_id=workdir_id,
        ))
    return submodules
