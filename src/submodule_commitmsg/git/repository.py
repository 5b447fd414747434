"""Repository access through the git executable.

Every query runs a short-lived ``git`` subprocess in the repository's
work tree. History walks stream ``git rev-list`` output so callers can
consume commits lazily.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Iterator

from submodule_commitmsg.config import git_executable

logger = logging.getLogger(__name__)


# Variables that make git ignore the working directory when locating a
# repository. Hooks export them for the superproject.
REPOSITORY_ENV_VARS = (
    "GIT_DIR",
    "GIT_WORK_TREE",
    "GIT_INDEX_FILE",
    "GIT_COMMON_DIR",
    "GIT_OBJECT_DIRECTORY",
    "GIT_ALTERNATE_OBJECT_DIRECTORIES",
)


class GitError(Exception):
    """Base exception for git access failures."""


class RepositoryNotFoundError(GitError):
    """No repository at (or above) the requested path."""


class SubmoduleEnumerationError(GitError):
    """The submodule list of a repository could not be read."""


class ObjectNotFoundError(GitError):
    """A commit id does not name a commit in the repository."""


class AmbiguityResolutionError(GitError):
    """git could not compute a short form for a commit id."""


class RevWalkError(GitError):
    """A history walk could not be set up."""


def git_env() -> dict[str, str]:
    """Return the environment for git subprocesses, minus repository overrides."""
    return {k: v for k, v in os.environ.items() if k not in REPOSITORY_ENV_VARS}


def run_git(args: list[str], cwd: Path | str, text: bool = True) -> subprocess.CompletedProcess:
    """Run a git command and return the result."""
    try:
        return subprocess.run(
            [git_executable()] + args,
            cwd=cwd,
            capture_output=True,
            text=text,
            env=git_env(),
        )
    except FileNotFoundError as e:
        raise GitError(f"git executable not found: {e}") from e
    except NotADirectoryError as e:
        raise GitError(f"not a directory: {cwd}") from e


def _stderr(result: subprocess.CompletedProcess) -> str:
    err = result.stderr
    if isinstance(err, bytes):
        err = err.decode("utf-8", errors="replace")
    return err.strip() or f"git exited with status {result.returncode}"


def discover_repository(path: Path | str = ".") -> Repository:
    """Find the repository containing ``path``, searching upward.

    Raises:
        RepositoryNotFoundError: If ``path`` is not inside a work tree.
    """
    start = Path(path)
    if not start.is_dir():
        raise RepositoryNotFoundError(f"{start}: no such directory")

    result = run_git(["rev-parse", "--show-toplevel"], start)
    if result.returncode != 0:
        raise RepositoryNotFoundError(_stderr(result))
    return Repository(Path(result.stdout.strip()))


class Repository:
    """A git work tree rooted at ``path``."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"Repository({str(self.path)!r})"

    @classmethod
    def open(cls, path: Path | str) -> Repository:
        """Open the repository whose top level is exactly ``path``.

        Unlike :func:`discover_repository` this does not search upward, so
        an uninitialized submodule directory is not mistaken for its
        superproject.
        """
        repo_path = Path(path)
        if not repo_path.is_dir():
            raise RepositoryNotFoundError(f"{repo_path}: no such directory")

        result = run_git(["rev-parse", "--show-toplevel"], repo_path)
        if result.returncode != 0:
            raise RepositoryNotFoundError(_stderr(result))

        toplevel = Path(result.stdout.strip())
        if toplevel.resolve() != repo_path.resolve():
            raise RepositoryNotFoundError(f"{repo_path} is not the top level of a repository")
        return cls(toplevel)

    def git(self, args: list[str], text: bool = True) -> subprocess.CompletedProcess:
        return run_git(args, self.path, text=text)

    def resolve_commit(self, commit_id: str) -> str:
        """Return the full id of the commit named by ``commit_id``."""
        result = self.git(["rev-parse", "--verify", "--quiet", f"{commit_id}^{{commit}}"])
        if result.returncode != 0 or not result.stdout.strip():
            raise ObjectNotFoundError(f"commit {commit_id} not found in {self.path}")
        return result.stdout.strip()

    def short_id(self, commit_id: str) -> str:
        """Return the shortest unambiguous prefix of ``commit_id``."""
        result = self.git(["rev-parse", "--verify", "--quiet", "--short", f"{commit_id}^{{commit}}"])
        if result.returncode != 0:
            raise ObjectNotFoundError(f"commit {commit_id} not found in {self.path}")
        short = result.stdout.strip()
        if not short:
            raise AmbiguityResolutionError(f"no short id for {commit_id} in {self.path}")
        return short

    def find_commit(self, commit_id: str) -> bytes:
        """Return the raw commit object (headers, blank line, message)."""
        result = self.git(["cat-file", "commit", commit_id], text=False)
        if result.returncode != 0:
            raise ObjectNotFoundError(f"commit {commit_id} not found in {self.path}: {_stderr(result)}")
        return result.stdout

    def revwalk(self) -> RevWalk:
        return RevWalk(self)


class RevWalk:
    """Topologically ordered history walk.

    ``push`` adds a starting commit, ``hide`` excludes everything reachable
    from a commit. Iterating yields full commit ids, children before
    parents. Each iteration starts a fresh ``git rev-list`` process.
    """

    def __init__(self, repo: Repository) -> None:
        self.repo = repo
        self._pushed: list[str] = []
        self._hidden: list[str] = []

    def _verify(self, commit_id: str) -> str:
        try:
            return self.repo.resolve_commit(commit_id)
        except ObjectNotFoundError as e:
            raise RevWalkError(str(e)) from e

    def push(self, commit_id: str) -> None:
        self._pushed.append(self._verify(commit_id))

    def hide(self, commit_id: str) -> None:
        self._hidden.append(self._verify(commit_id))

    def __iter__(self) -> Iterator[str]:
        if not self._pushed:
            return

        cmd = [git_executable(), "rev-list", "--topo-order"]
        cmd += self._pushed
        cmd += [f"^{commit_id}" for commit_id in self._hidden]
        cmd.append("--")

        try:
            proc = subprocess.Popen(
                cmd,
                cwd=self.repo.path,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                env=git_env(),
            )
        except FileNotFoundError as e:
            raise GitError(f"git executable not found: {e}") from e

        # Exiting the block closes the pipes and reaps the process, also
        # when the consumer abandons the generator early.
        with proc:
            for line in proc.stdout:
                commit_id = line.strip()
                if commit_id:
                    yield commit_id
            err = proc.stderr.read()

        if proc.returncode != 0:
            logger.warning(f"History walk in {self.repo.path} stopped early: {err.strip()}")
