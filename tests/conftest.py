"""Shared test fixtures for submodule-commitmsg.

Repositories are built with the real git executable in tmp_path. HOME
points at tmp_path so user configuration (signing, hooks, default branch)
cannot leak into the tests.
"""

import subprocess
from pathlib import Path

import pytest


def git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def commit(repo: Path, message: str) -> str:
    """Create an empty commit and return its full id."""
    git(repo, "commit", "--allow-empty", "-m", message)
    return git(repo, "rev-parse", "HEAD")


def record(superproject: Path, *paths: str) -> str:
    """Commit the current checkouts of ``paths`` in the superproject."""
    git(superproject, "add", *paths)
    return commit(superproject, f"record {', '.join(paths)}")


@pytest.fixture(autouse=True)
def git_env(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "t@t")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "t@t")
    monkeypatch.delenv("SUBMODULE_COMMITMSG_CONFIG", raising=False)
    monkeypatch.delenv("SUBMODULE_COMMITMSG_GIT", raising=False)
    for var in ("GIT_DIR", "GIT_WORK_TREE", "GIT_INDEX_FILE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def superproject(tmp_path):
    """A superproject with two checked-out submodules, 'lib' and 'vendor/tool'.

    Each submodule has a single commit, recorded in the superproject's HEAD.
    """
    root = tmp_path / "super"
    root.mkdir()
    git(root, "init", "-b", "main")

    for path in ("lib", "vendor/tool"):
        sub = root / path
        sub.mkdir(parents=True)
        git(sub, "init", "-b", "main")
        commit(sub, f"initial {path}")
        git(root, "config", "--file", ".gitmodules", f"submodule.{path}.path", path)
        git(root, "config", "--file", ".gitmodules", f"submodule.{path}.url", f"./{path}")

    record(root, ".gitmodules", "lib", "vendor/tool")
    return root


@pytest.fixture
def broken_git(tmp_path, monkeypatch):
    """Install a git wrapper that misbehaves for one subcommand.

    Returns a function taking the subcommand name and the shell snippet to
    run instead of it; every other invocation goes to the real git.
    """
    def install(subcommand: str, body: str) -> Path:
        script = tmp_path / f"git-broken-{subcommand}"
        script.write_text(
            "#!/bin/sh\n"
            f'if [ "$1" = "{subcommand}" ]; then\n'
            f"{body}\n"
            "fi\n"
            'exec git "$@"\n'
        )
        script.chmod(0o755)
        monkeypatch.setenv("SUBMODULE_COMMITMSG_GIT", str(script))
        return script

    return install
