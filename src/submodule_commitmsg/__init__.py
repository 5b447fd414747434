"""submodule-commitmsg — commit messages for submodule pointer updates."""

import logging

from submodule_commitmsg.commitmsg import (
    CommitSummary,
    SubmoduleUpdate,
    build_update,
    diff_submodule,
    format_commit_message,
    render_report,
    short_id_for_commit,
    summarize_commit,
)
from submodule_commitmsg.config import Config, ConfigError, load_config
from submodule_commitmsg.git import (
    GitError,
    Repository,
    Submodule,
    discover_repository,
    list_submodules,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CommitSummary",
    "Config",
    "ConfigError",
    "GitError",
    "Repository",
    "Submodule",
    "SubmoduleUpdate",
    "build_update",
    "diff_submodule",
    "discover_repository",
    "format_commit_message",
    "list_submodules",
    "load_config",
    "render_report",
    "short_id_for_commit",
    "summarize_commit",
]
