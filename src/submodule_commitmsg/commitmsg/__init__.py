"""Commit message synthesis for submodule pointer moves."""

from submodule_commitmsg.commitmsg.commit import (
    CommitSummary,
    short_id_for_commit,
    summarize_commit,
)
from submodule_commitmsg.commitmsg.report import format_commit_message, render_report
from submodule_commitmsg.commitmsg.update import (
    SubmoduleUpdate,
    build_update,
    diff_submodule,
)

__all__ = [
    "CommitSummary",
    "SubmoduleUpdate",
    "build_update",
    "diff_submodule",
    "format_commit_message",
    "render_report",
    "short_id_for_commit",
    "summarize_commit",
]
