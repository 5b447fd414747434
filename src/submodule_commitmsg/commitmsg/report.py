"""Render a batch of submodule updates as one commit message."""

from __future__ import annotations

from submodule_commitmsg.commitmsg.update import SubmoduleUpdate
from submodule_commitmsg.config import DEFAULT_TITLE_PREFIX


def render_report(updates: list[SubmoduleUpdate]) -> tuple[str, str]:
    """Combine updates into a title line and a body.

    The title joins every update's title with ", ". The body holds one
    block per update that has a message, separated by a blank line; each
    block is headed by "<name>:" when the batch has more than one update.
    """
    title = ", ".join(update.title for update in updates)

    multiple = len(updates) > 1
    blocks = []
    for update in updates:
        if update.message is None:
            continue
        if multiple:
            blocks.append(f"{update.name}:\n{update.message}")
        else:
            blocks.append(update.message)

    return title, "\n\n".join(blocks)


def format_commit_message(
    updates: list[SubmoduleUpdate],
    title_prefix: str = DEFAULT_TITLE_PREFIX,
) -> str:
    """Return the full commit message text for a non-empty batch."""
    title, body = render_report(updates)
    message = f"{title_prefix} {title}"
    if body:
        message += f"\n\n{body}"
    return message
