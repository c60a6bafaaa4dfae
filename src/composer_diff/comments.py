"""Comment lifecycle: one pull-request comment per manifest, kept up to date."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from loguru import logger

from composer_diff.diff.models import Repository
from composer_diff.remote.github import GitHubClient

DEFAULT_AUTHOR = "github-actions[bot]"


class CommentAction(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    NONE = "none"


def comment_marker(path: str) -> str:
    """Hidden marker identifying the comment that belongs to *path*."""
    return f"<!-- composer-rich-diff:{path} -->\n\n"


async def find_comment_id(
    client: GitHubClient,
    repository: Repository,
    number: int,
    marker: str,
    author: str = DEFAULT_AUTHOR,
) -> Optional[int]:
    """Return the id of the first comment by *author* starting with *marker*."""
    for comment in await client.list_comments(repository, number):
        login = (comment.get("user") or {}).get("login")
        if login == author and (comment.get("body") or "").startswith(marker):
            return comment["id"]
    return None


async def sync_comment(
    client: GitHubClient,
    repository: Repository,
    number: int,
    path: str,
    body: Optional[str],
    author: str = DEFAULT_AUTHOR,
) -> CommentAction:
    """Create, update or delete the diff comment for *path*.

    A *body* of None means there is nothing to report: an existing comment
    is deleted, otherwise nothing happens.
    """
    marker = comment_marker(path)
    comment_id = await find_comment_id(client, repository, number, marker, author)

    if body is None:
        if comment_id is None:
            return CommentAction.NONE
        await client.delete_comment(repository, comment_id)
        logger.info("Deleted comment {} on {}#{}", comment_id, repository, number)
        return CommentAction.DELETED

    if comment_id is None:
        comment_id = await client.create_comment(repository, number, marker + body)
        logger.info("Created comment {} on {}#{}", comment_id, repository, number)
        return CommentAction.CREATED

    await client.update_comment(repository, comment_id, marker + body)
    logger.info("Updated comment {} on {}#{}", comment_id, repository, number)
    return CommentAction.UPDATED
