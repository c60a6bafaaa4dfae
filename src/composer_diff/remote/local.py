"""Content fetcher backed by a local git checkout."""

from __future__ import annotations

import asyncio
import re
from pathlib import Path

from loguru import logger

from composer_diff.diff.models import Repository
from composer_diff.git.adapter import get_origin_url, show_file

_REMOTE_SLUG_RE = re.compile(r"[:/]([^/:]+)/([^/]+?)(?:\.git)?/?$")


def repository_for(repo_root: Path) -> Repository:
    """Best-effort coordinate for a checkout, taken from its ``origin`` remote."""
    url = get_origin_url(repo_root)
    if url:
        m = _REMOTE_SLUG_RE.search(url)
        if m:
            return Repository(owner=m.group(1), name=m.group(2))
    return Repository(owner="local", name=repo_root.name)


class GitContentFetcher:
    """Read files with ``git show <ref>:<path>`` in *repo_root*.

    The repository coordinate is only used for log messages; content always
    comes from the checkout this fetcher was built for.
    """

    def __init__(self, repo_root: Path, timeout: int = 30) -> None:
        self.repo_root = repo_root
        self.timeout = timeout

    async def fetch(self, repository: Repository, path: str, ref: str) -> str:
        logger.debug("git show {}:{} ({})", ref, path, repository)
        return await asyncio.to_thread(show_file, self.repo_root, path, ref, self.timeout)
