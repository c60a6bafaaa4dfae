"""Comparison orchestrator — diffs manifest and lock concurrently.

Both branches fetch their base and head content concurrently as well. A
missing file on one reference is read as an empty document, so packages
can be diffed against a reference where composer.json does not exist yet.
"""

from __future__ import annotations

import asyncio
import dataclasses
import re
from typing import Protocol, Tuple, runtime_checkable

from loguru import logger

from composer_diff.diff.lock import diff_lock
from composer_diff.diff.manifest import diff_manifest
from composer_diff.diff.models import ComposerDiff, LockDiff, ManifestDiff, Repository
from composer_diff.exceptions import ContentNotFoundError

EMPTY_DOCUMENT = "{}"

_JSON_SUFFIX_RE = re.compile(r"\.json$")


@runtime_checkable
class ContentFetcher(Protocol):
    """Return the raw text of *path* at *ref*.

    Implementations raise ContentNotFoundError when the path does not exist
    at that reference and FetchError (or a subclass) for any other failure.
    """

    async def fetch(self, repository: Repository, path: str, ref: str) -> str:
        ...


def lock_path_for(manifest_path: str) -> str:
    """``composer.json`` -> ``composer.lock``."""
    return _JSON_SUFFIX_RE.sub(".lock", manifest_path)


async def _fetch_or_empty(
    fetcher: ContentFetcher, repository: Repository, path: str, ref: str
) -> str:
    try:
        return await fetcher.fetch(repository, path, ref)
    except ContentNotFoundError:
        logger.debug("{} not found at {}, using empty document", path, ref)
        return EMPTY_DOCUMENT


async def _fetch_pair(
    fetcher: ContentFetcher, repository: Repository, path: str, base_ref: str, head_ref: str
) -> Tuple[str, str]:
    base, head = await asyncio.gather(
        _fetch_or_empty(fetcher, repository, path, base_ref),
        _fetch_or_empty(fetcher, repository, path, head_ref),
    )
    return base, head


async def _manifest_branch(
    fetcher: ContentFetcher, repository: Repository, path: str, base_ref: str, head_ref: str
) -> ManifestDiff:
    base, head = await _fetch_pair(fetcher, repository, path, base_ref, head_ref)
    return diff_manifest(base, head, path=path, repository=repository)


async def _lock_branch(
    fetcher: ContentFetcher, repository: Repository, path: str, base_ref: str, head_ref: str
) -> LockDiff:
    base, head = await _fetch_pair(fetcher, repository, path, base_ref, head_ref)
    return diff_lock(base, head, path=path)


async def generate_diff(
    fetcher: ContentFetcher,
    repository: Repository,
    base_ref: str,
    head_ref: str,
    manifest_path: str,
) -> ComposerDiff:
    """Diff *manifest_path* and its lock file between *base_ref* and *head_ref*.

    Any error other than a missing file aborts the whole comparison.
    """
    lock_path = lock_path_for(manifest_path)
    logger.info(
        "Comparing {} and {} in {} between {} and {}",
        manifest_path, lock_path, repository, base_ref, head_ref,
    )

    manifest, lock = await asyncio.gather(
        _manifest_branch(fetcher, repository, manifest_path, base_ref, head_ref),
        _lock_branch(fetcher, repository, lock_path, base_ref, head_ref),
    )

    lock = {
        name: dataclasses.replace(entry, direct=name in manifest)
        for name, entry in lock.items()
    }
    return ComposerDiff(manifest=manifest, lock=lock)
