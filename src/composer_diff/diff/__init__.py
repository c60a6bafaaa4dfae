"""Diff engine — models, manifest / lock differs, link generation, orchestrator."""

from composer_diff.diff.comparison import ContentFetcher, generate_diff, lock_path_for
from composer_diff.diff.links import generate_online_diff_link, parse_github_url
from composer_diff.diff.lock import diff_lock
from composer_diff.diff.manifest import diff_manifest
from composer_diff.diff.models import (
    Change,
    ComposerDiff,
    LockDiffEntry,
    LockedPackage,
    ManifestDiffEntry,
    Operation,
    PackageSource,
    Repository,
    Section,
)

__all__ = [
    "Change",
    "ComposerDiff",
    "ContentFetcher",
    "LockDiffEntry",
    "LockedPackage",
    "ManifestDiffEntry",
    "Operation",
    "PackageSource",
    "Repository",
    "Section",
    "diff_lock",
    "diff_manifest",
    "generate_diff",
    "generate_online_diff_link",
    "lock_path_for",
    "parse_github_url",
]
