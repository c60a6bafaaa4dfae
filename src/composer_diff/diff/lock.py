"""composer.lock differ — compares resolved packages per section."""

from __future__ import annotations

from typing import Dict

from loguru import logger

from composer_diff.diff.documents import load_document, lock_section
from composer_diff.diff.links import generate_online_diff_link
from composer_diff.diff.models import (
    ADDED,
    REMOVED,
    UPDATED,
    Change,
    LockDiff,
    LockDiffEntry,
    LockedPackage,
    Operation,
    Section,
)

LOCK_SECTIONS: Dict[Section, str] = {
    Section.PROD: "packages",
    Section.DEV: "packages-dev",
}


def diff_section(
    base: Dict[str, LockedPackage],
    head: Dict[str, LockedPackage],
    section: Section,
) -> LockDiff:
    """Raw diff of one package list. Only versions decide whether a package changed."""
    changes: LockDiff = {}

    for name, base_pkg in base.items():
        head_pkg = head.get(name)
        if head_pkg is None:
            changes[name] = LockDiffEntry(name, REMOVED, section, base_pkg, None)
        elif head_pkg.version != base_pkg.version:
            changes[name] = LockDiffEntry(
                name,
                UPDATED,
                section,
                base_pkg,
                head_pkg,
                link=generate_online_diff_link(base_pkg.source, head_pkg.source),
            )

    for name, head_pkg in head.items():
        if name not in base:
            changes[name] = LockDiffEntry(name, ADDED, section, None, head_pkg)

    return changes


def merge_sections(prod: LockDiff, dev: LockDiff) -> LockDiff:
    """Fold the dev raw diff into the prod one (see manifest.merge_sections).

    Unlike the per-section pass, a moved package counts as updated when any
    part of its locked record differs, source included.
    """
    changes = dict(prod)

    for name, dev_entry in dev.items():
        prod_entry = changes.get(name)
        if prod_entry is None:
            changes[name] = dev_entry
            continue

        to_dev = dev_entry.operation.change is Change.ADDED
        base = prod_entry.base if to_dev else dev_entry.base
        head = dev_entry.head if to_dev else prod_entry.head
        updated = base != head
        changes[name] = LockDiffEntry(
            name=name,
            operation=Operation(Change.UPDATED if updated else None, moved=True),
            section=Section.DEV if to_dev else Section.PROD,
            base=base,
            head=head,
            link=(
                generate_online_diff_link(base.source, head.source)
                if updated and base is not None and head is not None
                else None
            ),
        )

    return changes


def diff_lock(base_text: str, head_text: str, *, path: str = "composer.lock") -> LockDiff:
    """Diff two composer.lock contents. ``direct`` is left False on every entry."""
    if base_text.strip() == head_text.strip():
        logger.debug("{} unchanged, skipping comparison", path)
        return {}

    base_doc = load_document(base_text, path)
    head_doc = load_document(head_text, path)

    prod, dev = (
        diff_section(
            lock_section(base_doc, key, path),
            lock_section(head_doc, key, path),
            section,
        )
        for section, key in LOCK_SECTIONS.items()
    )
    changes = merge_sections(prod, dev)
    logger.debug("{}: {} changed package(s)", path, len(changes))
    return changes
