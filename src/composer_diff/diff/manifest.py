"""composer.json differ — compares declared constraints per section."""

from __future__ import annotations

from typing import Dict, Optional

from loguru import logger

from composer_diff.diff.documents import load_document, manifest_section
from composer_diff.diff.models import (
    ADDED,
    REMOVED,
    UPDATED,
    Change,
    ManifestDiff,
    ManifestDiffEntry,
    Operation,
    Repository,
    Section,
)
from composer_diff.exceptions import BothReferencesEmptyError

MANIFEST_SECTIONS: Dict[Section, str] = {
    Section.PROD: "require",
    Section.DEV: "require-dev",
}


def diff_section(base: Dict[str, str], head: Dict[str, str], section: Section) -> ManifestDiff:
    """Raw diff of one ``require`` mapping, without move detection."""
    changes: ManifestDiff = {}

    for name, constraint in base.items():
        if name not in head:
            changes[name] = ManifestDiffEntry(name, REMOVED, section, constraint, None)
        elif head[name] != constraint:
            changes[name] = ManifestDiffEntry(name, UPDATED, section, constraint, head[name])

    for name, constraint in head.items():
        if name not in base:
            changes[name] = ManifestDiffEntry(name, ADDED, section, None, constraint)

    return changes


def merge_sections(prod: ManifestDiff, dev: ManifestDiff) -> ManifestDiff:
    """Fold the dev raw diff into the prod one.

    A package with changes on both sides moved between sections: an
    addition to dev means prod -> dev, anything else means dev -> prod.
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
        changes[name] = ManifestDiffEntry(
            name=name,
            operation=Operation(Change.UPDATED if base != head else None, moved=True),
            section=Section.DEV if to_dev else Section.PROD,
            base=base,
            head=head,
        )

    return changes


def diff_manifest(
    base_text: str,
    head_text: str,
    *,
    path: str = "composer.json",
    repository: Optional[Repository] = None,
) -> ManifestDiff:
    """Diff two composer.json contents.

    Raises BothReferencesEmptyError when neither side has any content and
    MalformedDocumentError when either side is not a JSON object.
    """
    base_doc = load_document(base_text, path)
    head_doc = load_document(head_text, path)

    if not base_doc and not head_doc:
        raise BothReferencesEmptyError(path, repository)

    if base_text.strip() == head_text.strip():
        logger.debug("{} unchanged, skipping comparison", path)
        return {}

    prod, dev = (
        diff_section(
            manifest_section(base_doc, key, path),
            manifest_section(head_doc, key, path),
            section,
        )
        for section, key in MANIFEST_SECTIONS.items()
    )
    changes = merge_sections(prod, dev)
    logger.debug("{}: {} changed requirement(s)", path, len(changes))
    return changes
