"""Helpers shared by the renderers."""

from __future__ import annotations

from typing import Iterable, List, TypeVar, Union

from composer_diff.diff.models import LockDiffEntry, ManifestDiffEntry, Operation, Section

Entry = TypeVar("Entry", bound=Union[ManifestDiffEntry, LockDiffEntry])


def sorted_entries(entries: Iterable[Entry]) -> List[Entry]:
    """Prod before dev, then alphabetical by package name."""
    return sorted(entries, key=lambda e: (e.section is not Section.PROD, e.name))


def operation_label(operation: Operation, *, added: str = "Added", moved: str = "Moved") -> str:
    """Human label, e.g. ``Updated & Moved``."""
    if operation.added:
        text = added
    elif operation.removed:
        text = "Removed"
    elif operation.updated:
        text = "Updated"
    else:
        text = ""

    if operation.moved:
        text = f"{text} & {moved}" if text else moved
    return text
