"""Data models for manifest and lock diffs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class Section(str, Enum):
    PROD = "prod"
    DEV = "dev"

    @property
    def label(self) -> str:
        return "Prod" if self is Section.PROD else "Dev"


class Change(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    UPDATED = "updated"


@dataclass(frozen=True, slots=True)
class Operation:
    """What happened to a package between base and head.

    ``moved`` may only be combined with an update (or stand alone); a
    package cannot be added or removed and moved at the same time.
    """

    change: Optional[Change] = None
    moved: bool = False

    def __post_init__(self) -> None:
        if self.change is None and not self.moved:
            raise ValueError("operation must describe at least one change")
        if self.moved and self.change in (Change.ADDED, Change.REMOVED):
            raise ValueError(f"a moved package cannot also be {self.change.value}")

    @property
    def added(self) -> bool:
        return self.change is Change.ADDED

    @property
    def removed(self) -> bool:
        return self.change is Change.REMOVED

    @property
    def updated(self) -> bool:
        return self.change is Change.UPDATED

    def __str__(self) -> str:
        parts = [self.change.value] if self.change else []
        if self.moved:
            parts.append("moved")
        return "+".join(parts)


ADDED = Operation(Change.ADDED)
REMOVED = Operation(Change.REMOVED)
UPDATED = Operation(Change.UPDATED)
MOVED = Operation(moved=True)
MOVED_UPDATED = Operation(Change.UPDATED, moved=True)


@dataclass(frozen=True, slots=True)
class Repository:
    """Repository coordinate, written ``owner/name``."""

    owner: str
    name: str

    @classmethod
    def parse(cls, slug: str) -> "Repository":
        owner, sep, name = slug.strip().strip("/").partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError(f"Expected OWNER/NAME, got {slug!r}")
        return cls(owner=owner, name=name)

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True, slots=True)
class PackageSource:
    """Where a locked package was resolved from."""

    type: str
    url: str
    reference: Optional[str]


@dataclass(frozen=True, slots=True)
class LockedPackage:
    """A resolved package's pinned identity."""

    version: str
    source: Optional[PackageSource] = None  # path repositories carry none


@dataclass(frozen=True, slots=True)
class ManifestDiffEntry:
    name: str
    operation: Operation
    section: Section  # most recent section the dependency lives in
    base: Optional[str]  # constraint
    head: Optional[str]  # constraint


@dataclass(frozen=True, slots=True)
class LockDiffEntry:
    name: str
    operation: Operation
    section: Section
    base: Optional[LockedPackage]
    head: Optional[LockedPackage]
    direct: bool = False
    link: Optional[str] = None


ManifestDiff = Dict[str, ManifestDiffEntry]
LockDiff = Dict[str, LockDiffEntry]


@dataclass(frozen=True)
class ComposerDiff:
    """Complete result of comparing two references."""

    manifest: ManifestDiff = field(default_factory=dict)
    lock: LockDiff = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.manifest and not self.lock
