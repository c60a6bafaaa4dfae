"""JSON reporter for CI pipelines and scripting."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from composer_diff import __version__
from composer_diff.diff.models import ComposerDiff, LockedPackage, Operation
from composer_diff.output.common import sorted_entries


def _operation(operation: Operation) -> Dict[str, Any]:
    return {
        "change": operation.change.value if operation.change else None,
        "moved": operation.moved,
    }


def _package(pkg: Optional[LockedPackage]) -> Optional[Dict[str, Any]]:
    if pkg is None:
        return None
    return {
        "version": pkg.version,
        "source": (
            {"type": pkg.source.type, "url": pkg.source.url, "reference": pkg.source.reference}
            if pkg.source
            else None
        ),
    }


def to_dict(
    diff: ComposerDiff,
    *,
    path: Optional[str] = None,
    base_ref: Optional[str] = None,
    head_ref: Optional[str] = None,
) -> Dict[str, Any]:
    """Convert ComposerDiff to a JSON-serialisable dict."""
    manifest: List[Dict[str, Any]] = [
        {
            "name": e.name,
            "section": e.section.value,
            "operation": _operation(e.operation),
            "base": e.base,
            "head": e.head,
        }
        for e in sorted_entries(diff.manifest.values())
    ]
    lock: List[Dict[str, Any]] = [
        {
            "name": e.name,
            "section": e.section.value,
            "direct": e.direct,
            "operation": _operation(e.operation),
            "base": _package(e.base),
            "head": _package(e.head),
            "link": e.link,
        }
        for e in sorted_entries(diff.lock.values())
    ]

    return {
        "version": __version__,
        **({"path": path} if path else {}),
        **({"base": base_ref} if base_ref else {}),
        **({"head": head_ref} if head_ref else {}),
        "changed": not diff.is_empty,
        "manifest": manifest,
        "lock": lock,
    }


def render(diff: ComposerDiff, **kwargs: Any) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(diff, **kwargs), indent=2)
