"""Loading composer.json / composer.lock documents into plain mappings.

Composer serialises an empty mapping as ``[]`` (PHP arrays), so an empty
list is accepted wherever an object is expected.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from composer_diff.diff.models import LockedPackage, PackageSource
from composer_diff.exceptions import MalformedDocumentError


def load_document(text: str, path: str) -> Dict[str, Any]:
    """Parse *text* as a JSON object. Raises MalformedDocumentError."""
    try:
        document = json.loads(text.strip())
    except json.JSONDecodeError as exc:
        raise MalformedDocumentError(path, f"invalid JSON ({exc})") from exc

    if isinstance(document, list) and not document:
        return {}
    if not isinstance(document, dict):
        raise MalformedDocumentError(path, "top level is not a JSON object")
    return document


def _section(document: Dict[str, Any], key: str, path: str, expected: type):
    value = document.get(key)
    if value is None or (isinstance(value, (list, dict)) and not value):
        return expected()
    if not isinstance(value, expected):
        raise MalformedDocumentError(
            path, f'"{key}" must be a JSON {"object" if expected is dict else "array"}'
        )
    return value


def manifest_section(document: Dict[str, Any], key: str, path: str) -> Dict[str, str]:
    """Return the ``require``-style mapping of package name to constraint."""
    section = _section(document, key, path, dict)
    for name, constraint in section.items():
        if not isinstance(constraint, str):
            raise MalformedDocumentError(
                path, f'constraint for "{name}" in "{key}" is not a string'
            )
    return section


def _parse_source(raw: Any, name: str, path: str) -> Optional[PackageSource]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise MalformedDocumentError(path, f'source of "{name}" is not an object')
    for key in ("type", "url"):
        if not isinstance(raw.get(key), str):
            raise MalformedDocumentError(path, f'source {key} of "{name}" is not a string')
    reference = raw.get("reference")
    if reference is not None and not isinstance(reference, str):
        raise MalformedDocumentError(path, f'source reference of "{name}" is not a string')
    return PackageSource(type=raw["type"], url=raw["url"], reference=reference)


def lock_section(document: Dict[str, Any], key: str, path: str) -> Dict[str, LockedPackage]:
    """Return the locked packages of *key* keyed by name (last one wins)."""
    packages: Dict[str, LockedPackage] = {}
    for record in _section(document, key, path, list):
        if not isinstance(record, dict):
            raise MalformedDocumentError(path, f'entry in "{key}" is not an object')
        name = record.get("name")
        version = record.get("version")
        if not isinstance(name, str) or not isinstance(version, str):
            raise MalformedDocumentError(
                path, f'entry in "{key}" needs string "name" and "version"'
            )
        packages[name] = LockedPackage(
            version=version,
            source=_parse_source(record.get("source"), name, path),
        )
    return packages
