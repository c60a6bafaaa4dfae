"""GitHub-flavoured markdown report, suitable for a pull-request comment."""

from __future__ import annotations

import html
from typing import List, Optional

from composer_diff.diff.models import ComposerDiff
from composer_diff.output.common import operation_label, sorted_entries

MOVED_FOOTNOTE = (
    "[^Moved]: Dependency was moved from the non-dev section to dev section or vice versa."
)


def inline_code(content: Optional[str]) -> str:
    """Inline code that survives inside a table cell.

    GFM ends a cell at any pipe, even inside backticks, so content holding
    a pipe is rendered as an escaped ``<code>`` element instead.
    """
    if content is None:
        return ""
    if "|" in content:
        escaped = html.escape(content, quote=False).replace('"', "&quot;").replace("|", "&#124;")
        return f"<code>{escaped}</code>"
    return f"`{content}`"


def _operation_text(operation) -> str:
    return operation_label(operation, added="**Added**", moved="Moved[^Moved]")


def render(path: str, base_ref: str, head_ref: str, diff: ComposerDiff) -> str:
    """Return the markdown report for *diff* of *path*."""
    lines: List[str] = [f"## Changes to `{path}`"]

    if diff.manifest:
        lines.append("### Changes to requirements")
        lines.append("| Package | Section | Operation | Base Constraint | Head Constraint |")
        lines.append("| ------- | ------- | --------- | --------------- | --------------- |")
        for entry in sorted_entries(diff.manifest.values()):
            row = [
                inline_code(entry.name),
                entry.section.label,
                _operation_text(entry.operation),
                "" if entry.operation.added else inline_code(entry.base),
                "" if entry.operation.removed else inline_code(entry.head),
            ]
            lines.append("| " + " | ".join(row) + " |")

    if diff.lock:
        lines.append("### Changes to locked packages")
        lines.append(
            "| Package | Section | Direct | Operation | Base Version | Head Version | Link |"
        )
        lines.append(
            "| ------- | ------- | ------ | --------- | ------------ | ------------ | ---- |"
        )
        for entry in sorted_entries(diff.lock.values()):
            row = [
                f"`{entry.name}`",
                entry.section.label,
                "Yes" if entry.direct else "No",
                _operation_text(entry.operation),
                "Absent" if entry.base is None else f"`{entry.base.version}`",
                "Absent" if entry.head is None else f"`{entry.head.version}`",
                f"[Diff]({entry.link})" if entry.operation.updated and entry.link else "",
            ]
            lines.append("| " + " | ".join(row) + " |")

    lines.extend([
        "",
        "---",
        f"Generated using {base_ref} and {head_ref}",
        "",
        MOVED_FOOTNOTE,
    ])
    return "\n".join(lines)
