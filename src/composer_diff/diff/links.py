"""Online diff links between two locked package sources.

Only GitHub-hosted git sources are recognised; any other host yields no link.
"""

from __future__ import annotations

import re
from typing import Optional

from composer_diff.diff.models import PackageSource

_GITHUB_URL_RE = re.compile(r"^(?:https?|git)://github\.com/([^/]+?/[^/]+?)(?:\.git)?$")


def parse_github_url(url: str) -> Optional[str]:
    """Extract ``owner/repo`` from a GitHub clone URL, or None."""
    m = _GITHUB_URL_RE.match(url)
    return m.group(1) if m else None


def generate_online_diff_link(
    a: Optional[PackageSource],
    b: Optional[PackageSource],
) -> Optional[str]:
    """Return a GitHub compare URL from *a* to *b*, or None."""
    if a is None or b is None or a is b:
        return None
    if a.type != "git" or b.type != "git":
        return None
    if a.reference is None or b.reference is None:
        return None

    slug = parse_github_url(a.url)
    if slug is None or slug != parse_github_url(b.url):
        return None

    return f"https://github.com/{slug}/compare/{a.reference}...{b.reference}"
