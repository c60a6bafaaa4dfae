"""Local git access via subprocess."""

from composer_diff.exceptions import GitError
from composer_diff.git.adapter import (
    get_origin_url,
    get_repo_root,
    resolve_ref,
    show_file,
)

__all__ = [
    "GitError",
    "get_origin_url",
    "get_repo_root",
    "resolve_ref",
    "show_file",
]
