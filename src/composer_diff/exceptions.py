"""Exception hierarchy shared by the differ, fetchers and CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from composer_diff.diff.models import Repository


class ComposerDiffError(Exception):
    """Base exception for all composer-diff errors."""


class ConfigError(ComposerDiffError):
    """Raised when config is malformed or unreadable."""


class MalformedDocumentError(ComposerDiffError, ValueError):
    """Raised when a composer.json / composer.lock cannot be parsed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Malformed document {path}: {reason}")
        self.path = path
        self.reason = reason


class BothReferencesEmptyError(ComposerDiffError):
    """The manifest is empty on both references.

    Either the file really is empty or missing on both sides, or the
    repository itself does not exist; the two cannot be told apart.
    """

    def __init__(self, path: str, repository: Optional[Repository]) -> None:
        super().__init__(
            f"{path} was empty on both references "
            f"(or repository, {repository}, does not exist)"
        )
        self.path = path
        self.repository = repository


class FetchError(ComposerDiffError):
    """Raised when file content cannot be retrieved."""


class ContentNotFoundError(FetchError):
    """The requested path does not exist at the requested reference."""

    def __init__(self, path: str, ref: str) -> None:
        super().__init__(f"{path} not found at {ref}")
        self.path = path
        self.ref = ref


class GitError(FetchError):
    """Raised when git is unavailable or returns an unexpected error."""


class GitHubError(FetchError):
    """Raised on a non-404 GitHub API failure."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
