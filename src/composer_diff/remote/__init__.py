"""Content fetchers — local git checkout and GitHub REST API."""

from composer_diff.remote.github import GitHubClient, GitHubContentFetcher
from composer_diff.remote.local import GitContentFetcher, repository_for

__all__ = [
    "GitContentFetcher",
    "GitHubClient",
    "GitHubContentFetcher",
    "repository_for",
]
