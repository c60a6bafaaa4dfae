"""GitHub REST client — raw file contents and issue comments."""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from loguru import logger

from composer_diff import __version__
from composer_diff.diff.models import Repository
from composer_diff.exceptions import ContentNotFoundError, GitHubError, MalformedDocumentError

DEFAULT_API_URL = "https://api.github.com"
RAW_MEDIA_TYPE = "application/vnd.github.raw"
JSON_MEDIA_TYPE = "application/vnd.github+json"


class GitHubClient:
    """Thin async wrapper over the handful of endpoints composer-diff needs.

    Usage::

        async with GitHubClient(token) as client:
            text = await client.get_content(repo, "composer.json", "main")
    """

    def __init__(
        self,
        token: Optional[str] = None,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        headers = {
            "Accept": JSON_MEDIA_TYPE,
            "User-Agent": f"composer-rich-diff/{__version__}",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=api_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            raise GitHubError(f"Timeout on {method} {url}") from exc
        except httpx.HTTPError as exc:
            raise GitHubError(f"Network error on {method} {url}: {exc}") from exc

        logger.debug("{} {} -> {}", method, url, response.status_code)
        if response.is_error and response.status_code != 404:
            raise GitHubError(
                f"GitHub API error on {method} {url}: "
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )
        return response

    # -- contents ---------------------------------------------------------

    async def get_content(self, repository: Repository, path: str, ref: str) -> str:
        """Return the raw content of *path* at *ref*."""
        response = await self._request(
            "GET",
            f"/repos/{repository.owner}/{repository.name}/contents/{quote(path.lstrip('/'), safe='/')}",
            params={"ref": ref},
            headers={"Accept": RAW_MEDIA_TYPE},
        )
        if response.status_code == 404:
            raise ContentNotFoundError(path, ref)
        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedDocumentError(path, f"not valid UTF-8 at {ref}") from exc

    # -- issue comments ---------------------------------------------------

    def _comments_url(self, repository: Repository) -> str:
        return f"/repos/{repository.owner}/{repository.name}/issues/comments"

    async def list_comments(self, repository: Repository, number: int) -> List[Dict[str, Any]]:
        """Return every comment on issue / pull request *number*."""
        comments: List[Dict[str, Any]] = []
        page = 1
        while True:
            response = await self._request(
                "GET",
                f"/repos/{repository.owner}/{repository.name}/issues/{number}/comments",
                params={"per_page": 100, "page": page},
            )
            if response.status_code == 404:
                raise GitHubError(f"Issue #{number} not found in {repository}", status_code=404)
            batch = response.json()
            comments.extend(batch)
            if len(batch) < 100:
                return comments
            page += 1

    async def create_comment(self, repository: Repository, number: int, body: str) -> int:
        response = await self._request(
            "POST",
            f"/repos/{repository.owner}/{repository.name}/issues/{number}/comments",
            json={"body": body},
        )
        if response.status_code == 404:
            raise GitHubError(f"Issue #{number} not found in {repository}", status_code=404)
        return response.json()["id"]

    async def update_comment(self, repository: Repository, comment_id: int, body: str) -> None:
        response = await self._request(
            "PATCH", f"{self._comments_url(repository)}/{comment_id}", json={"body": body}
        )
        if response.status_code == 404:
            raise GitHubError(f"Comment {comment_id} not found in {repository}", status_code=404)

    async def delete_comment(self, repository: Repository, comment_id: int) -> None:
        # Already gone is as good as deleted.
        await self._request("DELETE", f"{self._comments_url(repository)}/{comment_id}")


class GitHubContentFetcher:
    """ContentFetcher backed by the GitHub contents API."""

    def __init__(self, client: GitHubClient) -> None:
        self.client = client

    async def fetch(self, repository: Repository, path: str, ref: str) -> str:
        return await self.client.get_content(repository, path, ref)
