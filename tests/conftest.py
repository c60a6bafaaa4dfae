"""Shared test fixtures — document builders, a fake fetcher, temp git repos."""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import pytest
from loguru import logger

from composer_diff.diff.models import Repository
from composer_diff.exceptions import ContentNotFoundError


def _git(cwd: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=cwd, capture_output=True, check=True)


def build_manifest(
    require: Optional[Dict[str, str]] = None,
    require_dev: Optional[Dict[str, str]] = None,
) -> str:
    doc: dict = {"name": "acme/app"}
    if require is not None:
        doc["require"] = require
    if require_dev is not None:
        doc["require-dev"] = require_dev
    return json.dumps(doc, indent=4)


def build_package(
    name: str,
    version: str,
    reference: Optional[str] = None,
    url: Optional[str] = None,
    type: str = "git",
) -> dict:
    return {
        "name": name,
        "version": version,
        "source": {
            "type": type,
            "url": url or f"https://github.com/{name}.git",
            "reference": reference or f"ref-{version}",
        },
    }


def build_lock(packages: Optional[List[dict]] = None, packages_dev: Optional[List[dict]] = None) -> str:
    return json.dumps(
        {
            "content-hash": "abc",
            "packages": packages or [],
            "packages-dev": packages_dev or [],
        },
        indent=4,
    )


class FakeFetcher:
    """In-memory ContentFetcher keyed by (path, ref).

    Values may be text or an exception instance to raise. Unknown keys
    raise ContentNotFoundError like a 404.
    """

    def __init__(self, files: Dict[Tuple[str, str], Union[str, Exception]]) -> None:
        self.files = files
        self.calls: List[Tuple[Repository, str, str]] = []

    async def fetch(self, repository: Repository, path: str, ref: str) -> str:
        self.calls.append((repository, path, ref))
        value = self.files.get((path, ref))
        if value is None:
            raise ContentNotFoundError(path, ref)
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def repository() -> Repository:
    return Repository(owner="acme", name="app")


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with one commit."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    _git(tmp_path, "config", "user.email", "test@test.com")
    _git(tmp_path, "config", "user.name", "Test")
    _git(tmp_path, "config", "commit.gpgsign", "false")
    (tmp_path / "README.md").write_text("# Test\n")
    _git(tmp_path, "add", ".")
    _git(tmp_path, "commit", "-m", "init")
    return tmp_path


@pytest.fixture
def composer_repo(tmp_git_repo: Path) -> Path:
    """Repo tagged ``base`` and ``head`` with composer.json / composer.lock changes.

    Between the tags ``symfony/console`` is bumped, ``phpunit/phpunit`` is
    added to require-dev and the transitive ``psr/log`` is updated.
    """
    repo = tmp_git_repo
    (repo / "composer.json").write_text(build_manifest(
        require={"php": ">=8.1", "symfony/console": "^6.0"},
    ))
    (repo / "composer.lock").write_text(build_lock(
        packages=[
            build_package("symfony/console", "v6.0.0", "aaa", "https://github.com/symfony/console.git"),
            build_package("psr/log", "1.1.4", "p1", "https://github.com/php-fig/log.git"),
        ],
    ))
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "base")
    _git(repo, "tag", "base")

    (repo / "composer.json").write_text(build_manifest(
        require={"php": ">=8.1", "symfony/console": "^6.4"},
        require_dev={"phpunit/phpunit": "^10.5"},
    ))
    (repo / "composer.lock").write_text(build_lock(
        packages=[
            build_package("symfony/console", "v6.4.1", "bbb", "https://github.com/symfony/console.git"),
            build_package("psr/log", "3.0.0", "p3", "https://github.com/php-fig/log.git"),
        ],
        packages_dev=[build_package("phpunit/phpunit", "10.5.2")],
    ))
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "head")
    _git(repo, "tag", "head")
    return repo


@pytest.fixture(autouse=True)
def _restore_logging():
    """CLI runs re-point loguru at CliRunner streams; restore the default sink."""
    yield
    logger.remove()
    logger.add(sys.stderr)
