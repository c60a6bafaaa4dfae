"""Git subprocess wrapper — repo root, file content at a ref, origin URL."""

from __future__ import annotations

import os
import re
import subprocess
from pathlib import Path
from typing import Optional

from composer_diff.exceptions import ContentNotFoundError, GitError, MalformedDocumentError

# "path 'x' does not exist in 'ref'" / "path 'x' exists on disk, but not in 'ref'"
_MISSING_PATH_RE = re.compile(r"fatal: path '.*' (?:does not exist|exists on disk, but not) in")


def _run_git(
    args: list[str], cwd: Path, timeout: int = 30, errors: str = "replace"
) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors=errors,
            env={**os.environ, "LC_ALL": "C"},  # stderr is matched below
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")


def _check_output(args: list[str], cwd: Path, timeout: int = 30) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    result = _run_git(args, cwd, timeout)
    if result.returncode != 0:
        raise GitError(f"git error: {result.stderr.strip() or 'exit code ' + str(result.returncode)}")
    return result.stdout


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _check_output(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(out.strip())


def resolve_ref(repo_root: Path, ref: str) -> str:
    """Return the full commit SHA for *ref*."""
    result = _run_git(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"], cwd=repo_root)
    if result.returncode != 0:
        raise GitError(f"unknown reference: {ref}")
    return result.stdout.strip()


def show_file(repo_root: Path, path: str, ref: str, timeout: int = 30) -> str:
    """Return the content of *path* at *ref*.

    Raises ContentNotFoundError if the path does not exist in that tree,
    MalformedDocumentError if the blob is not UTF-8 and GitError for
    anything else (unknown ref included).
    """
    try:
        result = _run_git(["show", f"{ref}:{path}"], cwd=repo_root, timeout=timeout, errors="strict")
    except UnicodeDecodeError as exc:
        raise MalformedDocumentError(path, f"not valid UTF-8 at {ref}") from exc
    if result.returncode == 0:
        return result.stdout

    stderr = result.stderr.strip()
    if _MISSING_PATH_RE.search(stderr):
        raise ContentNotFoundError(path, ref)
    raise GitError(f"git error: {stderr}")


def get_origin_url(repo_root: Path) -> Optional[str]:
    """Return the ``origin`` remote URL, or None when there is no origin."""
    result = _run_git(["remote", "get-url", "origin"], cwd=repo_root)
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None
