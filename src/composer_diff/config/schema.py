"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

OutputFormat = Literal["terminal", "json", "markdown"]

OUTPUT_FORMATS: tuple[str, ...] = ("terminal", "json", "markdown")


@dataclass
class DiffConfig:
    path: str = "composer.json"  # manifest path relative to the repo root


@dataclass
class GitHubConfig:
    api_url: str = "https://api.github.com"
    timeout: float = 30.0
    token_env: str = "GITHUB_TOKEN"  # name of the env var holding the token


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class CommentConfig:
    author: str = "github-actions[bot]"  # only comments by this login are reused


@dataclass
class ComposerDiffConfig:
    version: str = "1.0"
    diff: DiffConfig = field(default_factory=DiffConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    comment: CommentConfig = field(default_factory=CommentConfig)
