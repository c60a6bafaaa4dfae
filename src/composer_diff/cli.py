"""composer-diff CLI — Typer application with diff, comment, and init commands."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console

from composer_diff import __version__
from composer_diff.config.schema import OUTPUT_FORMATS, ComposerDiffConfig
from composer_diff.diff.models import ComposerDiff, Repository
from composer_diff.exceptions import ComposerDiffError

app = typer.Typer(
    name="composer-diff",
    help="Semantic diffs of composer.json and composer.lock between two references.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _fail(label: str, exc: Exception) -> typer.Exit:
    console.print(f"[bold red]{label}:[/bold red] {exc}")
    return typer.Exit(code=2)


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from composer_diff.git.adapter import get_repo_root

    try:
        return get_repo_root()
    except ComposerDiffError as exc:
        raise _fail("Error", exc) from exc


def _load_config(root: Path, config: Optional[str]) -> ComposerDiffConfig:
    from composer_diff.config.loader import load_config

    try:
        return load_config(root, config)
    except ComposerDiffError as exc:
        raise _fail("Config error", exc) from exc


def _parse_repository(slug: str) -> Repository:
    try:
        return Repository.parse(slug)
    except ValueError as exc:
        raise _fail("Invalid repository", exc) from exc


def _manifest_path(cfg: ComposerDiffConfig, path: Optional[str]) -> str:
    return (path or cfg.diff.path).lstrip("/")


async def _diff_github(
    cfg: ComposerDiffConfig, repository: Repository, base: str, head: str, path: str
) -> ComposerDiff:
    from composer_diff.diff.comparison import generate_diff
    from composer_diff.remote.github import GitHubClient, GitHubContentFetcher

    token = os.environ.get(cfg.github.token_env)
    async with GitHubClient(token, cfg.github.api_url, cfg.github.timeout) as client:
        return await generate_diff(GitHubContentFetcher(client), repository, base, head, path)


# ── diff ──────────────────────────────────────────────────────────────────────


@app.command()
def diff(
    base: str = typer.Argument(..., help="Base reference (branch, tag or commit)"),
    head: str = typer.Argument("HEAD", help="Head reference"),
    path: Optional[str] = typer.Option(None, "--path", "-p", help="Path to composer.json"),
    repo: Optional[str] = typer.Option(
        None, "--repo", "-r", help="OWNER/NAME; read files from GitHub instead of the local checkout"
    ),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .composer-diff.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | markdown"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging"),
) -> None:
    """Show dependency changes between BASE and HEAD."""
    from composer_diff.logging_setup import setup_logging
    from composer_diff.output import json_report, markdown, terminal

    setup_logging(verbose=verbose, debug=debug)

    if repo:
        repository = _parse_repository(repo)
        cfg = _load_config(Path.cwd(), config)
    else:
        repo_root = _resolve_repo_root()
        cfg = _load_config(repo_root, config)

    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]

    manifest_path = _manifest_path(cfg, path)

    try:
        if repo:
            result = asyncio.run(_diff_github(cfg, repository, base, head, manifest_path))
        else:
            from composer_diff.diff.comparison import generate_diff
            from composer_diff.git.adapter import resolve_ref
            from composer_diff.remote.local import GitContentFetcher, repository_for

            base = resolve_ref(repo_root, base)
            head = resolve_ref(repo_root, head)
            repository = repository_for(repo_root)
            result = asyncio.run(
                generate_diff(GitContentFetcher(repo_root), repository, base, head, manifest_path)
            )
    except ComposerDiffError as exc:
        raise _fail("Diff failed", exc) from exc

    logger.info(
        "{} requirement change(s), {} locked package change(s)",
        len(result.manifest), len(result.lock),
    )

    # --- Output ---
    report_text: Optional[str] = None

    if cfg.output.format == "terminal":
        terminal.render(
            result,
            path=manifest_path,
            base_ref=base,
            head_ref=head,
            show_summary=cfg.output.show_summary,
        )
    elif cfg.output.format == "json":
        report_text = json_report.render(result, path=manifest_path, base_ref=base, head_ref=head)
        print(report_text)
    elif cfg.output.format == "markdown":
        report_text = markdown.render(manifest_path, base, head, result)
        print(report_text)

    # --- Write to file ---
    if output:
        if report_text is None:
            report_text = json_report.render(result, path=manifest_path, base_ref=base, head_ref=head)
        Path(output).write_text(report_text, encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {output}[/dim]")

    raise typer.Exit(code=0)


# ── comment ───────────────────────────────────────────────────────────────────


@app.command()
def comment(
    repo: str = typer.Option(..., "--repo", "-r", help="OWNER/NAME"),
    pr: int = typer.Option(..., "--pr", help="Pull request number"),
    base: str = typer.Option(..., "--base", help="Base commit of the pull request"),
    head: str = typer.Option(..., "--head", help="Head commit of the pull request"),
    path: Optional[str] = typer.Option(None, "--path", "-p", help="Path to composer.json"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .composer-diff.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging"),
) -> None:
    """Post, update or remove the diff comment on a pull request."""
    from composer_diff.comments import sync_comment
    from composer_diff.diff.comparison import generate_diff
    from composer_diff.logging_setup import setup_logging
    from composer_diff.output import markdown
    from composer_diff.remote.github import GitHubClient, GitHubContentFetcher

    setup_logging(verbose=verbose, debug=debug)

    repository = _parse_repository(repo)
    cfg = _load_config(Path.cwd(), config)
    manifest_path = _manifest_path(cfg, path)

    token = os.environ.get(cfg.github.token_env)
    if not token:
        console.print(f"[bold red]Error:[/bold red] ${cfg.github.token_env} is not set")
        raise typer.Exit(code=2)

    async def run():
        async with GitHubClient(token, cfg.github.api_url, cfg.github.timeout) as client:
            result = await generate_diff(
                GitHubContentFetcher(client), repository, base, head, manifest_path
            )
            body = None if result.is_empty else markdown.render(manifest_path, base, head, result)
            return await sync_comment(
                client, repository, pr, manifest_path, body, author=cfg.comment.author
            )

    try:
        action = asyncio.run(run())
    except ComposerDiffError as exc:
        raise _fail("Comment failed", exc) from exc

    console.print(f"[green]✓[/green] Comment {action.value} on {repository}#{pr}")


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Generate a starter .composer-diff.toml in the repo root."""
    from composer_diff.config.defaults import CONFIG_FILENAME, DEFAULT_TOML

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists() and not force:
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"composer-diff {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """composer-diff — see what a change does to your Composer dependencies."""
