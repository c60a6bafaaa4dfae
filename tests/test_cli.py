"""Tests for the CLI commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from composer_diff.cli import app
from composer_diff.comments import CommentAction
from composer_diff.config.defaults import CONFIG_FILENAME
from composer_diff.diff.models import ComposerDiff

runner = CliRunner()


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "composer-diff" in result.output


class TestInit:
    def test_creates_config(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert (tmp_git_repo / CONFIG_FILENAME).exists()

    def test_refuses_overwrite(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        (tmp_git_repo / CONFIG_FILENAME).write_text("existing")
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 1
        assert (tmp_git_repo / CONFIG_FILENAME).read_text() == "existing"

    def test_force(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        (tmp_git_repo / CONFIG_FILENAME).write_text("existing")
        result = runner.invoke(app, ["init", "--force"])
        assert result.exit_code == 0
        assert "[diff]" in (tmp_git_repo / CONFIG_FILENAME).read_text()


class TestDiff:
    def test_terminal(self, composer_repo: Path, monkeypatch):
        monkeypatch.chdir(composer_repo)
        result = runner.invoke(app, ["diff", "base", "head"])
        assert result.exit_code == 0

    def test_json_report_file(self, composer_repo: Path, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(composer_repo)
        report = tmp_path / "report.json"
        result = runner.invoke(app, ["diff", "base", "head", "--format", "json", "--output", str(report)])
        assert result.exit_code == 0
        data = json.loads(report.read_text())
        assert data["changed"] is True
        names = {e["name"] for e in data["lock"]}
        assert names == {"symfony/console", "psr/log", "phpunit/phpunit"}

    def test_markdown_report_file(self, composer_repo: Path, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(composer_repo)
        report = tmp_path / "report.md"
        result = runner.invoke(
            app, ["diff", "base", "head", "-f", "markdown", "-o", str(report), "--path", "/composer.json"],
        )
        assert result.exit_code == 0
        text = report.read_text()
        assert text.startswith("## Changes to `composer.json`")
        assert "[Diff](https://github.com/symfony/console/compare/aaa...bbb)" in text

    def test_no_changes(self, composer_repo: Path, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(composer_repo)
        report = tmp_path / "report.json"
        result = runner.invoke(app, ["diff", "head", "head", "-f", "json", "-o", str(report)])
        assert result.exit_code == 0
        assert json.loads(report.read_text())["changed"] is False

    def test_missing_manifest_on_both_refs(self, composer_repo: Path, monkeypatch):
        monkeypatch.chdir(composer_repo)
        result = runner.invoke(app, ["diff", "base", "head", "--path", "nope/composer.json"])
        assert result.exit_code == 2

    def test_unknown_ref(self, composer_repo: Path, monkeypatch):
        monkeypatch.chdir(composer_repo)
        result = runner.invoke(app, ["diff", "no-such-ref", "head"])
        assert result.exit_code == 2

    def test_bad_format(self, composer_repo: Path, monkeypatch):
        monkeypatch.chdir(composer_repo)
        result = runner.invoke(app, ["diff", "base", "head", "--format", "sarif"])
        assert result.exit_code == 2

    def test_outside_git_repo(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["diff", "base", "head"])
        assert result.exit_code == 2

    def test_bad_repository_slug(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["diff", "base", "head", "--repo", "not-a-slug"])
        assert result.exit_code == 2


class TestComment:
    def test_requires_token(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        result = runner.invoke(
            app, ["comment", "--repo", "acme/app", "--pr", "7", "--base", "a", "--head", "b"],
        )
        assert result.exit_code == 2

    def test_deletes_comment_when_clean(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("GITHUB_TOKEN", "t0ken")
        seen = {}

        async def fake_generate_diff(fetcher, repository, base, head, path):
            seen["diff"] = (str(repository), base, head, path)
            return ComposerDiff()

        async def fake_sync_comment(client, repository, number, path, body, author):
            seen["sync"] = (number, path, body, author)
            return CommentAction.DELETED

        monkeypatch.setattr("composer_diff.diff.comparison.generate_diff", fake_generate_diff)
        monkeypatch.setattr("composer_diff.comments.sync_comment", fake_sync_comment)

        result = runner.invoke(
            app, ["comment", "--repo", "acme/app", "--pr", "7", "--base", "a", "--head", "b"],
        )
        assert result.exit_code == 0
        assert seen["diff"] == ("acme/app", "a", "b", "composer.json")
        assert seen["sync"] == (7, "composer.json", None, "github-actions[bot]")
