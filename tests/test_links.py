"""Tests for GitHub compare link generation."""

from typing import Optional

import pytest

from composer_diff.diff.links import generate_online_diff_link, parse_github_url
from composer_diff.diff.models import PackageSource


def _git(url: str, ref: Optional[str], type: str = "git") -> PackageSource:
    return PackageSource(type=type, url=url, reference=ref)


class TestParseGitHubUrl:
    @pytest.mark.parametrize("url", [
        "https://github.com/x/y",
        "https://github.com/x/y.git",
        "http://github.com/x/y",
        "git://github.com/x/y.git",
    ])
    def test_recognised(self, url):
        assert parse_github_url(url) == "x/y"

    @pytest.mark.parametrize("url", [
        "git@github.com:x/y.git",
        "https://gitlab.com/x/y.git",
        "https://github.com/x",
        "https://github.com/x/y/z",
        "https://githubXcom/x/y",
    ])
    def test_rejected(self, url):
        assert parse_github_url(url) is None


class TestGenerateOnlineDiffLink:
    def test_compare_url(self):
        link = generate_online_diff_link(
            _git("https://github.com/x/y.git", "aaa"),
            _git("https://github.com/x/y", "bbb"),
        )
        assert link == "https://github.com/x/y/compare/aaa...bbb"

    def test_same_object_yields_none(self):
        src = _git("https://github.com/x/y", "aaa")
        assert generate_online_diff_link(src, src) is None

    def test_type_mismatch(self):
        assert generate_online_diff_link(
            _git("https://github.com/x/y", "aaa"),
            _git("https://github.com/x/y", "bbb", type="hg"),
        ) is None

    def test_non_github(self):
        assert generate_online_diff_link(
            _git("https://gitlab.com/x/y.git", "aaa"),
            _git("https://gitlab.com/x/y.git", "bbb"),
        ) is None

    def test_different_repositories(self):
        assert generate_online_diff_link(
            _git("https://github.com/x/y", "aaa"),
            _git("https://github.com/x/z", "bbb"),
        ) is None

    def test_missing_source(self):
        assert generate_online_diff_link(None, _git("https://github.com/x/y", "bbb")) is None

    def test_missing_reference(self):
        assert generate_online_diff_link(
            _git("https://github.com/x/y", None),
            _git("https://github.com/x/y", "bbb"),
        ) is None
