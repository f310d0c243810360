"""Tests for monorelease.vcs."""

from __future__ import annotations

from pathlib import Path

from conftest import RecordingRunner
from monorelease.vcs import Git


class TestGit:
    def test_list_tags_filters_blank_lines(self) -> None:
        runner = RecordingRunner({"tag": "foo@1.0.0\n\nfoo@1.1.0"})
        git = Git(runner, Path("/repo"))

        assert git.list_tags("foo@*") == ["foo@1.0.0", "foo@1.1.0"]
        assert runner.queries == [("git", "tag", "--list", "foo@*")]

    def test_queries_do_not_change_state(self) -> None:
        runner = RecordingRunner({"rev-list": "abc", "diff": "", "log": "x"})
        git = Git(runner, Path("/repo"))

        assert git.rev_of("foo@1.0.0") == "abc"
        assert git.diff() == ""
        assert git.log_since("abc", "packages/foo") == "x"
        assert runner.commands == []

    def test_mutations_go_through_run(self) -> None:
        runner = RecordingRunner()
        git = Git(runner, Path("/repo"))

        git.add_all()
        git.commit("release: foo@1.0.0")
        git.tag("foo@1.0.0")
        git.push_ref("refs/tags/foo@1.0.0")
        git.push()

        assert runner.commands == [
            ("git", "add", "-A"),
            ("git", "commit", "-m", "release: foo@1.0.0"),
            ("git", "tag", "foo@1.0.0"),
            ("git", "push", "origin", "refs/tags/foo@1.0.0"),
            ("git", "push"),
        ]
        assert runner.queries == []

    def test_unchecked_tag_listing(self) -> None:
        runner = RecordingRunner()
        git = Git(runner, Path("/repo"))

        assert git.list_tags("foo@*", check=False) == []
        assert runner.unchecked == [("git", "tag", "--list", "foo@*")]
