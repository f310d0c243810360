"""Git operations used by the release flow.

Queries go through ``Runner.capture`` and always execute; anything that
changes the repository goes through ``Runner.run`` so a dry run only
echoes it.
"""

from __future__ import annotations

from pathlib import Path

from .shell import Runner


class Git:
    """Thin wrapper over the git CLI bound to one repository root."""

    def __init__(self, runner: Runner, root: Path) -> None:
        self.runner = runner
        self.root = root

    def _query(self, *args: str, check: bool = True) -> str:
        return self.runner.capture("git", *args, cwd=self.root, check=check)

    def _change(self, *args: str) -> str:
        return self.runner.run("git", *args, cwd=self.root)

    def list_tags(self, pattern: str | None = None, check: bool = True) -> list[str]:
        args = ["tag", "--list"]
        if pattern:
            args.append(pattern)
        return [t for t in self._query(*args, check=check).splitlines() if t]

    def rev_of(self, ref: str) -> str:
        """Resolve a tag or ref to a commit sha."""
        return self._query("rev-list", "-n", "1", ref)

    def log_since(self, sha: str, path: str) -> str:
        """One-line log of commits after ``sha`` touching ``path``."""
        return self._query("--no-pager", "log", f"{sha}..HEAD", "--oneline", "--", path)

    def diff(self) -> str:
        """Unstaged working-tree diff; empty when nothing changed."""
        return self._query("diff")

    def add_all(self) -> None:
        self._change("add", "-A")

    def commit(self, message: str) -> None:
        self._change("commit", "-m", message)

    def tag(self, name: str) -> None:
        self._change("tag", name)

    def push_ref(self, ref: str, remote: str = "origin") -> None:
        self._change("push", remote, ref)

    def push(self) -> None:
        """Push the current branch to its upstream."""
        self._change("push")
