"""Shared test fixtures."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

import pytest

from monorelease.errors import ExternalCommandFailure
from monorelease.models import VersionChoice
from monorelease.shell import Runner


def write_package_json(directory: Path, **fields: object) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    manifest = directory / "package.json"
    manifest.write_text(json.dumps(fields, indent=2) + "\n")
    return manifest


class RecordingRunner(Runner):
    """Runner double: answers git queries from a table, records commands.

    ``outputs`` maps a git subcommand ("tag", "rev-list", "log", "diff") to
    the stdout it returns, or to an exception to raise. Unchecked queries
    swallow the exception and return "", as the real runner does.
    """

    def __init__(self, outputs: dict[str, object] | None = None, dry: bool = False):
        self.outputs = outputs or {}
        self.dry = dry
        self.queries: list[tuple[str, ...]] = []
        self.unchecked: list[tuple[str, ...]] = []
        self.commands: list[tuple[str, ...]] = []

    @staticmethod
    def _key(args: tuple[str, ...]) -> str:
        return next(a for a in args[1:] if not a.startswith("-"))

    def capture(self, *args: str, cwd: Path | None = None, check: bool = True) -> str:
        self.queries.append(args)
        if not check:
            self.unchecked.append(args)
        out = self.outputs.get(self._key(args), "")
        if isinstance(out, Exception):
            if not check:
                return ""
            raise out
        return str(out)

    def run(self, *args: str, cwd: Path | None = None, capture: bool = False) -> str:
        self.commands.append(args)
        return ""


class ScriptedPrompter:
    """Prompter double that answers from fixed values."""

    def __init__(
        self,
        package: str | None = "foo",
        label: str | None = "next",
        custom: str = "",
        confirm: bool = True,
    ) -> None:
        self.package = package
        self.label = label
        self.custom = custom
        self.answer = confirm
        self.offered_packages: list[str] = []
        self.offered_versions: list[VersionChoice] = []
        self.confirm_messages: list[str] = []

    def select_package(self, names: Sequence[str]) -> str | None:
        self.offered_packages = list(names)
        return self.package

    def select_version(self, choices: Sequence[VersionChoice]) -> VersionChoice | None:
        self.offered_versions = list(choices)
        return next((c for c in choices if c.label == self.label), None)

    def custom_version(self, default: str) -> str:
        return self.custom or default

    def confirm(self, message: str) -> bool:
        self.confirm_messages.append(message)
        return self.answer


@pytest.fixture
def git_failure() -> ExternalCommandFailure:
    return ExternalCommandFailure(("git", "rev-list"), 128, "fatal: bad revision")


@pytest.fixture
def single_repo(tmp_path: Path) -> Path:
    """A repository whose root is an npm package."""
    write_package_json(tmp_path, name="foo", version="1.2.3", license="MIT")
    return tmp_path


@pytest.fixture
def monorepo(tmp_path: Path) -> Path:
    """A repository with public, private and non-package entries in packages/."""
    write_package_json(tmp_path, name="root", private=True, version="0.0.0")
    packages = tmp_path / "packages"
    write_package_json(packages / "foo", name="foo", version="1.2.3")
    write_package_json(packages / "bar", name="bar", version="0.4.0-beta.1")
    write_package_json(
        packages / "secret", name="secret", version="1.0.0", private=True
    )
    (packages / "docs").mkdir()
    (packages / "README.md").write_text("not a package\n")
    return tmp_path
