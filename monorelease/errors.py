"""Error types for the release command.

Every error is fatal for the current invocation. They derive from
click.ClickException so the CLI prints ``Error: <message>`` and exits 1.
"""

from __future__ import annotations

import click


class ReleaseError(click.ClickException):
    """Base class for all release failures."""


class PackageNotFound(ReleaseError):
    """No manifest exists for the requested package."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Package {name} not found")
        self.name = name


class InvalidVersion(ReleaseError):
    """A version string does not follow semantic-versioning grammar."""

    def __init__(self, version: str, prefix: str = "invalid target version") -> None:
        super().__init__(f"{prefix}: {version}")
        self.version = version


class VersionMismatch(ReleaseError):
    """The version in a release tag differs from the manifest version."""

    def __init__(self, tag_version: str, current_version: str) -> None:
        super().__init__(
            f'Package version from tag "{tag_version}" mismatches with '
            f'current version "{current_version}"'
        )
        self.tag_version = tag_version
        self.current_version = current_version


class ExternalCommandFailure(ReleaseError):
    """A git or registry command exited non-zero.

    Commit, tag and push run in sequence without rollback, so a failure in
    the middle leaves local-only state behind that must be fixed by hand.
    """

    def __init__(
        self, command: tuple[str, ...], returncode: int, stderr: str = ""
    ) -> None:
        message = f"Command failed ({returncode}): {' '.join(command)}"
        if stderr:
            message += f"\n{stderr.strip()}"
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
