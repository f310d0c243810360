"""Data models for monorelease.

These Pydantic models and enums represent the core data structures used
throughout the release flow.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

ALL_PACKAGES = "all"
DEFAULT_PRERELEASE_ID = "beta"


class ReleaseType(str, Enum):
    """How the next version is derived from the current one."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"
    PREPATCH = "prepatch"
    PREMINOR = "preminor"
    PREMAJOR = "premajor"
    PRERELEASE = "prerelease"
    CUSTOM = "custom"


class ManifestKind(str, Enum):
    NPM = "package.json"
    PYTHON = "pyproject.toml"


class Mode(str, Enum):
    """Which orchestration flow an invocation runs."""

    SINGLE = "single"
    MONOREPO = "monorepo"
    PUBLISH = "publish"


class ReleaseState(str, Enum):
    SELECTING = "selecting"
    VERSION_CHOSEN = "version_chosen"
    CONFIRMED = "confirmed"
    COMMITTED = "committed"
    TAGGED = "tagged"
    PUSHED = "pushed"
    DONE = "done"
    ABORTED = "aborted"


class PackageInfo(BaseModel):
    """Metadata for a single releasable package.

    Attributes:
        name: Package name used for the release tag.
        path: Directory holding the manifest.
        manifest_path: Path of the manifest file itself.
        version: Current version string from the manifest. The only field
                 that changes, once a release is finalized.
        private: Private packages are never listed in monorepo mode.
        kind: Manifest format, which also selects the registry client.
    """

    name: str
    path: Path
    manifest_path: Path
    version: str
    private: bool = False
    kind: ManifestKind = ManifestKind.NPM


class VersionChoice(BaseModel):
    """One entry of the "Select release type" prompt.

    ``version`` is None for the custom entry, where the user types the
    version themselves.
    """

    label: str
    version: str | None = None

    @property
    def title(self) -> str:
        if self.version is None:
            return self.label
        return f"{self.label} ({self.version})"


class ReleaseConfig(BaseModel):
    """Options resolved once per invocation.

    Attributes:
        monorepo: Select packages from ``packages/`` instead of the root.
        dry: Echo state-changing commands instead of running them.
        registry: Registry URL for publishing; None uses the client default.
        packages: Explicit package names, always ending with ``"all"``.
    """

    model_config = ConfigDict(frozen=True)

    monorepo: bool = False
    dry: bool = False
    registry: str | None = None
    packages: tuple[str, ...] = (ALL_PACKAGES,)


class ReleaseOutcome(BaseModel):
    """Where an interactive release ended up."""

    state: ReleaseState
    package: str | None = None
    version: str | None = None
    tag: str | None = None
