"""Release flows: select → version → confirm → commit → tag → push.

This module drives the two entry points of monorelease:

1. Interactive release (single-package or monorepo mode): pick a package
   and a version, write it into the manifest, commit, tag and push. CI
   picks up the pushed tag.
2. CI publish: given a pushed ``<name>@<version>`` tag, check it against
   the manifest and publish the package to its registry.

The mode is resolved once from the options and mapped to one function
below. Command execution is a ``Runner`` passed in by the caller, so a dry
run only swaps the runner.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

import click

from .errors import ExternalCommandFailure, InvalidVersion, VersionMismatch
from .locator import list_packages, locate, package_dir
from .manifest import update_version
from .models import (
    ALL_PACKAGES,
    DEFAULT_PRERELEASE_ID,
    Mode,
    PackageInfo,
    ReleaseConfig,
    ReleaseOutcome,
    ReleaseState,
    ReleaseType,
)
from .prompts import ClickPrompter, Prompter
from .publish import publisher_for
from .shell import DryRunner, Runner, info, step, success
from .vcs import Git
from .versions import ensure_valid, is_prerelease, version_choices

TERMINAL_STATES = frozenset({ReleaseState.DONE, ReleaseState.ABORTED})


def resolve_options(
    *,
    monorepo: bool = False,
    dry: bool = False,
    registry: str | None = None,
    packages: str | Iterable[str] | None = None,
) -> ReleaseConfig:
    """Fill in defaults; the package list always ends with "all"."""
    if isinstance(packages, str):
        names = [packages]
    else:
        names = list(packages or [])
    return ReleaseConfig(
        monorepo=monorepo,
        dry=dry,
        registry=registry or None,
        packages=(*names, ALL_PACKAGES),
    )


def resolve_mode(config: ReleaseConfig, *, publish: bool = False) -> Mode:
    if publish:
        return Mode.PUBLISH
    return Mode.MONOREPO if config.monorepo else Mode.SINGLE


def make_runner(config: ReleaseConfig) -> Runner:
    return DryRunner() if config.dry else Runner()


def release_tag(name: str, version: str) -> str:
    return f"{name}@{version}"


def parse_release_tag(tag: str) -> tuple[str, str]:
    """Split ``<name>@<version>`` into its parts.

    Splits on the last "@" so scoped npm names ("@scope/pkg@1.0.0") work,
    and strips a leading "v" from the version.

    Raises:
        InvalidVersion: If the tag has no name or no version part.
    """
    name, sep, version = tag.rpartition("@")
    if not sep or not name or not version:
        raise InvalidVersion(tag, prefix="invalid release tag")
    if version.startswith("v"):
        version = version[1:]
    return name, version


class ReleaseFlow:
    """One interactive release, tracked as an explicit state machine.

    States advance strictly in order; ABORTED may be entered from any
    non-terminal state. ``history`` records every state visited.
    """

    def __init__(
        self,
        root: Path,
        config: ReleaseConfig,
        runner: Runner,
        prompter: Prompter,
    ) -> None:
        self.root = root
        self.config = config
        self.runner = runner
        self.prompter = prompter
        self.git = Git(runner, root)
        self.state = ReleaseState.SELECTING
        self.history: list[ReleaseState] = [self.state]

    def _advance(self, state: ReleaseState) -> None:
        if self.state in TERMINAL_STATES:
            raise RuntimeError(f"release already finished ({self.state.value})")
        self.state = state
        self.history.append(state)

    def _abort(
        self, pkg: PackageInfo | None = None, version: str | None = None
    ) -> ReleaseOutcome:
        self._advance(ReleaseState.ABORTED)
        return ReleaseOutcome(
            state=self.state,
            package=pkg.name if pkg else None,
            version=version,
        )

    def latest_tag(self, name: str) -> str | None:
        """Lexicographically last ``<name>@*`` tag, if any."""
        prefix = f"{name}@"
        listed = self.git.list_tags(f"{prefix}*", check=False)
        tags = [t for t in listed if t.startswith(prefix)]
        return max(tags) if tags else None

    def log_recent_commits(self, pkg: PackageInfo) -> None:
        """Print commits touching the package since its last release.

        Purely informational: any git failure just means no listing.
        """
        try:
            tag = self.latest_tag(pkg.name)
            if not tag:
                return
            sha = self.git.rev_of(tag)
            path = pkg.path
            if path.is_relative_to(self.root):
                path = path.relative_to(self.root)
            commits = self.git.log_since(sha, str(path))
        except ExternalCommandFailure:
            return
        click.echo(
            click.style("\ni ", fg="blue", bold=True)
            + click.style("Commits of ", bold=True)
            + click.style(pkg.name, fg="green", bold=True)
            + click.style(" since ", bold=True)
            + click.style(tag, fg="green", bold=True)
            + click.style(f" ({sha[:5]})", fg="bright_black")
        )
        if commits:
            info(commits)
        info()

    def choose_version(self, pkg: PackageInfo) -> str | None:
        choice = self.prompter.select_version(version_choices(pkg.version))
        if choice is None:
            return None
        if choice.label == ReleaseType.CUSTOM.value:
            return self.prompter.custom_version(pkg.version)
        return choice.version

    def run(
        self, names: Sequence[str], directory_for: Callable[[str], Path]
    ) -> ReleaseOutcome:
        """Drive the release from package selection to push.

        Raises:
            PackageNotFound: If the chosen package has no manifest.
            InvalidVersion: If the chosen version is not valid semver.
            ExternalCommandFailure: If git fails; nothing is rolled back.
        """
        name = self.prompter.select_package(names)
        if not name:
            return self._abort()

        pkg = locate(name, directory_for(name))
        self.log_recent_commits(pkg)

        target = self.choose_version(pkg)
        if not target:
            return self._abort(pkg)
        ensure_valid(target)
        self._advance(ReleaseState.VERSION_CHOSEN)

        tag = release_tag(pkg.name, target)
        message = f"Releasing {click.style(tag, fg='yellow')} Confirm?"
        if not self.prompter.confirm(message):
            return self._abort(pkg, target)
        self._advance(ReleaseState.CONFIRMED)

        step("Updating package version...")
        update_version(pkg.manifest_path, target)
        pkg.version = target

        if not self.git.diff():
            info("No changes to commit.")
            return self._abort(pkg, target)

        step("Committing changes...")
        self.git.add_all()
        self.git.commit(f"release: {tag}")
        self._advance(ReleaseState.COMMITTED)
        self.git.tag(tag)
        self._advance(ReleaseState.TAGGED)

        step("Pushing to remote...")
        self.git.push_ref(f"refs/tags/{tag}")
        self.git.push()
        self._advance(ReleaseState.PUSHED)

        if self.runner.dry:
            info("\nDry run finished - run git diff to see package changes.")
        else:
            success("\nPushed, publishing should start shortly on CI.\n")
        self._advance(ReleaseState.DONE)
        return ReleaseOutcome(
            state=self.state, package=pkg.name, version=target, tag=tag
        )


def release_single(
    root: Path, config: ReleaseConfig, runner: Runner, prompter: Prompter
) -> ReleaseOutcome:
    """Release the root package under one of the ``--package`` names."""
    flow = ReleaseFlow(root, config, runner, prompter)
    return flow.run(list_packages(root, config), lambda name: root)


def release_monorepo(
    root: Path, config: ReleaseConfig, runner: Runner, prompter: Prompter
) -> ReleaseOutcome:
    """Release one public package from ``packages/``."""
    flow = ReleaseFlow(root, config, runner, prompter)
    return flow.run(
        list_packages(root, config),
        lambda name: package_dir(root, name, monorepo=True),
    )


def publish_ci(
    tag: str,
    root: Path,
    config: ReleaseConfig,
    runner: Runner,
    publisher_factory: Callable = publisher_for,
) -> PackageInfo:
    """Publish the package named by a pushed release tag.

    Raises:
        InvalidVersion: If the tag is malformed or its version is not semver.
        PackageNotFound: If the tagged package has no manifest.
        VersionMismatch: If the manifest version differs from the tag.
    """
    name, version = parse_release_tag(tag)
    ensure_valid(version)

    pkg = locate(name, package_dir(root, name, config.monorepo))
    if pkg.version != version:
        raise VersionMismatch(version, pkg.version)

    step("Publishing package...")
    dist_tag = DEFAULT_PRERELEASE_ID if is_prerelease(version) else None
    publisher = publisher_factory(pkg.kind, runner)
    publisher.publish(pkg.path, dist_tag, config.registry)
    return pkg


def run(
    mode: Mode,
    config: ReleaseConfig,
    *,
    tag: str | None = None,
    root: Path | None = None,
    runner: Runner | None = None,
    prompter: Prompter | None = None,
) -> ReleaseOutcome | PackageInfo:
    """Execute the flow for ``mode``.

    Interactive modes return a ReleaseOutcome; publishing returns the
    published package.

    Raises:
        ValueError: If ``mode`` is PUBLISH and no tag is given.
    """
    if mode is Mode.PUBLISH and not tag:
        raise ValueError("publishing needs a release tag")
    root = root or Path.cwd()
    runner = runner or make_runner(config)
    handlers: dict[Mode, Callable[[], ReleaseOutcome | PackageInfo]] = {
        Mode.SINGLE: lambda: release_single(
            root, config, runner, prompter or ClickPrompter()
        ),
        Mode.MONOREPO: lambda: release_monorepo(
            root, config, runner, prompter or ClickPrompter()
        ),
        Mode.PUBLISH: lambda: publish_ci(tag, root, config, runner),
    }
    return handlers[mode]()
