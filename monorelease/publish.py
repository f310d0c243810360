"""Registry clients.

npm packages are published with ``npm publish``; Python packages are built
and uploaded with uv. The client is picked from the manifest kind.
"""

from __future__ import annotations

from pathlib import Path

from .models import ManifestKind
from .shell import Runner, warn

NPM_REGISTRY = "https://registry.npmjs.org/"


class NpmPublisher:
    """Publishes a package directory publicly with npm."""

    default_registry = NPM_REGISTRY

    def __init__(self, runner: Runner) -> None:
        self.runner = runner

    def publish(
        self, pkg_dir: Path, tag: str | None = None, registry: str | None = None
    ) -> None:
        args = ["npm", "publish", "--access", "public"]
        if tag:
            args += ["--tag", tag]
        args += ["--registry", registry or self.default_registry]
        self.runner.run(*args, cwd=pkg_dir, capture=True)


class UvPublisher:
    """Builds and uploads a Python package with uv.

    Python indexes have no distribution tags; prereleases are recognized
    from the version itself, so a requested tag is only reported.
    """

    default_registry = None

    def __init__(self, runner: Runner) -> None:
        self.runner = runner

    def publish(
        self, pkg_dir: Path, tag: str | None = None, registry: str | None = None
    ) -> None:
        if tag:
            warn(f"Ignoring distribution tag '{tag}': not supported by Python indexes")
        dist = pkg_dir / "dist"
        self.runner.run("uv", "build", str(pkg_dir), "--out-dir", str(dist))
        args = ["uv", "publish"]
        if registry:
            args += ["--publish-url", registry]
        args.append(str(dist / "*"))
        self.runner.run(*args, cwd=pkg_dir)


def publisher_for(kind: ManifestKind, runner: Runner) -> NpmPublisher | UvPublisher:
    if kind is ManifestKind.PYTHON:
        return UvPublisher(runner)
    return NpmPublisher(runner)
