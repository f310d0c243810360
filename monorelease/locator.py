"""Package discovery and lookup.

In single-package mode the repository root is the package and the user
picks from the names given with ``--package``. In monorepo mode every
public package under ``packages/`` is selectable.
"""

from __future__ import annotations

from pathlib import Path

from .errors import InvalidVersion, PackageNotFound
from .manifest import (
    find_manifest,
    get_name,
    get_version,
    has_static_version,
    is_private,
    load_manifest,
    manifest_kind,
)
from .models import ALL_PACKAGES, PackageInfo, ReleaseConfig

PACKAGES_DIR = "packages"


def list_packages(root: Path, config: ReleaseConfig) -> list[str]:
    """Names the user may choose from.

    Monorepo mode scans ``<root>/packages/`` and skips directories without
    a manifest, packages marked private and packages with no static
    version.

    Raises:
        PackageNotFound: If monorepo mode is on and there is no packages dir.
    """
    if not config.monorepo:
        return list(config.packages)

    packages_dir = root / PACKAGES_DIR
    if not packages_dir.is_dir():
        raise PackageNotFound(PACKAGES_DIR)

    names: list[str] = []
    for entry in sorted(packages_dir.iterdir()):
        if not entry.is_dir():
            continue
        manifest = find_manifest(entry)
        if manifest is None:
            continue
        doc = load_manifest(manifest)
        if is_private(manifest, doc) or not has_static_version(manifest, doc):
            continue
        names.append(entry.name)
    return names


def package_dir(root: Path, name: str, monorepo: bool) -> Path:
    """Directory holding the manifest for ``name``."""
    if monorepo:
        return root / PACKAGES_DIR / name
    return root


def locate(name: str, directory: Path) -> PackageInfo:
    """Read the manifest in ``directory`` into a PackageInfo.

    The "all" placeholder stands for the root package and takes its name
    from the manifest.

    Raises:
        PackageNotFound: If the directory holds no manifest.
        InvalidVersion: If the manifest has no static version to bump.
    """
    manifest = find_manifest(directory)
    if manifest is None:
        raise PackageNotFound(name)

    doc = load_manifest(manifest)
    if not has_static_version(manifest, doc):
        raise InvalidVersion(str(manifest), prefix="no static version in")
    if name == ALL_PACKAGES:
        name = get_name(manifest, doc, directory.name)
    return PackageInfo(
        name=name,
        path=directory,
        manifest_path=manifest,
        version=get_version(manifest, doc),
        private=is_private(manifest, doc),
        kind=manifest_kind(manifest),
    )
