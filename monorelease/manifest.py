"""Manifest reading and writing utilities.

Two manifest formats are supported:

- ``package.json``: rewritten with stable key order, 2-space indent and a
  trailing newline, so the only diff is the version line.
- ``pyproject.toml``: handled with tomlkit to preserve formatting and
  comments, which keeps the file readable and diff-friendly.

Only the version field is ever written back.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import tomlkit
from packaging.utils import canonicalize_name

from .models import ManifestKind

PRIVATE_CLASSIFIER = "Private :: Do Not Upload"


def find_manifest(directory: Path) -> Path | None:
    """Return the manifest in ``directory``, preferring package.json."""
    for kind in ManifestKind:
        candidate = directory / kind.value
        if candidate.is_file():
            return candidate
    return None


def manifest_kind(path: Path) -> ManifestKind:
    return ManifestKind(path.name)


def load_manifest(path: Path) -> Any:
    """Load a manifest as a dict (JSON) or a TOMLDocument (TOML)."""
    if manifest_kind(path) is ManifestKind.PYTHON:
        return tomlkit.parse(path.read_text())
    return json.loads(path.read_text())


def save_manifest(path: Path, doc: Any) -> None:
    if manifest_kind(path) is ManifestKind.PYTHON:
        path.write_text(tomlkit.dumps(doc))
    else:
        path.write_text(json.dumps(doc, indent=2, ensure_ascii=False) + "\n")


def _project_table(path: Path, doc: Any) -> Any:
    if manifest_kind(path) is ManifestKind.PYTHON:
        return doc.get("project", {})
    return doc


def get_name(path: Path, doc: Any, fallback: str) -> str:
    """Extract the package name.

    Python project names are normalized per PEP 503 (lowercase, hyphens
    instead of underscores) for consistent comparison.
    """
    name = _project_table(path, doc).get("name") or fallback
    if manifest_kind(path) is ManifestKind.PYTHON:
        return canonicalize_name(name)
    return str(name)


def get_version(path: Path, doc: Any) -> str:
    """Extract the version, defaulting to '0.0.0'."""
    return str(_project_table(path, doc).get("version", "0.0.0"))


def has_static_version(path: Path, doc: Any) -> bool:
    """Whether the manifest declares a version that can be rewritten.

    A pyproject without a [project] table, or one listing ``version`` in
    ``project.dynamic``, has no static version to bump.
    """
    if manifest_kind(path) is ManifestKind.PYTHON:
        project = doc.get("project")
        if project is None or "version" in project.get("dynamic", []):
            return False
        return "version" in project
    return "version" in doc


def is_private(path: Path, doc: Any) -> bool:
    """Whether the manifest opts out of publishing.

    npm manifests use ``"private": true``; Python projects use the
    ``Private :: Do Not Upload`` trove classifier.
    """
    if manifest_kind(path) is ManifestKind.PYTHON:
        classifiers = doc.get("project", {}).get("classifiers", [])
        return PRIVATE_CLASSIFIER in classifiers
    return doc.get("private") is True


def update_version(path: Path, version: str) -> None:
    """Overwrite the version field in place, leaving everything else as is."""
    doc = load_manifest(path)
    if manifest_kind(path) is ManifestKind.PYTHON:
        doc["project"]["version"] = version
    else:
        doc["version"] = version
    save_manifest(path, doc)
