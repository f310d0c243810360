"""Version parsing, validation and bumping utilities.

Increments follow the same rules as npm's ``semver.inc``, so the versions
offered for a JavaScript package match what its ecosystem tooling expects.
"""

from __future__ import annotations

import semver

from .errors import InvalidVersion
from .models import DEFAULT_PRERELEASE_ID, ReleaseType, VersionChoice


def is_valid(version_str: str) -> bool:
    """Check a string against the semantic-versioning grammar.

    Partial versions ("1.2") and prefixed versions ("v1.2.3") are rejected.
    """
    return semver.Version.is_valid(version_str)


def ensure_valid(version_str: str) -> str:
    """Return the version unchanged, or raise InvalidVersion."""
    if not is_valid(version_str):
        raise InvalidVersion(version_str)
    return version_str


def parse_version(version_str: str) -> semver.Version:
    """Parse a version string into a semver.Version object.

    Raises:
        InvalidVersion: If the string is not a valid semantic version.
    """
    try:
        return semver.Version.parse(version_str)
    except (TypeError, ValueError) as exc:
        raise InvalidVersion(version_str, prefix="invalid version") from exc


def _bump_prerelease(prerelease: str | None, identifier: str) -> str:
    if not prerelease:
        return f"{identifier}.0"
    parts = prerelease.split(".")
    if parts[0] != identifier:
        return f"{identifier}.0"
    # Bump the last numeric identifier, or start a counter if there is none
    for i in range(len(parts) - 1, -1, -1):
        if parts[i].isdigit():
            parts[i] = str(int(parts[i]) + 1)
            return ".".join(parts)
    return ".".join([*parts, "0"])


def increment(
    version_str: str,
    release_type: ReleaseType | str,
    identifier: str = DEFAULT_PRERELEASE_ID,
) -> str:
    """Compute the next version for a release type.

    Examples:
        "1.2.3", patch → "1.2.4"
        "1.2.3", preminor → "1.3.0-beta.0"
        "1.2.3-beta.0", prerelease → "1.2.3-beta.1"
        "1.2.3-beta.0", patch → "1.2.3"
        "2.0.0-beta.3", major → "2.0.0"
    """
    release_type = ReleaseType(release_type)
    v = parse_version(version_str)
    pre = v.prerelease

    if release_type is ReleaseType.MAJOR:
        if pre and v.minor == 0 and v.patch == 0:
            nxt = semver.Version(v.major, 0, 0)
        else:
            nxt = semver.Version(v.major + 1, 0, 0)
    elif release_type is ReleaseType.MINOR:
        if pre and v.patch == 0:
            nxt = semver.Version(v.major, v.minor, 0)
        else:
            nxt = semver.Version(v.major, v.minor + 1, 0)
    elif release_type is ReleaseType.PATCH:
        if pre:
            nxt = semver.Version(v.major, v.minor, v.patch)
        else:
            nxt = semver.Version(v.major, v.minor, v.patch + 1)
    elif release_type is ReleaseType.PREMAJOR:
        nxt = semver.Version(v.major + 1, 0, 0, f"{identifier}.0")
    elif release_type is ReleaseType.PREMINOR:
        nxt = semver.Version(v.major, v.minor + 1, 0, f"{identifier}.0")
    elif release_type is ReleaseType.PREPATCH:
        nxt = semver.Version(v.major, v.minor, v.patch + 1, f"{identifier}.0")
    elif release_type is ReleaseType.PRERELEASE:
        if not pre:
            nxt = semver.Version(v.major, v.minor, v.patch + 1, f"{identifier}.0")
        else:
            nxt = semver.Version(
                v.major, v.minor, v.patch, _bump_prerelease(pre, identifier)
            )
    else:
        raise ValueError(f"cannot increment a {release_type.value} release")
    return str(nxt)


def is_prerelease(version_str: str) -> bool:
    """True for versions that carry the beta prerelease identifier."""
    return DEFAULT_PRERELEASE_ID in version_str


def version_choices(current: str) -> list[VersionChoice]:
    """Build the candidate next versions offered to the user.

    A beta version can move to the next beta or to its stable release;
    anything else gets patch, beta minor/major and minor/major bumps.
    The list always ends with a "custom" entry without a version.

    Raises:
        InvalidVersion: If ``current`` is not a valid semantic version.
    """
    if is_prerelease(current):
        choices = [
            VersionChoice(label="next", version=increment(current, "prerelease")),
            VersionChoice(label="stable", version=increment(current, "patch")),
        ]
    else:
        choices = [
            VersionChoice(label="next", version=increment(current, "patch")),
            VersionChoice(label="beta-minor", version=increment(current, "preminor")),
            VersionChoice(label="beta-major", version=increment(current, "premajor")),
            VersionChoice(label="minor", version=increment(current, "minor")),
            VersionChoice(label="major", version=increment(current, "major")),
        ]
    choices.append(VersionChoice(label=ReleaseType.CUSTOM.value))
    return choices
