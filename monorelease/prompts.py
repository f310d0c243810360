"""Interactive prompts.

The orchestrator only talks to the ``Prompter`` protocol. ``ClickPrompter``
implements it on top of click; tests substitute a scripted prompter.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import click

from .models import VersionChoice


class Prompter(Protocol):
    def select_package(self, names: Sequence[str]) -> str | None: ...

    def select_version(
        self, choices: Sequence[VersionChoice]
    ) -> VersionChoice | None: ...

    def custom_version(self, default: str) -> str: ...

    def confirm(self, message: str) -> bool: ...


class ClickPrompter:
    """Numbered-menu prompts in the terminal."""

    def _select(self, message: str, titles: Sequence[str]) -> int | None:
        if not titles:
            return None
        for i, title in enumerate(titles, start=1):
            click.echo(f"  {i}) {title}")
        picked = click.prompt(
            message,
            type=click.IntRange(1, len(titles)),
            default=1,
            show_default=True,
        )
        return picked - 1

    def select_package(self, names: Sequence[str]) -> str | None:
        index = self._select("Select package", names)
        return None if index is None else names[index]

    def select_version(self, choices: Sequence[VersionChoice]) -> VersionChoice | None:
        index = self._select("Select release type", [c.title for c in choices])
        return None if index is None else choices[index]

    def custom_version(self, default: str) -> str:
        return click.prompt("Input custom version", default=default).strip()

    def confirm(self, message: str) -> bool:
        return click.confirm(message, default=False)
