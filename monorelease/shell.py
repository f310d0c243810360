"""Command runners and terminal output helpers.

A runner is handed to the release orchestrator as a strategy value: the
real ``Runner`` executes commands, while ``DryRunner`` only echoes the
commands that would change state. Read-only queries always execute, so a
dry run still sees the real repository.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

import click

from .errors import ExternalCommandFailure


class Runner:
    """Runs external commands with subprocess."""

    dry = False

    def capture(self, *args: str, cwd: Path | None = None, check: bool = True) -> str:
        """Run a read-only command and return its stripped stdout.

        Args:
            *args: Command and arguments (e.g., "git", "tag", "--list").
            cwd: Working directory, defaults to the current one.
            check: If True (default), raise on non-zero exit. Set to False
                   for queries that may legitimately fail (e.g., tag lookup).

        Raises:
            ExternalCommandFailure: If the command fails and check is True.
        """
        return _execute(args, cwd=cwd, capture=True, check=check)

    def run(self, *args: str, cwd: Path | None = None, capture: bool = False) -> str:
        """Run a command that changes state.

        Output streams to the terminal unless ``capture`` is set, in which
        case stdout is returned instead.

        Raises:
            ExternalCommandFailure: If the command exits non-zero.
        """
        return _execute(args, cwd=cwd, capture=capture, check=True)


class DryRunner(Runner):
    """Echoes state-changing commands instead of running them."""

    dry = True

    def run(self, *args: str, cwd: Path | None = None, capture: bool = False) -> str:
        location = f" (in {cwd})" if cwd else ""
        dry(f"{' '.join(args)}{location}")
        return ""


def _execute(
    args: tuple[str, ...], *, cwd: Path | None, capture: bool, check: bool
) -> str:
    try:
        result = subprocess.run(
            args,
            cwd=cwd,
            capture_output=capture,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise ExternalCommandFailure(args, 127, str(exc)) from exc
    if check and result.returncode != 0:
        raise ExternalCommandFailure(args, result.returncode, result.stderr or "")
    return (result.stdout or "").strip()


def step(msg: str) -> None:
    """Print a visually distinct step header."""
    click.secho(f"\n{msg}", fg="cyan")


def info(msg: str = "") -> None:
    click.echo(msg)


def success(msg: str) -> None:
    click.secho(msg, fg="green")


def warn(msg: str) -> None:
    click.secho(msg, fg="yellow", err=True)


def dry(msg: str) -> None:
    """Report a command skipped by a dry run."""
    click.secho(f"[dryrun] {msg}", fg="blue")
