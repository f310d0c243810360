"""Tests for monorelease.shell."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from monorelease.errors import ExternalCommandFailure
from monorelease.shell import DryRunner, Runner


def _completed(
    returncode: int = 0, stdout: str | None = "", stderr: str = ""
) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess((), returncode, stdout=stdout, stderr=stderr)


class TestRunner:
    @patch("monorelease.shell.subprocess.run")
    def test_capture_returns_stripped_stdout(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(stdout="v1\nv2\n")

        assert Runner().capture("git", "tag", cwd=Path("/repo")) == "v1\nv2"
        mock_run.assert_called_once_with(
            ("git", "tag"),
            cwd=Path("/repo"),
            capture_output=True,
            text=True,
            check=False,
        )

    @patch("monorelease.shell.subprocess.run")
    def test_capture_raises_on_failure(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(returncode=128, stderr="fatal: not a repo\n")

        with pytest.raises(ExternalCommandFailure) as exc_info:
            Runner().capture("git", "diff")

        assert exc_info.value.returncode == 128
        assert "git diff" in exc_info.value.message
        assert "fatal: not a repo" in exc_info.value.message

    @patch("monorelease.shell.subprocess.run")
    def test_capture_unchecked(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(returncode=1, stdout="partial")
        assert Runner().capture("git", "tag", check=False) == "partial"

    @patch("monorelease.shell.subprocess.run")
    def test_run_streams_output(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(stdout=None)

        assert Runner().run("git", "push") == ""
        assert mock_run.call_args.kwargs["capture_output"] is False

    @patch("monorelease.shell.subprocess.run")
    def test_run_raises_on_failure(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(returncode=1)
        with pytest.raises(ExternalCommandFailure):
            Runner().run("git", "push")

    @patch("monorelease.shell.subprocess.run", side_effect=FileNotFoundError("npm"))
    def test_missing_executable(self, mock_run: MagicMock) -> None:
        with pytest.raises(ExternalCommandFailure) as exc_info:
            Runner().run("npm", "publish")
        assert exc_info.value.returncode == 127


class TestDryRunner:
    @patch("monorelease.shell.subprocess.run")
    def test_run_only_echoes(
        self, mock_run: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert DryRunner().run("git", "tag", "foo@1.0.0") == ""

        mock_run.assert_not_called()
        assert "[dryrun] git tag foo@1.0.0" in capsys.readouterr().out

    @patch("monorelease.shell.subprocess.run")
    def test_capture_still_executes(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(stdout="diff")

        assert DryRunner().capture("git", "diff") == "diff"
        mock_run.assert_called_once()

    def test_flags(self) -> None:
        assert DryRunner.dry is True
        assert Runner.dry is False
