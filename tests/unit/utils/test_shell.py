"""Unit tests for shell execution utilities."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from gitfresh.utils.shell import CommandResult, command_exists, run_command


class TestCommandResult:
    """Tests for CommandResult."""

    def test_success(self) -> None:
        """Exit code zero is success."""
        assert CommandResult(stdout="", stderr="", returncode=0).success is True
        assert CommandResult(stdout="", stderr="", returncode=128).success is False


class TestRunCommand:
    """Tests for run_command function."""

    @patch("gitfresh.utils.shell.subprocess.run")
    def test_captures_output(self, mock_run: MagicMock) -> None:
        """run_command captures stdout, stderr and exit code."""
        mock_run.return_value = MagicMock(stdout="out", stderr="err", returncode=3)

        result = run_command(["git", "status"])

        assert result == CommandResult(stdout="out", stderr="err", returncode=3)
        assert mock_run.call_args.kwargs["capture_output"] is True
        assert mock_run.call_args.kwargs["text"] is True
        assert "check" not in mock_run.call_args.kwargs

    @patch("gitfresh.utils.shell.subprocess.run")
    def test_passes_cwd_and_timeout(self, mock_run: MagicMock) -> None:
        """run_command passes the working directory and timeout."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["ls"], cwd=Path("/tmp"), timeout=5.0)

        assert mock_run.call_args.kwargs["cwd"] == Path("/tmp")
        assert mock_run.call_args.kwargs["timeout"] == 5.0

    @patch("gitfresh.utils.shell.subprocess.run")
    def test_propagates_timeout(self, mock_run: MagicMock) -> None:
        """Timeouts are raised to the caller."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd=["sleep"], timeout=1.0)

        with pytest.raises(subprocess.TimeoutExpired):
            run_command(["sleep", "10"], timeout=1.0)

    def test_raises_file_not_found(self) -> None:
        """run_command raises FileNotFoundError for missing commands."""
        with pytest.raises(FileNotFoundError):
            run_command(["nonexistent_command_xyz_12345"])


class TestCommandExists:
    """Tests for command_exists function."""

    @patch("gitfresh.utils.shell.shutil.which", return_value="/usr/bin/git")
    def test_found(self, mock_which: MagicMock) -> None:
        """command_exists is True when the command is on PATH."""
        assert command_exists("git") is True
        mock_which.assert_called_once_with("git")

    @patch("gitfresh.utils.shell.shutil.which", return_value=None)
    def test_missing(self, mock_which: MagicMock) -> None:
        """command_exists is False when the command is not on PATH."""
        assert command_exists("git") is False
