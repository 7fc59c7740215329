"""Unit tests for the git-fresh command.

Git is replaced by a mock; the wipe runs against a temporary directory.
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from gitfresh import __version__
from gitfresh.cli.main import app, build_request
from gitfresh.core.config import FreshConfig
from gitfresh.protection.resolver import ProtectNone
from gitfresh.vcs.git import GitError
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def work_tree(tmp_path: Path) -> Path:
    """Repository root with tracked-looking content and secrets."""
    root = tmp_path / "repo"
    (root / ".git").mkdir(parents=True)
    (root / "tracked.txt").write_text("v1\n")
    (root / "secret.local").write_text("keep\n")
    (root / ".env").write_text("TOKEN=1\n")
    return root


@pytest.fixture
def git(work_tree: Path):
    """Patch GitRepository with a clean repository double."""
    mock = MagicMock()
    mock.find_root.return_value = work_tree
    mock.has_changes.return_value = False
    mock.restore.return_value = True
    with patch("gitfresh.cli.main.GitRepository", return_value=mock):
        yield mock


class TestBuildRequest:
    """Tests for merging flags with configuration."""

    def test_flags_only(self) -> None:
        """Flags map directly onto the request."""
        request = build_request(
            FreshConfig(),
            ignore_env_files=True,
            skip_confirmation=False,
            glob_patterns=["*.local"],
        )

        assert request.glob_patterns == ("*.local",)
        assert request.protect_secret_files is True
        assert request.interactive is True

    def test_config_patterns_come_first(self) -> None:
        """Configured patterns precede command-line patterns."""
        config = FreshConfig(
            protect_patterns=["certs/**"],
            skip_confirmation=True,
            secret_patterns=["**/secrets.json"],
        )

        request = build_request(
            config,
            ignore_env_files=False,
            skip_confirmation=False,
            glob_patterns=["*.local"],
        )

        assert request.glob_patterns == ("certs/**", "*.local")
        assert request.interactive is False
        assert request.extra_secret_patterns == ("**/secrets.json",)

    def test_no_patterns(self) -> None:
        """Missing pattern options mean no patterns."""
        request = build_request(
            FreshConfig(),
            ignore_env_files=False,
            skip_confirmation=False,
            glob_patterns=None,
        )

        assert request.glob_patterns == ()


class TestFreshCommand:
    """Tests for the git-fresh command."""

    def test_help(self) -> None:
        """Help lists the protection options."""
        result = runner.invoke(app, ["-h"])

        assert result.exit_code == 0
        assert "--ignore-env-files" in result.output
        assert "--ignore-glob-files" in result.output

    def test_version(self) -> None:
        """--version prints the version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"git-fresh version {__version__}" in result.output

    def test_not_a_repository(self, git: MagicMock, work_tree: Path) -> None:
        """Outside a repository the command fails without touching anything."""
        git.find_root.return_value = None

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Failed to reset" in result.output
        assert (work_tree / "tracked.txt").exists()

    def test_clean_run(self, git: MagicMock, work_tree: Path) -> None:
        """A clean repository is wiped and restored."""
        result = runner.invoke(app, [])

        assert result.exit_code == 0, result.output
        assert "reset successfully" in result.output
        assert not (work_tree / "tracked.txt").exists()
        assert not (work_tree / ".env").exists()
        assert (work_tree / ".git").is_dir()
        git.restore.assert_called_once_with(())
        git.stash_push.assert_not_called()

    def test_glob_protection(self, git: MagicMock, work_tree: Path) -> None:
        """Files matching -g survive and are excluded from Git operations."""
        result = runner.invoke(app, ["-g", "*.local"])

        assert result.exit_code == 0, result.output
        assert "Protecting 1 file(s)" in result.output
        assert (work_tree / "secret.local").read_text() == "keep\n"
        git.restore.assert_called_once_with(("secret.local",))

    def test_env_files_skip_confirmation(self, git: MagicMock, work_tree: Path) -> None:
        """-e -y protects every environment file without prompting."""
        with patch("gitfresh.cli.main.prompt_secret_selection") as mock_prompt:
            result = runner.invoke(app, ["-e", "-y"])

        assert result.exit_code == 0, result.output
        mock_prompt.assert_not_called()
        assert "Protecting 1 environment file(s)" in result.output
        assert (work_tree / ".env").read_text() == "TOKEN=1\n"

    def test_env_files_interactive_none(self, git: MagicMock, work_tree: Path) -> None:
        """Choosing none removes the environment files."""
        with patch(
            "gitfresh.cli.main.prompt_secret_selection", return_value=ProtectNone()
        ) as mock_prompt:
            result = runner.invoke(app, ["-e"])

        assert result.exit_code == 0, result.output
        mock_prompt.assert_called_once_with((".env",))
        assert "No environment files will be protected" in result.output
        assert not (work_tree / ".env").exists()

    def test_no_env_files_found(self, git: MagicMock, work_tree: Path) -> None:
        """Requesting env protection without env files is not an error."""
        (work_tree / ".env").unlink()

        result = runner.invoke(app, ["-e"])

        assert result.exit_code == 0, result.output
        assert "No environment files found" in result.output

    def test_dry_run(self, git: MagicMock, work_tree: Path) -> None:
        """--dry-run lists removals and changes nothing."""
        result = runner.invoke(app, ["--dry-run", "-g", "*.local"])

        assert result.exit_code == 0, result.output
        assert "Dry-run: 2 item(s) would be removed" in result.output
        assert (work_tree / "tracked.txt").exists()
        git.has_changes.assert_not_called()
        git.stash_push.assert_not_called()
        git.restore.assert_not_called()

    def test_stash_failure(self, git: MagicMock, work_tree: Path) -> None:
        """A failed stash exits non-zero and leaves the tree alone."""
        git.has_changes.return_value = True
        git.stash_push.side_effect = GitError("stash failed")

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Failed to reset" in result.output
        assert (work_tree / "tracked.txt").exists()

    def test_invalid_config(self, git: MagicMock, tmp_path: Path) -> None:
        """A broken config file exits with an error."""
        config = tmp_path / "config.toml"
        config.write_text("protect_patterns = [")

        result = runner.invoke(app, ["--config", str(config)])

        assert result.exit_code == 1
        assert "Invalid TOML" in result.output
        git.find_root.assert_not_called()

    def test_config_defaults_applied(
        self, git: MagicMock, work_tree: Path, tmp_path: Path
    ) -> None:
        """Configured patterns protect files without flags."""
        config = tmp_path / "config.toml"
        config.write_text('protect_patterns = ["*.local"]\n')

        result = runner.invoke(app, ["--config", str(config)])

        assert result.exit_code == 0, result.output
        assert (work_tree / "secret.local").exists()

    def test_unexpected_error(self, git: MagicMock) -> None:
        """Unexpected errors are reported without a traceback."""
        git.find_root.side_effect = RuntimeError("boom")

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "boom" in result.output

    def test_spinner_stopped_on_unexpected_error(self, git: MagicMock) -> None:
        """A phase interrupted by an unexpected error does not leave its spinner running."""
        git.has_changes.return_value = True
        git.stash_push.side_effect = RuntimeError("boom")

        with patch("gitfresh.cli.display.console") as display_console:
            result = runner.invoke(app, [])

        assert result.exit_code == 1
        display_console.status.return_value.stop.assert_called_once()
