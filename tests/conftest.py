"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

GitRunner = Callable[..., str]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch):
    """Point XDG_CONFIG_HOME at an empty directory so user config is never read."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def run_git(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> GitRunner:
    """Run git commands with an isolated identity and global config.

    Returns a callable ``run_git(repo, *args)`` returning stdout.
    """
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    global_config = tmp_path / "gitconfig"
    global_config.write_text("[init]\n\tdefaultBranch = main\n")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(global_config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")

    def _run(repo: Path, *args: str) -> str:
        result = subprocess.run(
            ["git", *args],
            cwd=repo,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout

    return _run


@pytest.fixture
def git_repo(tmp_path: Path, run_git: GitRunner) -> Path:
    """Create an empty Git repository without commits."""
    repo = tmp_path / "repo"
    repo.mkdir()
    run_git(repo, "init", "-q")
    return repo


@pytest.fixture
def committed_repo(git_repo: Path, run_git: GitRunner) -> Path:
    """Create a repository with one commit.

    Tracked: tracked.txt ("v1"), src/app.py, .gitignore (ignores *.log and .env).
    """
    (git_repo / "tracked.txt").write_text("v1\n")
    (git_repo / "src").mkdir()
    (git_repo / "src" / "app.py").write_text("print('hello')\n")
    (git_repo / ".gitignore").write_text("*.log\n.env\n")
    run_git(git_repo, "add", "-A")
    run_git(git_repo, "commit", "-q", "-m", "initial")
    return git_repo
