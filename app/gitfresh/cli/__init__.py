"""CLI package for git-fresh.

This package contains the Typer application, display helpers and prompts.
"""

from gitfresh.cli.main import app

__all__ = ["app"]
