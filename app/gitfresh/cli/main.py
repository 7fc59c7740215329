"""Main CLI application entry point.

Defines the Typer application: option parsing, protection resolution
and the reset run, with every fatal error turned into a clean message
and a non-zero exit code.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from gitfresh import __version__
from gitfresh.cli.display import (
    ConsoleReporter,
    print_plan,
    print_protection_report,
    print_stash_entries,
    print_summary,
)
from gitfresh.cli.prompts import prompt_secret_selection
from gitfresh.core.config import ConfigError, FreshConfig, load_config
from gitfresh.core.errors import GitFreshError
from gitfresh.core.reset import ResetOrchestrator
from gitfresh.models.reset import PopOutcome
from gitfresh.protection.resolver import ProtectedPathResolver, ProtectionRequest
from gitfresh.utils.formatting import console, print_error
from gitfresh.vcs.git import GitError, GitRepository

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="git-fresh",
    help="Reset your Git working directory to a clean state without re-cloning.",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"git-fresh version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, at DEBUG level when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def build_request(
    config: FreshConfig,
    *,
    ignore_env_files: bool,
    skip_confirmation: bool,
    glob_patterns: list[str] | None,
) -> ProtectionRequest:
    """Merge command-line flags with configured defaults.

    Args:
        config: Loaded configuration.
        ignore_env_files: --ignore-env-files flag.
        skip_confirmation: --skip-confirmation flag.
        glob_patterns: --ignore-glob-files values.

    Returns:
        ProtectionRequest for the resolver.
    """
    return ProtectionRequest(
        glob_patterns=(*config.protect_patterns, *(glob_patterns or [])),
        protect_secret_files=ignore_env_files or config.ignore_env_files,
        interactive=not (skip_confirmation or config.skip_confirmation),
        extra_secret_patterns=tuple(config.secret_patterns),
    )


@app.command()
def fresh(
    ignore_env_files: Annotated[
        bool,
        typer.Option(
            "--ignore-env-files",
            "-e",
            help="Protect environment files (.env, .env.*, *.env) from removal.",
        ),
    ] = False,
    skip_confirmation: Annotated[
        bool,
        typer.Option(
            "--skip-confirmation",
            "-y",
            help="Protect all detected environment files without prompting.",
        ),
    ] = False,
    ignore_glob_files: Annotated[
        list[str] | None,
        typer.Option(
            "--ignore-glob-files",
            "-g",
            metavar="PATTERN",
            help="Protect files matching a glob pattern. Can be repeated.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be removed without changing anything."),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="Path to config file (default: ~/.config/git-fresh/config.toml).",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Stash changes, wipe the working tree, restore from Git and re-apply the stash.

    The .git directory and protected files are never removed.
    """
    configure_logging(verbose)

    try:
        config = load_config(config_path)
        _run(
            config,
            build_request(
                config,
                ignore_env_files=ignore_env_files,
                skip_confirmation=skip_confirmation,
                glob_patterns=ignore_glob_files,
            ),
            dry_run=dry_run,
        )
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except GitFreshError as e:
        print_error(f"Failed to reset Git working directory: {e.message}")
        raise typer.Exit(code=1) from e
    except (typer.Exit, typer.Abort):
        raise
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        print_error(f"Failed to reset Git working directory: {e}")
        raise typer.Exit(code=1) from e


def _run(config: FreshConfig, request: ProtectionRequest, *, dry_run: bool) -> None:
    """Resolve protected paths and run (or plan) the reset."""
    console.print("[title]Git Fresh - Resetting working directory[/title]\n")

    git = GitRepository()
    reporter = ConsoleReporter()
    orchestrator = ResetOrchestrator(
        git,
        reporter=reporter,
        stash_message=config.stash_message,
    )
    try:
        _reset(orchestrator, git, request, excluded_dirs=config.excluded_dirs, dry_run=dry_run)
    finally:
        reporter.close()


def _reset(
    orchestrator: ResetOrchestrator,
    git: GitRepository,
    request: ProtectionRequest,
    *,
    excluded_dirs: list[str],
    dry_run: bool,
) -> None:
    root = orchestrator.initialize()

    resolver = ProtectedPathResolver(
        root,
        selector=prompt_secret_selection,
        excluded_dirs=excluded_dirs,
    )
    report = resolver.resolve(request)
    print_protection_report(report, secret_requested=request.protect_secret_files)

    if dry_run:
        print_plan(orchestrator.plan(report.protected), len(report.protected))
        return

    summary = orchestrator.run(report.protected)
    print_summary(summary)

    if summary.pop_outcome == PopOutcome.CONFLICTED:
        try:
            print_stash_entries(git.stash_list())
        except GitError as e:
            logger.warning("Could not list stash entries: %s", e.message)


if __name__ == "__main__":
    app()
