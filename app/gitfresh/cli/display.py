"""Shared Rich display functions for reset progress and results.

Provides the phase progress reporter, protected-path listings, the
dry-run table and the final summary.
"""

from collections.abc import Sequence

from rich.markup import escape
from rich.status import Status
from rich.table import Table

from gitfresh.core.reset import ResetReporter
from gitfresh.models.reset import Phase, PopOutcome, ResetSummary, WipeResult
from gitfresh.protection.resolver import ProtectionReport
from gitfresh.utils.formatting import (
    console,
    print_muted,
    print_success,
    print_warning,
)


class ConsoleReporter(ResetReporter):
    """Shows each phase as a spinner followed by a result line."""

    def __init__(self) -> None:
        self._status: Status | None = None

    def close(self) -> None:
        """Stop a running spinner."""
        if self._status is not None:
            self._status.stop()
            self._status = None

    def phase_started(self, phase: Phase, message: str) -> None:
        self.close()
        self._status = console.status(message)
        self._status.start()

    def phase_succeeded(self, phase: Phase, message: str) -> None:
        self.close()
        console.print(f"[success]✓ {message}[/]")

    def phase_warned(self, phase: Phase, message: str) -> None:
        self.close()
        console.print(f"[warning]⚠ {message}[/]")

    def phase_failed(self, phase: Phase, message: str) -> None:
        self.close()
        console.print(f"[error]✗ {message}[/]")

    def phase_skipped(self, phase: Phase, message: str) -> None:
        self.close()
        print_muted(f"ℹ {message}")


def print_protected_paths(title: str, paths: Sequence[str]) -> None:
    """Print a list of protected paths under a heading."""
    console.print(f"[protected]{title}[/]")
    for path in paths:
        console.print(f"   [muted]✓ {escape(path)}[/]")


def print_protection_report(report: ProtectionReport, *, secret_requested: bool) -> None:
    """Print what each protection source contributed.

    Args:
        report: Resolved protection report.
        secret_requested: Whether environment file protection was requested.
    """
    for pattern, matches in report.pattern_matches:
        if matches:
            title = f'Protecting {len(matches)} file(s) matching pattern "{escape(pattern)}":'
            print_protected_paths(title, matches)
        else:
            print_muted(f'ℹ No files found matching pattern "{escape(pattern)}"')

    if secret_requested:
        if not report.secret_files:
            print_muted("ℹ No environment files found")
        elif report.protected_secret_files:
            print_protected_paths(
                f"Protecting {len(report.protected_secret_files)} environment file(s):",
                report.protected_secret_files,
            )
        else:
            print_muted("ℹ No environment files will be protected")

    for warning in report.warnings:
        print_warning(escape(warning))


def create_plan_table(result: WipeResult) -> Table:
    """Create a Rich table listing the entries a wipe would remove.

    Args:
        result: Dry-run wipe result.

    Returns:
        Rich Table configured for the planned removals.
    """
    table = Table(
        title="Planned Removals (dry-run)",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", no_wrap=True)

    for path in result.removed:
        table.add_row(f"[removed]{escape(path)}[/]")

    return table


def print_plan(result: WipeResult, protected_count: int) -> None:
    """Print the dry-run plan and its totals."""
    if result.removed:
        console.print(create_plan_table(result))
    console.print(
        f"\n[dim]Dry-run: {result.removed_count} item(s) would be removed, "
        f"{protected_count} protected path(s) kept[/dim]"
    )
    for warning in result.warnings:
        print_warning(escape(f"Could not read {warning.path}: {warning.error}"))


def print_summary(summary: ResetSummary) -> None:
    """Print the final summary of a completed run.

    Args:
        summary: Result of the run.
    """
    for warning in summary.wipe.warnings:
        print_warning(escape(f"Could not remove {warning.path}: {warning.error}"))

    if summary.pop_outcome == PopOutcome.CONFLICTED:
        print_warning(
            'Your stashed changes are still saved. Run "git stash list" to inspect them '
            'and "git stash pop" once conflicts are resolved.'
        )

    if summary.has_warnings:
        console.print("\n[warning][bold]Git working directory reset with warnings.[/bold][/]")
    else:
        console.print("\n[success][bold]Git working directory reset successfully![/bold][/]")

    stash_label = {
        PopOutcome.APPLIED: "[success]applied[/]",
        PopOutcome.SKIPPED: "[muted]skipped (no changes)[/]",
        PopOutcome.CONFLICTED: "[warning]conflicted (kept in stash list)[/]",
    }[summary.pop_outcome]

    console.print(f"[dim]Items removed:[/dim] {summary.wipe.removed_count}")
    console.print(f"[dim]Protected paths:[/dim] {summary.protected_count}")
    if summary.wipe.warning_count:
        console.print(f"[dim]Wipe warnings:[/dim] {summary.wipe.warning_count}")
    console.print(f"[dim]Stashed changes:[/dim] {stash_label}")

    if summary.protected_count:
        print_success("\nProtected files were preserved and remain untouched.")


def print_stash_entries(entries: Sequence[str]) -> None:
    """List stash entries kept after a failed pop."""
    if not entries:
        return
    console.print("\n[dim]Stash entries:[/dim]")
    for entry in entries:
        console.print(f"   [muted]{escape(entry)}[/]")
