"""Utility modules for git-fresh.

This module exports commonly used utility functions.
"""

from gitfresh.utils.formatting import (
    console,
    err_console,
    print_error,
    print_muted,
    print_success,
    print_warning,
)
from gitfresh.utils.shell import CommandResult, command_exists, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "print_error",
    "print_muted",
    "print_success",
    "print_warning",
    "run_command",
]
