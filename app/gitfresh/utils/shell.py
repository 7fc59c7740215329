"""Subprocess helpers for invoking external tools such as git."""

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured output and exit code of a finished process."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """True when the process exited with code zero."""
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
    cwd: Path | None = None,
) -> CommandResult:
    """Run a process to completion and capture its text output.

    A non-zero exit code is reported in the result, never raised; callers
    decide which failures matter.

    Args:
        args: Executable followed by its arguments.
        timeout: Seconds to wait before giving up, or None to wait forever.
        cwd: Directory to run in; defaults to the current directory.

    Raises:
        subprocess.TimeoutExpired: The process outlived the timeout.
        FileNotFoundError: The executable does not exist.
    """
    completed = subprocess.run(
        args,
        capture_output=True,
        text=True,
        timeout=timeout,
        cwd=cwd,
    )
    return CommandResult(completed.stdout, completed.stderr, completed.returncode)


def command_exists(name: str) -> bool:
    """Check whether an executable is on PATH."""
    return shutil.which(name) is not None
