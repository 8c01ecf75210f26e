"""Shell and terminal utilities.

Provides a wrapper around subprocess for running external tools as argument
lists, plus the status output shown while the pipeline runs.
"""

from __future__ import annotations

import shutil
import subprocess
import sys
from pathlib import Path

import click

from .errors import StepFailure

# Lines of child stderr kept for the failure report
STDERR_TAIL = 20


def run(
    *args: str, cwd: Path, stage: str, timeout: float | None = None
) -> subprocess.CompletedProcess[str]:
    """Run an external command without a shell.

    The child's stdin and stdout are discarded and its stderr is captured
    only so it can be reported when the command fails.

    Args:
        *args: Program and arguments (e.g., "npm", "install").
        cwd: Directory to run the command in.
        stage: Stage label used in the raised error.
        timeout: Seconds before the child is killed, or None to wait forever.

    Raises:
        StepFailure: On a non-zero exit, a missing program
            or working directory, or a timeout.
    """
    if not cwd.is_dir():
        raise StepFailure(stage, f"working directory {cwd} does not exist")

    # Resolve launchers like npm.cmd on Windows
    program = shutil.which(args[0]) or args[0]
    try:
        result = subprocess.run(
            [program, *args[1:]],
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError:
        raise StepFailure(stage, f"{args[0]}: command not found") from None
    except subprocess.TimeoutExpired:
        raise StepFailure(stage, f"{args[0]} timed out after {timeout}s") from None

    if result.returncode != 0:
        tail = "\n".join((result.stderr or "").strip().splitlines()[-STDERR_TAIL:])
        detail = f"`{' '.join(args)}` exited with status {result.returncode}"
        raise StepFailure(stage, f"{detail}\n{tail}" if tail else detail)
    return result


def step(msg: str) -> None:
    """Print a visually distinct step header."""
    click.secho(f" - {msg}", fg="cyan", bold=True)


def succeed(stage: str) -> None:
    click.secho(f"✔  - {stage}", fg="green")


def fail(stage: str, detail: str | None = None) -> None:
    """Mark a stage as failed and print the underlying error to stderr."""
    click.secho(f"✖  - {stage} (Failed)", fg="red", err=True)
    if detail:
        click.echo(detail, err=True)


def fatal(msg: str) -> None:
    """Print an error message and exit with code 1.

    Only the CLI layer calls this; everything below it raises or returns
    results instead.
    """
    click.secho(f"Error: {msg}", fg="red", bold=True, err=True)
    sys.exit(1)
