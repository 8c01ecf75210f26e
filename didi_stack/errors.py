"""Error types for didi-stack.

Lower layers raise these; the step runner turns them into failed step
results and only the CLI decides the exit code.
"""

from __future__ import annotations

from pathlib import Path


class DidiStackError(Exception):
    """Base class for all didi-stack errors."""


class UsageError(DidiStackError):
    """Bad or missing command-line arguments."""


class StepFailure(DidiStackError):
    """An external command exited non-zero, was missing, or timed out.

    Attributes:
        stage: Human-readable label of the step that failed.
        detail: Error output or reason, possibly empty.
    """

    def __init__(self, stage: str, detail: str = "") -> None:
        self.stage = stage
        self.detail = detail
        msg = f"{stage} failed"
        if detail:
            msg = f"{msg}:\n{detail}"
        super().__init__(msg)


class ConfigIOError(DidiStackError):
    """A JSON config document could not be read or written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ConfigReadError(ConfigIOError):
    """Missing file, invalid JSON, or an unexpected document shape."""


class ConfigWriteError(ConfigIOError):
    """The document could not be written back to disk."""


class TemplateError(DidiStackError):
    """A bundled template does not exist."""


class SettingsError(DidiStackError):
    """The didi-stack.toml settings file is invalid."""
