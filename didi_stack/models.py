"""Data models for didi-stack.

These Pydantic models describe the provisioning pipeline: the validated run
input, the step actions, and the results the runner reports back.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RunInput(BaseModel):
    """The project name collected at the start of a run.

    The name becomes a directory and a generator argument, so it must be a
    single path segment. It is never passed through a shell.

    Attributes:
        name: Project directory name, surrounding whitespace stripped.
    """

    model_config = ConfigDict(frozen=True)

    name: str

    @field_validator("name")
    @classmethod
    def _single_path_segment(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("project name must not be empty")
        if name in (".", ".."):
            raise ValueError(f"{name!r} is not a valid project name")
        if "/" in name or "\\" in name:
            raise ValueError("project name must not contain path separators")
        if any(ord(ch) < 32 or ord(ch) == 127 for ch in name):
            raise ValueError("project name must not contain control characters")
        if name.startswith("-"):
            raise ValueError("project name must not start with '-'")
        return name


class Command(BaseModel):
    """An external program invocation.

    Attributes:
        argv: Program followed by its arguments. Never joined into a shell string.
        cwd: "root" runs inside the project root, "parent" in the directory
             that will contain it (only the generator needs that).
    """

    kind: Literal["command"] = "command"
    argv: list[str]
    cwd: Literal["root", "parent"] = "root"


class FileWrite(BaseModel):
    """Write a bundled template verbatim to a path under the project root."""

    kind: Literal["file"] = "file"
    path: str
    template: str


class JsonMerge(BaseModel):
    """Shallow-merge ``value`` into the mapping at ``key_path`` of a JSON file."""

    kind: Literal["json"] = "json"
    path: str
    key_path: list[str]
    value: dict[str, Any]


class EnterProject(BaseModel):
    """Check that the generator created the project root."""

    kind: Literal["enter"] = "enter"


Action = Annotated[
    Union[Command, FileWrite, JsonMerge, EnterProject], Field(discriminator="kind")
]


class Step(BaseModel):
    """One unit of the provisioning pipeline.

    Attributes:
        name: Stage label shown while the step runs and when it finishes.
        action: What the step does.
        header: Optional section heading printed before the step.
    """

    name: str
    action: Action
    header: str | None = None


class StepResult(BaseModel):
    """Outcome of a single step."""

    step: str
    ok: bool
    error: str | None = None


class PipelineResult(BaseModel):
    """Outcome of a run: one result per executed step, in order."""

    results: list[StepResult] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(r.ok for r in self.results)

    @property
    def failed(self) -> StepResult | None:
        """The step that stopped the run, if any."""
        return next((r for r in self.results if not r.ok), None)
