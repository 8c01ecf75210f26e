"""Optional per-directory settings for didi-stack.

A ``didi-stack.toml`` in the directory where ``didi-stack init`` runs can
override the package manager, the Vite template, and a few defaults:

    package_manager = "pnpm"
    template = "react-swc-ts"
    command_timeout = 600

The file is read with tomlkit and validated with Pydantic. Unknown keys are
rejected so typos do not silently fall back to defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import tomlkit
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from tomlkit.exceptions import TOMLKitError

from .errors import SettingsError
from .models import RunInput

SETTINGS_FILE = "didi-stack.toml"


class PackageManager(BaseModel):
    """Command shapes for one JavaScript package manager.

    Attributes:
        name: Executable name (npm, pnpm, ...).
        add_verb: Subcommand that adds dependencies ("install" for npm).
        runner: Prefix that runs a locally installed binary (npx, pnpm exec, ...).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    add_verb: str
    runner: tuple[str, ...]

    def create(self, project: str, template: str) -> list[str]:
        """Argument list for the Vite generator."""
        flags = ["--template", template]
        if self.name == "npm":
            # npm swallows generator flags unless they follow "--"
            return ["npm", "create", "vite@latest", project, "--", *flags]
        return [self.name, "create", "vite", project, *flags]

    def install(self) -> list[str]:
        return [self.name, "install"]

    def add(self, *packages: str, dev: bool = False) -> list[str]:
        flags = ["-D"] if dev else []
        return [self.name, self.add_verb, *flags, *packages]

    def exec(self, *args: str) -> list[str]:
        return [*self.runner, *args]

    def run_script(self, script: str) -> str:
        """Command line the user types to run a package.json script."""
        return f"{self.name} run {script}"


PACKAGE_MANAGERS: dict[str, PackageManager] = {
    "npm": PackageManager(name="npm", add_verb="install", runner=("npx",)),
    "pnpm": PackageManager(name="pnpm", add_verb="add", runner=("pnpm", "exec")),
    "yarn": PackageManager(name="yarn", add_verb="add", runner=("yarn",)),
    "bun": PackageManager(name="bun", add_verb="add", runner=("bunx",)),
}


class Settings(BaseModel):
    """Validated contents of didi-stack.toml.

    Attributes:
        package_manager: Which package manager drives installs and the generator.
        template: Vite template selector passed to the generator.
        default_name: Default answer for the project name prompt.
        commit_message: Message of the initial git commit.
        command_timeout: Seconds before an external command is killed.
            None waits indefinitely.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    package_manager: Literal["npm", "pnpm", "yarn", "bun"] = "npm"
    template: str = Field(default="react-ts", min_length=1)
    default_name: str = "Dont Leave Me Like This"
    commit_message: str = Field(default="Initial commit", min_length=1)
    command_timeout: float | None = Field(default=None, gt=0)

    @field_validator("default_name")
    @classmethod
    def _usable_project_name(cls, value: str) -> str:
        try:
            return RunInput(name=value).name
        except ValidationError as exc:
            msg = exc.errors()[0]["msg"].removeprefix("Value error, ")
            raise ValueError(msg) from None

    @property
    def tool(self) -> PackageManager:
        return PACKAGE_MANAGERS[self.package_manager]


def load_settings(directory: Path) -> Settings:
    """Load didi-stack.toml from ``directory``, or defaults if it is absent.

    Raises:
        SettingsError: If the file cannot be read, parsed, or validated.
    """
    path = directory / SETTINGS_FILE
    if not path.exists():
        return Settings()

    try:
        doc = tomlkit.parse(path.read_text(encoding="utf-8"))
    except (OSError, TOMLKitError) as exc:
        raise SettingsError(f"Could not read {path}: {exc}") from exc

    try:
        return Settings.model_validate(doc.unwrap())
    except ValidationError as exc:
        raise SettingsError(f"Invalid {path}:\n{exc}") from exc
