"""Provisioning pipeline: generate → install → configure → template → commit.

This module builds and runs the didi-stack provisioning steps:
1. Generate a Vite + React (TypeScript) app
2. Install its dependencies
3. Install and initialise TailwindCSS, add @/* path aliases
4. Install the shadcn/ui helper libraries
5. Overwrite the boilerplate with the bundled templates
6. Add a `local` script to package.json
7. Initialise git and make the first commit

Steps form a strict chain: each one assumes everything before it succeeded,
so the runner stops at the first failure and leaves the project as it is.
Every step receives the project root explicitly; the process working
directory is never changed.
"""

from __future__ import annotations

from pathlib import Path

import click

from .config import Settings
from .errors import DidiStackError, StepFailure
from .jsonc import update_config
from .materialize import load_template, write_template
from .models import (
    Command,
    EnterProject,
    FileWrite,
    JsonMerge,
    PipelineResult,
    RunInput,
    Step,
    StepResult,
)
from .shell import fail, run, step, succeed

TAILWIND_PACKAGES = ("tailwindcss@3", "postcss", "autoprefixer")
SHADCN_PACKAGES = (
    "tailwindcss-animate",
    "class-variance-authority",
    "clsx",
    "tailwind-merge",
    "lucide-react",
)
PATH_ALIASES = {"baseUrl": ".", "paths": {"@/*": ["./src/*"]}}
LOCAL_SCRIPT = {"local": "vite --open"}

# (path in the generated project, bundled template name, stage label)
TEMPLATE_FILES = (
    ("tailwind.config.js", "tailwind.config.js", "Configured TailwindCSS"),
    ("src/styles/globals.css", "globals.css", "Configured styles"),
    ("src/App.tsx", "App.tsx", "Wrote App component"),
    ("src/main.tsx", "main.tsx", "Wrote main entry"),
    ("index.html", "index.html", "Landing page ready!"),
    ("src/lib/utils.ts", "utils.ts", "Added utility functions"),
)


def build_steps(run_input: RunInput, settings: Settings) -> list[Step]:
    """Return the ordered provisioning steps for one project.

    The project name appears only in the generator command; every later step
    addresses files relative to the project root.
    """
    pm = settings.tool

    return [
        Step(
            name="Creating App",
            header="Starting with our Vite + React (TypeScript) app",
            action=Command(
                argv=pm.create(run_input.name, settings.template), cwd="parent"
            ),
        ),
        Step(name=f"Entered {run_input.name}", action=EnterProject()),
        Step(
            name="Dependencies Installation",
            header="Installing project dependencies",
            action=Command(argv=pm.install()),
        ),
        Step(
            name="Installing TailwindCSS",
            header="Installing TailwindCSS, cus you have style...",
            action=Command(argv=pm.add(*TAILWIND_PACKAGES, dev=True)),
        ),
        Step(
            name="Initializing TailwindCSS",
            action=Command(argv=pm.exec("tailwindcss", "init", "-p")),
        ),
        Step(
            name="Updated tsconfig.json",
            action=JsonMerge(
                path="tsconfig.json",
                key_path=["compilerOptions"],
                value=PATH_ALIASES,
            ),
        ),
        Step(
            name="Installing Shadcn/ui",
            action=Command(argv=pm.add(*SHADCN_PACKAGES)),
        ),
        *(
            Step(name=label, action=FileWrite(path=path, template=name))
            for path, name, label in TEMPLATE_FILES
        ),
        Step(
            name="Updated package.json with custom scripts",
            action=JsonMerge(
                path="package.json", key_path=["scripts"], value=LOCAL_SCRIPT
            ),
        ),
        Step(
            name="Initializing Git repository",
            header="Initializing a Git repository",
            action=Command(argv=["git", "init"]),
        ),
        Step(
            name="Created .gitignore file",
            header="Creating .gitignore file",
            action=FileWrite(path=".gitignore", template="gitignore"),
        ),
        Step(
            name="Staging files for initial commit",
            header="Making the initial commit",
            action=Command(argv=["git", "add", "."]),
        ),
        Step(
            name="Making initial commit",
            action=Command(argv=["git", "commit", "-m", settings.commit_message]),
        ),
    ]


def execute(item: Step, root: Path, *, timeout: float | None = None) -> None:
    """Perform one step's side effect, raising on failure."""
    action = item.action
    if isinstance(action, Command):
        cwd = root.parent if action.cwd == "parent" else root
        run(*action.argv, cwd=cwd, stage=item.name, timeout=timeout)
    elif isinstance(action, EnterProject):
        if not root.is_dir():
            raise StepFailure(item.name, f"{root} was not created by the generator")
    elif isinstance(action, FileWrite):
        write_template(root / action.path, load_template(action.template))
    elif isinstance(action, JsonMerge):
        update_config(root / action.path, action.key_path, action.value)
    else:
        raise TypeError(f"Unsupported step action: {action!r}")


def run_step(item: Step, root: Path, *, timeout: float | None = None) -> StepResult:
    """Run one step and report its outcome instead of raising."""
    if item.header:
        step(item.header)
    if isinstance(item.action, Command):
        click.secho(f"   - {item.name}...", dim=True)

    try:
        execute(item, root, timeout=timeout)
    except (DidiStackError, OSError) as exc:
        fail(item.name, str(exc))
        return StepResult(step=item.name, ok=False, error=str(exc))

    succeed(item.name)
    return StepResult(step=item.name, ok=True)


def run_steps(
    steps: list[Step], root: Path, *, timeout: float | None = None
) -> PipelineResult:
    """Run steps in order, stopping at the first failure.

    Nothing is rolled back: a failed run leaves the project partially
    provisioned, and the fix is to start over in a fresh directory.
    """
    result = PipelineResult()
    for s in steps:
        outcome = run_step(s, root, timeout=timeout)
        result.results.append(outcome)
        if not outcome.ok:
            break
    return result


def run_init(run_input: RunInput, settings: Settings, base_dir: Path) -> PipelineResult:
    """Scaffold ``run_input.name`` inside ``base_dir``.

    Args:
        run_input: Validated project name.
        settings: Loaded didi-stack.toml settings.
        base_dir: Directory the project directory is created in.
    """
    root = base_dir / run_input.name
    steps = build_steps(run_input, settings)
    return run_steps(steps, root, timeout=settings.command_timeout)
