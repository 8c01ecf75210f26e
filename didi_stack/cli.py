"""CLI entry point for didi-stack."""

from __future__ import annotations

import shlex
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from didi_stack.config import Settings, load_settings
from didi_stack.errors import SettingsError, UsageError
from didi_stack.models import RunInput
from didi_stack.pipeline import run_init
from didi_stack.shell import fatal

USAGE_ERROR = 'Missing or invalid command. Use "init".'


def _project_name(value: str) -> RunInput:
    """Prompt value processor: re-prompts until the name is usable."""
    try:
        return RunInput(name=value)
    except ValidationError as exc:
        msg = exc.errors()[0]["msg"].removeprefix("Value error, ")
        raise click.BadParameter(msg) from None


def _print_next_steps(run_input: RunInput, settings: Settings) -> None:
    click.secho("\nProject setup complete! Just run -\n", fg="green", bold=True)
    click.echo(f"\tcd {shlex.quote(run_input.name)}")
    click.echo(f"\t{settings.tool.run_script('local')}")
    click.secho("\nand your app will be up in no time.\n", fg="green", bold=True)


# `init` is the only accepted argument; no --help or --version either
@click.group(invoke_without_command=True, context_settings={"help_option_names": []})
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Scaffold a Vite + React + TailwindCSS + shadcn/ui starter project."""
    if ctx.invoked_subcommand is None:
        raise UsageError("Missing command.")


@cli.command()
def init() -> None:
    """Create a new project in the current directory."""
    base_dir = Path.cwd()
    try:
        settings = load_settings(base_dir)
    except SettingsError as exc:
        fatal(str(exc))

    question = "Let's get going. What will be the app's name"
    run_input = click.prompt(
        click.style(question, fg="magenta", bold=True),
        default=settings.default_name,
        value_proc=_project_name,
    )
    click.clear()

    result = run_init(run_input, settings, base_dir)
    if not result.ok:
        sys.exit(1)

    _print_next_steps(run_input, settings)


def main(argv: list[str] | None = None) -> None:
    """Run the CLI, mapping every usage error to exit code 1."""
    try:
        cli.main(args=argv, prog_name="didi-stack", standalone_mode=False)
    except (click.UsageError, UsageError):
        fatal(USAGE_ERROR)
    except click.ClickException as exc:
        exc.show()
        sys.exit(1)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)
