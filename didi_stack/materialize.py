"""Bundled template files and writing them into the generated project.

Templates live in ``didi_stack/templates/`` and are written verbatim; there
is no substitution step.
"""

from __future__ import annotations

from pathlib import Path

from .errors import TemplateError

TEMPLATES_DIR = Path(__file__).parent / "templates"


def available_templates() -> list[str]:
    return sorted(p.name for p in TEMPLATES_DIR.iterdir() if p.is_file())


def load_template(name: str) -> str:
    """Return the text of a bundled template.

    Raises:
        TemplateError: If no template with that name is bundled.
    """
    path = TEMPLATES_DIR / name
    if Path(name).name != name or not path.is_file():
        known = ", ".join(available_templates())
        raise TemplateError(f"Unknown template: {name} (bundled: {known})")
    return path.read_text(encoding="utf-8")


def write_template(path: Path, content: str) -> None:
    """Write ``content`` to ``path``, creating parent directories.

    Any existing file is overwritten without a backup. Line endings are
    written exactly as given.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline="")
