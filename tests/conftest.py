"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

TSCONFIG_WITH_COMMENTS = """\
{
  "compilerOptions": {
    "target": "ES2020",
    "useDefineForClassFields": true,
    "lib": ["ES2020", "DOM", "DOM.Iterable"],
    "module": "ESNext",
    "skipLibCheck": true,

    /* Bundler mode */
    "moduleResolution": "bundler",
    "allowImportingTsExtensions": true,
    "noEmit": true,
    "jsx": "react-jsx",

    // Linting
    "strict": true,
    "noUnusedLocals": true
  },
  "include": ["src"]
}
"""

TSCONFIG_WITHOUT_COMMENTS = """\
{
  "compilerOptions": {
    "target": "ES2020",
    "useDefineForClassFields": true,
    "lib": ["ES2020", "DOM", "DOM.Iterable"],
    "module": "ESNext",
    "skipLibCheck": true,

    "moduleResolution": "bundler",
    "allowImportingTsExtensions": true,
    "noEmit": true,
    "jsx": "react-jsx",

    "strict": true,
    "noUnusedLocals": true
  },
  "include": ["src"]
}
"""

PACKAGE_JSON = {
    "name": "foo-bar",
    "private": True,
    "version": "0.0.0",
    "type": "module",
    "scripts": {
        "dev": "vite",
        "build": "tsc -b && vite build",
        "lint": "eslint .",
        "preview": "vite preview",
    },
    "dependencies": {"react": "^18.3.1", "react-dom": "^18.3.1"},
}


def write_generated_project(root: Path) -> None:
    """Lay out the files the Vite generator would leave behind."""
    (root / "src").mkdir(parents=True)
    (root / "tsconfig.json").write_text(TSCONFIG_WITH_COMMENTS)
    (root / "package.json").write_text(json.dumps(PACKAGE_JSON, indent=2) + "\n")
    (root / "src" / "App.tsx").write_text("export default function App() {}\n")
    (root / "index.html").write_text("<!doctype html>\n")


@pytest.fixture
def tsconfig(tmp_path: Path) -> Path:
    """A tsconfig.json with line and block comments."""
    path = tmp_path / "tsconfig.json"
    path.write_text(TSCONFIG_WITH_COMMENTS)
    return path


@pytest.fixture
def package_json(tmp_path: Path) -> Path:
    """A package.json as generated by create-vite."""
    path = tmp_path / "package.json"
    path.write_text(json.dumps(PACKAGE_JSON, indent=2) + "\n")
    return path


@pytest.fixture
def generated_project(tmp_path: Path) -> Path:
    """A directory that looks like a freshly generated Vite project."""
    root = tmp_path / "Foo Bar"
    write_generated_project(root)
    return root


@pytest.fixture
def plain_tsconfig(tmp_path: Path) -> Path:
    """The same tsconfig.json with its comments removed by hand."""
    path = tmp_path / "plain.json"
    path.write_text(TSCONFIG_WITHOUT_COMMENTS)
    return path


@pytest.fixture
def make_generated_project():
    """Factory that lays out a generated project at a given root."""
    return write_generated_project
