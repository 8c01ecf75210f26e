"""JSON config reading and writing utilities.

tsconfig.json and friends are JSON-with-comments, so documents are parsed
with json5 (comments and trailing commas allowed) and written back as plain
JSON with two-space indentation. Comments do not survive the round trip;
key order does.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import json5

from .errors import ConfigReadError, ConfigWriteError


def read_config(path: Path) -> dict[str, Any]:
    """Load and parse a JSON-with-comments document.

    Raises:
        ConfigReadError: If the file is missing, unreadable, not valid JSON
            once comments are ignored, or not a JSON object.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigReadError(path, f"not UTF-8 text: {exc}") from exc
    except OSError as exc:
        raise ConfigReadError(path, exc.strerror or str(exc)) from exc

    try:
        doc = json5.loads(text)
    except ValueError as exc:
        raise ConfigReadError(path, f"invalid JSON: {exc}") from exc

    if not isinstance(doc, dict):
        raise ConfigReadError(path, "top level is not a JSON object")
    return doc


def write_config(path: Path, doc: Mapping[str, Any]) -> None:
    """Serialize a document back to disk with stable formatting.

    Raises:
        ConfigWriteError: On any I/O failure, or if the document holds
            values plain JSON cannot express (NaN, Infinity).
    """
    try:
        text = json.dumps(doc, indent=2, ensure_ascii=False, allow_nan=False) + "\n"
    except ValueError as exc:
        raise ConfigWriteError(path, f"not representable as JSON: {exc}") from exc

    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ConfigWriteError(path, exc.strerror or str(exc)) from exc


def merge_field(
    doc: Mapping[str, Any], key_path: Sequence[str], value: Mapping[str, Any]
) -> dict[str, Any]:
    """Shallow-merge ``value`` into the mapping found at ``key_path``.

    Returns a new document; ``doc`` is not modified. Missing mappings along
    the path are created. Existing keys keep their position, new keys are
    appended, and keys in ``value`` overwrite whatever was there. Merging the
    same value twice gives the same document as merging it once.

    Examples:
        merge_field({"scripts": {"dev": "vite"}}, ["scripts"], {"local": "vite --open"})
        → {"scripts": {"dev": "vite", "local": "vite --open"}}

    Raises:
        ValueError: If something other than an object sits on the path.
    """
    merged = dict(doc)
    target = merged
    for depth, key in enumerate(key_path, start=1):
        current = target.get(key)
        if current is None:
            current = {}
        if not isinstance(current, Mapping):
            dotted = ".".join(key_path[:depth])
            raise ValueError(f"expected an object at {dotted!r}")
        current = dict(current)
        target[key] = current
        target = current
    target.update(value)
    return merged


def update_config(
    path: Path, key_path: Sequence[str], value: Mapping[str, Any]
) -> dict[str, Any]:
    """Read ``path``, merge ``value`` at ``key_path`` and write it back.

    Raises:
        ConfigReadError: If the document cannot be read or has the wrong shape.
        ConfigWriteError: If the result cannot be written.
    """
    try:
        doc = merge_field(read_config(path), key_path, value)
    except ValueError as exc:
        raise ConfigReadError(path, str(exc)) from exc
    write_config(path, doc)
    return doc
