"""
Data models and helpers for the file walker module.
"""

import os
from typing import Iterable

ExtensionSet = frozenset[str]


def parse_extensions(value: str | Iterable[str] | None) -> ExtensionSet:
    """
    Build an ExtensionSet from a comma-separated string or an iterable.

    Items are stripped of surrounding whitespace and empty items dropped;
    otherwise they are kept verbatim (no leading dot added, no case folding),
    so ".go" matches "main.go" but "go" matches nothing.

    Args:
        value: e.g. ".go,.txt", [".go", ".txt"], or None

    Returns:
        Frozen set of extensions; empty means "include every file"
    """
    if not value:
        return frozenset()

    parts = value.split(",") if isinstance(value, str) else value
    return frozenset(part.strip() for part in parts if part and part.strip())


def file_extension(name: str) -> str:
    """
    Return the extension of the final path element, including the dot.

    The extension starts at the last "." of the name: "main.go" -> ".go",
    "archive.tar.gz" -> ".gz", ".bashrc" -> ".bashrc", "Makefile" -> "".
    """
    base = os.path.basename(name)
    idx = base.rfind(".")
    if idx < 0:
        return ""
    return base[idx:]
