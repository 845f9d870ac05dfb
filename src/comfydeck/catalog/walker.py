"""Recursive directory walker used to discover model files."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

__all__ = ["walk"]


def walk(root_path: str | Path, accepted_extensions: Iterable[str]) -> list[str]:
    """List files under a folder whose extension is accepted.

    Subdirectories are visited recursively; directories themselves never
    appear in the result. Extensions are compared case-insensitively, so
    ``b.JSON`` matches ``.json``. Order follows the directory listing and is
    not sorted.

    Args:
        root_path: Folder to scan
        accepted_extensions: Lower-case extensions including the leading dot

    Returns:
        Paths relative to root_path, using the platform separator

    Raises:
        FileNotFoundError: If root_path does not exist
        OSError: If a folder cannot be listed
    """
    root = os.fspath(root_path)
    accepted = frozenset(ext.lower() for ext in accepted_extensions)
    files: list[str] = []
    _walk_into(root, root, accepted, files)
    return files


def _walk_into(folder: str, root: str, accepted: frozenset[str], files: list[str]) -> None:
    with os.scandir(folder) as entries:
        for entry in entries:
            if entry.is_dir():
                _walk_into(entry.path, root, accepted, files)
            elif entry.is_file():
                if os.path.splitext(entry.name)[1].lower() in accepted:
                    files.append(os.path.relpath(entry.path, root))
