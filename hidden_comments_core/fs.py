from __future__ import annotations

import os
from pathlib import Path, PurePosixPath


HIDDEN_MARKER = "."


def is_hidden_name(name: str) -> bool:
    """Return True for dot-prefixed names (hidden on POSIX and to most note indexes)."""
    return name.startswith(HIDDEN_MARKER) and name not in {".", ".."}


def has_hidden_component(relative_path: str) -> bool:
    return any(is_hidden_name(part) for part in PurePosixPath(relative_path).parts)


def normalize_path(relative_path: str) -> str:
    """
    Normalise a vault-relative path to forward slashes without leading,
    trailing or doubled separators.
    """
    cleaned = relative_path.replace("\\", "/")
    parts = [part for part in cleaned.split("/") if part and part != "."]
    if ".." in parts:
        raise ValueError(f"Path escapes the vault: {relative_path!r}")
    return "/".join(parts)


def path_exists(path: Path) -> bool:
    return os.path.lexists(path)


def rename_path(source: Path, destination: Path) -> Path:
    """
    Rename ``source`` to ``destination`` without ever replacing an existing
    destination (os.rename silently replaces empty directories on POSIX).
    """
    if not path_exists(source):
        raise FileNotFoundError(f"Source path not found: {source}")
    if path_exists(destination):
        raise FileExistsError(f"Destination already exists: {destination}")
    destination.parent.mkdir(parents=True, exist_ok=True)
    os.rename(source, destination)
    return destination


__all__ = [
    "HIDDEN_MARKER",
    "has_hidden_component",
    "is_hidden_name",
    "normalize_path",
    "path_exists",
    "rename_path",
]
