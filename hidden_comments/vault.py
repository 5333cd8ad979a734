from __future__ import annotations

import logging
from pathlib import Path

from hidden_comments_core.fs import (
    has_hidden_component,
    normalize_path,
    path_exists,
    rename_path,
)
from hidden_comments_core.text import read_text_auto, write_text_utf8

from .constants import MARKDOWN_SUFFIX
from .models import Entry, EntryKind


logger = logging.getLogger(__name__)


class RawAdapter:
    """
    Path-level access to the vault directory.

    Unlike the indexed `Vault` operations this layer sees dot-prefixed
    entries.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def resolve(self, relative_path: str) -> Path:
        normalized = normalize_path(relative_path)
        return self.root / normalized if normalized else self.root

    def path_exists(self, relative_path: str) -> bool:
        return path_exists(self.resolve(relative_path))

    def rename_path(self, old_path: str, new_path: str) -> None:
        rename_path(self.resolve(old_path), self.resolve(new_path))
        logger.info("Renamed %s -> %s (raw)", old_path, new_path)


class Vault:
    """
    Document tree rooted at a directory.

    The indexed operations (`list_documents`, `get_entry_by_path`) behave
    like a note index: anything under a dot-prefixed name is invisible to
    them. Use `adapter` to reach those paths.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self.adapter = RawAdapter(self.root)

    def list_document_paths(self) -> list[str]:
        """Return the sorted vault-relative paths of all indexed markdown documents."""
        if not self.root.is_dir():
            return []
        paths: list[str] = []
        for path in self.root.rglob(f"*{MARKDOWN_SUFFIX}"):
            relative = path.relative_to(self.root).as_posix()
            if has_hidden_component(relative) or not path.is_file():
                continue
            paths.append(relative)
        return sorted(paths)

    def list_documents(self) -> list[str]:
        """Return the sorted file names of all indexed markdown documents."""
        return sorted(relative.rsplit("/", 1)[-1] for relative in self.list_document_paths())

    def get_entry_by_path(self, relative_path: str) -> Entry:
        normalized = normalize_path(relative_path)
        if not normalized or has_hidden_component(normalized):
            return Entry.absent(normalized)
        target = self.root / normalized
        if target.is_dir():
            return Entry(kind=EntryKind.FOLDER, path=normalized)
        if target.is_file():
            return Entry(kind=EntryKind.FILE, path=normalized)
        return Entry.absent(normalized)

    def create_folder(self, relative_path: str) -> Entry:
        normalized = normalize_path(relative_path)
        target = self.root / normalized
        target.mkdir(parents=True, exist_ok=False)
        logger.info("Created folder %s", normalized)
        return Entry(kind=EntryKind.FOLDER, path=normalized)

    def create_file(self, relative_path: str, contents: str) -> Entry:
        """
        Create a new document. The parent folder must already exist and an
        existing file is never overwritten.
        """
        normalized = normalize_path(relative_path)
        target = self.root / normalized
        if not target.parent.is_dir():
            raise FileNotFoundError(f"Folder not found for new file: {target.parent}")
        write_text_utf8(target, contents, exclusive=True)
        logger.info("Created file %s", normalized)
        return Entry(kind=EntryKind.FILE, path=normalized)

    def read_file(self, relative_path: str) -> str:
        return read_text_auto(self.adapter.resolve(relative_path))

    def write_file(self, relative_path: str, contents: str) -> None:
        write_text_utf8(self.adapter.resolve(relative_path), contents)

    def rename_entry(self, entry: Entry, new_path: str) -> Entry:
        if entry.kind is EntryKind.ABSENT:
            raise FileNotFoundError(f"Cannot rename missing entry: {entry.path}")
        normalized = normalize_path(new_path)
        rename_path(self.root / entry.path, self.root / normalized)
        logger.info("Renamed %s -> %s", entry.path, normalized)
        if has_hidden_component(normalized):
            return Entry.absent(normalized)
        return Entry(kind=entry.kind, path=normalized)


__all__ = [
    "RawAdapter",
    "Vault",
]
