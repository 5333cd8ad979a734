from __future__ import annotations

import logging

from hidden_comments_core.fs import is_hidden_name

from .constants import MSG_FOLDER_NOT_FOUND
from .errors import FolderNotFoundError
from .models import EntryKind, RenameOutcome
from .notices import Notify
from .vault import Vault


logger = logging.getLogger(__name__)


class FolderRelocator:
    """
    Moves the comments folder between its visible and hidden names.

    The vault index cannot see dot-prefixed folders, so a folder that the
    index misses is looked up and renamed through the raw adapter.
    """

    def __init__(self, vault: Vault, notify: Notify) -> None:
        self._vault = vault
        self._notify = notify

    def folder_exists(self, name: str) -> bool:
        if not is_hidden_name(name):
            return self._vault.get_entry_by_path(name).kind is EntryKind.FOLDER
        return self._vault.adapter.path_exists(name)

    def rename(self, old_name: str, new_name: str, *, silent: bool = False) -> RenameOutcome:
        try:
            return self._rename(old_name, new_name)
        except FolderNotFoundError as exc:
            logger.warning("%s", exc)
            if not silent:
                self._notify(MSG_FOLDER_NOT_FOUND)
            return RenameOutcome.NOT_FOUND

    def _rename(self, old_name: str, new_name: str) -> RenameOutcome:
        entry = self._vault.get_entry_by_path(old_name)
        if entry.kind is EntryKind.FOLDER:
            self._vault.rename_entry(entry, new_name)
            return RenameOutcome.RENAMED
        if entry.kind is EntryKind.ABSENT and self.folder_exists(old_name):
            self._vault.adapter.rename_path(old_name, new_name)
            return RenameOutcome.RENAMED_RAW
        raise FolderNotFoundError(old_name)


__all__ = [
    "FolderRelocator",
]
