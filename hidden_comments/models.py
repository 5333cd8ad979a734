from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from enum import Enum

from .constants import DEFAULT_COMMENT_FILE_PREFIX, DEFAULT_FOLDER_NAME


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    show_comments: bool = True
    hidden_folder_name: str = DEFAULT_FOLDER_NAME
    comment_file_prefix: str = DEFAULT_COMMENT_FILE_PREFIX
    set_css_class: bool = True
    hide_embed_titles: bool = True
    show_on_quit: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> Settings:
        """
        Build settings from persisted data layered over the defaults.

        Unknown keys are ignored; values of the wrong type keep the default.
        """
        defaults = cls()
        overrides: dict[str, object] = {}
        for field in fields(cls):
            if field.name not in data:
                continue
            value = data[field.name]
            expected = type(getattr(defaults, field.name))
            if not isinstance(value, expected):
                logger.warning(
                    "Ignoring setting '%s': expected %s, got %r",
                    field.name,
                    expected.__name__,
                    value,
                )
                continue
            overrides[field.name] = value
        return replace(defaults, **overrides)

    def to_dict(self) -> dict:
        return {field.name: getattr(self, field.name) for field in fields(self)}

    def with_changes(self, **changes: object) -> Settings:
        return replace(self, **changes)


class EntryKind(Enum):
    FILE = "file"
    FOLDER = "folder"
    ABSENT = "absent"


@dataclass(frozen=True)
class Entry:
    kind: EntryKind
    path: str

    @classmethod
    def absent(cls, path: str) -> Entry:
        return cls(kind=EntryKind.ABSENT, path=path)


@dataclass(frozen=True)
class CursorPosition:
    line: int
    ch: int


class RenameOutcome(Enum):
    RENAMED = "renamed"
    RENAMED_RAW = "renamed_raw"
    NOT_FOUND = "not_found"

    @property
    def succeeded(self) -> bool:
        return self is not RenameOutcome.NOT_FOUND


class ReconcileAction(Enum):
    REHIDE = "rehide"
    ADOPT_SHOWN = "adopt_shown"
    ADOPT_HIDDEN = "adopt_hidden"
    HALT_DRIFT = "halt_drift"
    CREATE_FOLDER = "create_folder"


@dataclass(frozen=True)
class ReconciliationResult:
    action: ReconcileAction
    settings: Settings
    rename: RenameOutcome | None = None


@dataclass(frozen=True)
class TransitionResult:
    settings: Settings
    changed: bool
    rename: RenameOutcome | None = None


class StopAction(Enum):
    NONE = "none"
    REVEAL = "reveal"
