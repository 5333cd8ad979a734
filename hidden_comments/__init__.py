from __future__ import annotations

from .builder import build_preamble, mark_host_for_embed_suppression, suppress_embed_titles
from .editor import Editor, TextEditor
from .errors import (
    ConflictingMetadataError,
    DriftError,
    FolderNotFoundError,
    HiddenCommentsError,
    NamingExhaustedError,
)
from .models import ReconcileAction, ReconciliationResult, Settings, StopAction
from .naming import next_name
from .plugin import COMMANDS, HiddenCommentsPlugin
from .relocator import FolderRelocator
from .storage import SettingsStore
from .vault import Vault
from .visibility import VisibilityStateMachine, plan_reconciliation

__all__ = [
    "COMMANDS",
    "ConflictingMetadataError",
    "DriftError",
    "Editor",
    "FolderNotFoundError",
    "FolderRelocator",
    "HiddenCommentsError",
    "HiddenCommentsPlugin",
    "NamingExhaustedError",
    "ReconcileAction",
    "ReconciliationResult",
    "Settings",
    "SettingsStore",
    "StopAction",
    "TextEditor",
    "Vault",
    "VisibilityStateMachine",
    "build_preamble",
    "mark_host_for_embed_suppression",
    "next_name",
    "plan_reconciliation",
    "suppress_embed_titles",
]
