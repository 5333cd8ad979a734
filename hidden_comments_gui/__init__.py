from __future__ import annotations

from .app import main
from .editor_adapter import QtEditorAdapter
from .main_window import MainWindow
from .settings_dialog import SettingsDialog

__all__ = [
    "MainWindow",
    "QtEditorAdapter",
    "SettingsDialog",
    "main",
]
