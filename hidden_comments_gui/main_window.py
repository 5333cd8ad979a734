from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from PySide6 import QtCore, QtGui, QtWidgets

from hidden_comments.models import ReconcileAction
from hidden_comments.plugin import COMMANDS, HiddenCommentsPlugin

from .editor_adapter import QtEditorAdapter
from .settings_dialog import SettingsDialog


logger = logging.getLogger(__name__)

NOTICE_TIMEOUT_MS = 5000


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, vault_root: Path) -> None:
        super().__init__()
        self._vault_root = vault_root
        self._plugin = HiddenCommentsPlugin.for_vault(vault_root, self._show_notice)
        self._current_path: str | None = None
        self._settings_dialog: SettingsDialog | None = None

        self._documents = QtWidgets.QListWidget(self)
        self._documents.currentItemChanged.connect(self._on_document_changed)

        self._editor = QtWidgets.QPlainTextEdit(self)
        self._editor.setEnabled(False)
        self._editor_adapter = QtEditorAdapter(self._editor)

        self._splitter = QtWidgets.QSplitter(QtCore.Qt.Horizontal)
        self._splitter.addWidget(self._documents)
        self._splitter.addWidget(self._editor)
        self._splitter.setCollapsible(0, False)
        self._splitter.setCollapsible(1, False)
        self._splitter.setStretchFactor(0, 0)
        self._splitter.setStretchFactor(1, 1)
        self._splitter.setSizes([240, 800])
        self.setCentralWidget(self._splitter)

        toolbar = self.addToolBar("Commands")
        toolbar.setMovable(False)
        self._command_actions: dict[str, QtGui.QAction] = {}
        for spec in COMMANDS:
            action = QtGui.QAction(spec.name, self)
            action.triggered.connect(lambda _checked=False, cid=spec.command_id: self._run_command(cid))
            toolbar.addAction(action)
            self._command_actions[spec.command_id] = action
        toolbar.addSeparator()

        self._save_action = QtGui.QAction("Save", self)
        self._save_action.setShortcut(QtGui.QKeySequence.Save)
        self._save_action.triggered.connect(self._save_current)
        toolbar.addAction(self._save_action)

        self._settings_action = QtGui.QAction("Settings", self)
        self._settings_action.triggered.connect(self._open_settings)
        toolbar.addAction(self._settings_action)

        self._state_label = QtWidgets.QLabel(self)
        self.statusBar().addPermanentWidget(self._state_label)
        self._update_window_title()

    def start(self) -> None:
        try:
            result = self._plugin.on_start()
        except OSError as exc:
            logger.exception("Startup reconciliation failed for %s", self._vault_root)
            QtWidgets.QMessageBox.critical(self, "Hidden Comments", f"Startup failed: {exc}")
            self._refresh_actions()
            return
        if result.action is not ReconcileAction.HALT_DRIFT:
            self.statusBar().showMessage(f"Vault ready ({result.action.value}).", NOTICE_TIMEOUT_MS)
        self._reload_documents()
        self._refresh_actions()

    def _show_notice(self, message: str) -> None:
        logger.info("Notice: %s", message)
        self.statusBar().showMessage(message, NOTICE_TIMEOUT_MS)

    def _update_window_title(self) -> None:
        title = f"Hidden Comments - {self._vault_root.name}"
        if self._current_path:
            title += f" - {self._current_path}"
        self.setWindowTitle(title)

    def _refresh_actions(self) -> None:
        for command_id, action in self._command_actions.items():
            action.setEnabled(self._plugin.is_enabled(command_id))
        self._settings_action.setEnabled(self._plugin.loaded)
        if not self._plugin.loaded:
            self._state_label.setText("unloaded")
        elif self._plugin.settings.show_comments:
            self._state_label.setText("comments shown")
        else:
            self._state_label.setText("comments hidden")

    def _reload_documents(self) -> None:
        selected = self._current_path
        still_listed = False
        blocker = QtCore.QSignalBlocker(self._documents)
        self._documents.clear()
        for relative in self._plugin.vault.list_document_paths():
            item = QtWidgets.QListWidgetItem(relative)
            item.setData(QtCore.Qt.UserRole, relative)
            self._documents.addItem(item)
            if relative == selected:
                self._documents.setCurrentItem(item)
                still_listed = True
        del blocker
        if selected is not None and not still_listed:
            # The note moved out of view, e.g. its folder was hidden.
            self._close_document()

    def _close_document(self) -> None:
        self._current_path = None
        self._editor.clear()
        self._editor.document().setModified(False)
        self._editor.setEnabled(False)
        self._update_window_title()

    def _on_document_changed(
        self, current: QtWidgets.QListWidgetItem | None, _previous: QtWidgets.QListWidgetItem | None
    ) -> None:
        if not self._save_current():
            return
        if current is None:
            self._close_document()
            return
        relative = current.data(QtCore.Qt.UserRole)
        try:
            content = self._plugin.vault.read_file(relative)
        except OSError as exc:
            self._show_notice(f"Failed to open {relative}: {exc}")
            return
        self._current_path = relative
        self._editor.setPlainText(content)
        self._editor.document().setModified(False)
        self._editor.setEnabled(True)
        self._update_window_title()

    def _save_current(self) -> bool:
        """Write the open note back to the vault; False when the write failed."""
        if self._current_path is None or not self._editor.document().isModified():
            return True
        try:
            self._plugin.vault.write_file(self._current_path, self._editor.toPlainText())
        except OSError as exc:
            self._show_notice(f"Failed to save {self._current_path}: {exc}")
            return False
        self._editor.document().setModified(False)
        return True

    def _run_command(self, command_id: str) -> None:
        spec = next(spec for spec in COMMANDS if spec.command_id == command_id)
        if spec.needs_editor and self._current_path is None:
            self._show_notice("Open a note first.")
            return
        if not self._save_current():
            return
        host_file_name = PurePosixPath(self._current_path).name if self._current_path else None
        result = self._plugin.run(
            command_id,
            host_file_name=host_file_name,
            editor=self._editor_adapter if spec.needs_editor else None,
        )
        if spec.needs_editor and result is not None:
            self._save_current()
            self._show_notice(f"Created {result}")
        self._reload_documents()
        self._refresh_actions()
        if self._settings_dialog is not None:
            self._settings_dialog.sync_from_settings()

    def _open_settings(self) -> None:
        if self._settings_dialog is None:
            self._settings_dialog = SettingsDialog(self._plugin, self)
            self._settings_dialog.settings_changed.connect(self._on_settings_changed)
            self._settings_dialog.folder_moving.connect(self._save_current)
        self._settings_dialog.sync_from_settings()
        self._settings_dialog.show()
        self._settings_dialog.raise_()

    def _on_settings_changed(self) -> None:
        self._reload_documents()
        self._refresh_actions()

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:  # noqa: N802
        self._save_current()
        self._plugin.on_stop()
        super().closeEvent(event)
