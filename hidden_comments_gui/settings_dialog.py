from __future__ import annotations

from PySide6 import QtCore, QtWidgets

from hidden_comments.constants import DEFAULT_COMMENT_FILE_PREFIX, DEFAULT_FOLDER_NAME
from hidden_comments.plugin import HiddenCommentsPlugin


class SettingsDialog(QtWidgets.QDialog):
    settings_changed = QtCore.Signal()
    # Emitted right before the comments folder is renamed.
    folder_moving = QtCore.Signal()

    def __init__(self, plugin: HiddenCommentsPlugin, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Hidden Comments Settings")
        self.setMinimumWidth(440)
        self._plugin = plugin

        self._show_switch = QtWidgets.QCheckBox("Show comments", self)
        self._show_switch.setToolTip("Current visibility of hidden comments")
        self._folder_input = QtWidgets.QLineEdit(self)
        self._folder_input.setPlaceholderText(DEFAULT_FOLDER_NAME)
        self._folder_input.setToolTip("Name of the folder comments are stored in")
        self._prefix_input = QtWidgets.QLineEdit(self)
        self._prefix_input.setPlaceholderText(DEFAULT_COMMENT_FILE_PREFIX)
        self._prefix_input.setToolTip(
            "The default prefix added to the file names of comment files; "
            "won't change already created files."
        )
        self._css_switch = QtWidgets.QCheckBox("Set CSS class on new comment files", self)
        self._css_switch.setToolTip(
            "Sets the `cssclass` property when a hidden comment is created. "
            "This hides the file name and any level 1 headings of the embed."
        )
        self._embed_titles_switch = QtWidgets.QCheckBox("Hide embed titles in the host note", self)
        self._show_on_quit_switch = QtWidgets.QCheckBox("Show comments on quit", self)
        self._show_on_quit_switch.setToolTip(
            "Make comments visible while the application is closed. "
            "They are hidden again on start if they were hidden before."
        )

        self._show_switch.toggled.connect(self._on_show_toggled)
        self._folder_input.editingFinished.connect(self._on_folder_edited)
        self._prefix_input.editingFinished.connect(self._on_prefix_edited)
        self._css_switch.toggled.connect(lambda value: self._apply(self._plugin.set_css_class(value)))
        self._embed_titles_switch.toggled.connect(
            lambda value: self._apply(self._plugin.set_hide_embed_titles(value))
        )
        self._show_on_quit_switch.toggled.connect(
            lambda value: self._apply(self._plugin.set_show_on_quit(value))
        )

        form = QtWidgets.QFormLayout()
        form.addRow("Visibility:", self._show_switch)
        form.addRow("Comment folder name:", self._folder_input)
        form.addRow("Comment file prefix:", self._prefix_input)
        form.addRow("Embeds:", self._css_switch)
        form.addRow("", self._embed_titles_switch)
        form.addRow("On quit:", self._show_on_quit_switch)

        buttons = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Close, parent=self)
        buttons.rejected.connect(self.reject)

        layout = QtWidgets.QVBoxLayout(self)
        layout.addLayout(form)
        layout.addWidget(buttons)

        self.sync_from_settings()

    def sync_from_settings(self) -> None:
        settings = self._plugin.settings
        widgets = (
            self._show_switch,
            self._folder_input,
            self._prefix_input,
            self._css_switch,
            self._embed_titles_switch,
            self._show_on_quit_switch,
        )
        blockers = [QtCore.QSignalBlocker(widget) for widget in widgets]
        self._show_switch.setChecked(settings.show_comments)
        self._folder_input.setText(settings.hidden_folder_name)
        self._prefix_input.setText(settings.comment_file_prefix)
        self._css_switch.setChecked(settings.set_css_class)
        self._embed_titles_switch.setChecked(settings.hide_embed_titles)
        self._embed_titles_switch.setEnabled(settings.set_css_class)
        self._show_on_quit_switch.setChecked(settings.show_on_quit)
        del blockers
        self.setEnabled(self._plugin.loaded)

    def _on_show_toggled(self, value: bool) -> None:
        self.folder_moving.emit()
        self._apply(self._plugin.set_show_comments(value))

    def _on_folder_edited(self) -> None:
        value = self._folder_input.text().strip()
        if value == self._plugin.settings.hidden_folder_name:
            return
        self.folder_moving.emit()
        self._apply(self._plugin.set_folder_name(value))

    def _on_prefix_edited(self) -> None:
        value = self._prefix_input.text()
        if value == self._plugin.settings.comment_file_prefix:
            return
        self._apply(self._plugin.set_comment_file_prefix(value))

    def _apply(self, _result: object) -> None:
        self.sync_from_settings()
        self.settings_changed.emit()
