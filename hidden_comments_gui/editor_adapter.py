from __future__ import annotations

from PySide6 import QtGui, QtWidgets

from hidden_comments.models import CursorPosition


_PARAGRAPH_SEPARATOR = "\u2029"


class QtEditorAdapter:
    """Exposes a QPlainTextEdit through the editor surface the plugin commands use."""

    def __init__(self, widget: QtWidgets.QPlainTextEdit) -> None:
        self._widget = widget

    def _offset_of(self, pos: CursorPosition) -> int:
        document = self._widget.document()
        line = max(0, min(pos.line, document.blockCount() - 1))
        block = document.findBlockByNumber(line)
        return block.position() + max(0, min(pos.ch, block.length() - 1))

    def get_value(self) -> str:
        return self._widget.toPlainText()

    def get_selection(self) -> str:
        return self._widget.textCursor().selectedText().replace(_PARAGRAPH_SEPARATOR, "\n")

    def get_cursor(self) -> CursorPosition:
        cursor = self._widget.textCursor()
        return CursorPosition(line=cursor.blockNumber(), ch=cursor.positionInBlock())

    def set_cursor(self, pos: CursorPosition) -> None:
        cursor = self._widget.textCursor()
        cursor.setPosition(self._offset_of(pos))
        self._widget.setTextCursor(cursor)

    def replace_selection(self, text: str) -> None:
        cursor = self._widget.textCursor()
        cursor.insertText(text)
        self._widget.setTextCursor(cursor)

    def replace_range(
        self, text: str, start: CursorPosition, end: CursorPosition | None = None
    ) -> None:
        cursor = QtGui.QTextCursor(self._widget.document())
        cursor.setPosition(self._offset_of(start))
        if end is not None:
            cursor.setPosition(self._offset_of(end), QtGui.QTextCursor.KeepAnchor)
        cursor.insertText(text)
