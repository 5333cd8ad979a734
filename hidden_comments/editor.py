from __future__ import annotations

from typing import Protocol

from .models import CursorPosition


class Editor(Protocol):
    """Selection/cursor surface of the note being edited."""

    def get_value(self) -> str: ...

    def get_selection(self) -> str: ...

    def get_cursor(self) -> CursorPosition: ...

    def set_cursor(self, pos: CursorPosition) -> None: ...

    def replace_selection(self, text: str) -> None: ...

    def replace_range(
        self, text: str, start: CursorPosition, end: CursorPosition | None = None
    ) -> None: ...


class TextEditor:
    """
    In-memory editor over a text buffer.

    The selection runs from an anchor to the cursor (head). Positions are
    clamped to the buffer.
    """

    def __init__(self, text: str = "", cursor: CursorPosition | None = None) -> None:
        self._text = text
        self._head = 0
        self._anchor = 0
        if cursor is not None:
            self.set_cursor(cursor)

    def get_value(self) -> str:
        return self._text

    def offset_of(self, pos: CursorPosition) -> int:
        lines = self._text.split("\n")
        line = max(0, min(pos.line, len(lines) - 1))
        ch = max(0, min(pos.ch, len(lines[line])))
        return sum(len(previous) + 1 for previous in lines[:line]) + ch

    def position_of(self, offset: int) -> CursorPosition:
        offset = max(0, min(offset, len(self._text)))
        before = self._text[:offset]
        line = before.count("\n")
        return CursorPosition(line=line, ch=offset - (before.rfind("\n") + 1))

    def get_cursor(self) -> CursorPosition:
        return self.position_of(self._head)

    def set_cursor(self, pos: CursorPosition) -> None:
        self._head = self._anchor = self.offset_of(pos)

    def set_selection(self, anchor: CursorPosition, head: CursorPosition) -> None:
        self._anchor = self.offset_of(anchor)
        self._head = self.offset_of(head)

    def get_selection(self) -> str:
        start, end = sorted((self._anchor, self._head))
        return self._text[start:end]

    def replace_selection(self, text: str) -> None:
        start, end = sorted((self._anchor, self._head))
        self._splice(start, end, text)
        self._head = self._anchor = start + len(text)

    def replace_range(
        self, text: str, start: CursorPosition, end: CursorPosition | None = None
    ) -> None:
        start_offset = self.offset_of(start)
        end_offset = self.offset_of(end) if end is not None else start_offset
        start_offset, end_offset = sorted((start_offset, end_offset))
        self._splice(start_offset, end_offset, text)
        self._head = self._map(self._head, start_offset, end_offset, len(text))
        self._anchor = self._map(self._anchor, start_offset, end_offset, len(text))

    def _splice(self, start: int, end: int, text: str) -> None:
        self._text = self._text[:start] + text + self._text[end:]

    @staticmethod
    def _map(offset: int, start: int, end: int, inserted: int) -> int:
        # A position sitting exactly at an insertion point stays before the new text.
        if offset < start or (offset == start and start == end):
            return offset
        if offset >= end:
            return offset + inserted - (end - start)
        return start


__all__ = [
    "Editor",
    "TextEditor",
]
