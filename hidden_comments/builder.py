from __future__ import annotations

from hidden_comments_core.markdown import BYTE_ORDER_MARK, split_front_matter

from .constants import (
    COMMENTS_HEADING,
    EMBED_SUPPRESSION_BLOCK,
    EMBED_SUPPRESSION_KEY,
    EMBED_SUPPRESSION_LINE,
    EMBED_SUPPRESSION_VALUE,
)
from .editor import Editor, TextEditor
from .errors import ConflictingMetadataError
from .models import CursorPosition, Settings


def build_preamble(host_file_name: str, settings: Settings) -> str:
    """
    Initial content of a comment file: the optional title-suppression block,
    a backlink to the host note and the heading the embed marker points at.
    """
    metadata = EMBED_SUPPRESSION_BLOCK if settings.set_css_class else ""
    return f"{metadata}Original File: [[{host_file_name}]]\n# {COMMENTS_HEADING}\n"


def plan_embed_suppression(content: str) -> tuple[CursorPosition, str] | None:
    """
    Work out the edit that marks a note so embedded titles are hidden.

    Returns None when the note is already marked, otherwise the insertion
    point and text. Raises ConflictingMetadataError when the front matter
    already sets the key to something else.
    """
    front_matter = split_front_matter(content)
    if front_matter is None:
        # The block goes after a byte order mark, never in front of it.
        ch = len(BYTE_ORDER_MARK) if content.startswith(BYTE_ORDER_MARK) else 0
        return CursorPosition(line=0, ch=ch), EMBED_SUPPRESSION_BLOCK
    if front_matter.has_entry(EMBED_SUPPRESSION_KEY, EMBED_SUPPRESSION_VALUE):
        return None
    existing = front_matter.values(EMBED_SUPPRESSION_KEY)
    if existing:
        raise ConflictingMetadataError(EMBED_SUPPRESSION_KEY, existing)
    return CursorPosition(line=front_matter.start_line + 1, ch=0), EMBED_SUPPRESSION_LINE


def mark_host_for_embed_suppression(host_content: str, editor: Editor) -> bool:
    """Apply the suppression edit through the editor; True if the note changed."""
    plan = plan_embed_suppression(host_content)
    if plan is None:
        return False
    position, text = plan
    editor.replace_range(text, position, position)
    return True


def suppress_embed_titles(content: str) -> str:
    editor = TextEditor(content)
    mark_host_for_embed_suppression(content, editor)
    return editor.get_value()


__all__ = [
    "build_preamble",
    "mark_host_for_embed_suppression",
    "plan_embed_suppression",
    "suppress_embed_titles",
]
