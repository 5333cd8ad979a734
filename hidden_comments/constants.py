from __future__ import annotations

from hidden_comments_core.fs import HIDDEN_MARKER
from hidden_comments_core.markdown import FRONT_MATTER_DELIMITER


PLUGIN_ID = "hidden-comments"

DEFAULT_FOLDER_NAME = "hiddenComments"
DEFAULT_COMMENT_FILE_PREFIX = "comment-"

# Upper bound of the sequence scan for new comment file names.
MAX_SEQUENCE = 999

COMMENTS_HEADING = "Comments"
EMBED_SUPPRESSION_KEY = "cssclass"
EMBED_SUPPRESSION_VALUE = "hide-embed-title"
EMBED_SUPPRESSION_LINE = f"{EMBED_SUPPRESSION_KEY}: {EMBED_SUPPRESSION_VALUE}\n"
EMBED_SUPPRESSION_BLOCK = f"{FRONT_MATTER_DELIMITER}\n{EMBED_SUPPRESSION_LINE}{FRONT_MATTER_DELIMITER}\n"

MARKDOWN_SUFFIX = ".md"

MSG_ALREADY_VISIBLE = "Comments should already be visible!"
MSG_ALREADY_HIDDEN = "Comments should already be hidden!"
MSG_FOLDER_NOT_FOUND = "Comments folder couldn't be found!"
MSG_DRIFT = "Both hidden and visible folders exist! Please delete one."
MSG_CSSCLASS_FAILED = "Couldn't set cssclass!"


def visible_form(folder_name: str) -> str:
    return folder_name


def hidden_form(folder_name: str) -> str:
    return HIDDEN_MARKER + folder_name


def form_prefix(show_comments: bool) -> str:
    """Prefix selecting the on-disk form that matches a visibility state."""
    return "" if show_comments else HIDDEN_MARKER


def comment_marker(comment_file_name: str) -> str:
    return f"![[{comment_file_name}#{COMMENTS_HEADING}]]"
