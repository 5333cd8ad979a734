from __future__ import annotations

import re
from dataclasses import dataclass


FRONT_MATTER_DELIMITER = "---"
BYTE_ORDER_MARK = "\ufeff"

_DELIMITER_PATTERN = re.compile(r"^-{3}\s*$")
_KEY_PATTERN = re.compile(r"^([A-Za-z0-9_-]+)\s*:(.*)$")


@dataclass(frozen=True)
class FrontMatter:
    """Location of a leading ``---`` metadata block, in 0-based line numbers."""

    start_line: int
    end_line: int
    lines: tuple[str, ...]

    def values(self, key: str) -> list[str]:
        found: list[str] = []
        for line in self.lines:
            match = _KEY_PATTERN.match(line)
            if match and match.group(1) == key:
                found.append(match.group(2).strip())
        return found

    def has_entry(self, key: str, value: str) -> bool:
        return value in self.values(key)


def split_front_matter(content: str) -> FrontMatter | None:
    """
    Return the leading metadata block of a note, or None when the note does
    not start with a ``---`` line.

    An opening delimiter without a closing one does not count as a block.
    """
    lines = content.lstrip(BYTE_ORDER_MARK).split("\n")
    if not lines or not _DELIMITER_PATTERN.match(lines[0]):
        return None
    for idx in range(1, len(lines)):
        if _DELIMITER_PATTERN.match(lines[idx]):
            return FrontMatter(start_line=0, end_line=idx, lines=tuple(lines[1:idx]))
    return None


__all__ = [
    "BYTE_ORDER_MARK",
    "FRONT_MATTER_DELIMITER",
    "FrontMatter",
    "split_front_matter",
]
