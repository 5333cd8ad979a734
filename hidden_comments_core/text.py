from __future__ import annotations

from pathlib import Path


DEFAULT_CANDIDATE_ENCODINGS: tuple[str, ...] = ("utf-8-sig", "utf-8", "gb18030")


def read_text_auto(path: Path, *, encodings: tuple[str, ...] = DEFAULT_CANDIDATE_ENCODINGS) -> str:
    """Decode a note trying each candidate encoding; fall back to lossy UTF-8."""
    raw_bytes = path.read_bytes()
    for encoding in encodings:
        try:
            return raw_bytes.decode(encoding)
        except UnicodeDecodeError:
            continue
    return raw_bytes.decode("utf-8", errors="replace")


def write_text_utf8(path: Path, text: str, *, exclusive: bool = False) -> None:
    """
    Write UTF-8 text with LF line endings.

    With ``exclusive`` the write fails with FileExistsError instead of
    replacing an existing file.
    """
    mode = "x" if exclusive else "w"
    with path.open(mode, encoding="utf-8", newline="\n") as handle:
        handle.write(text)


def write_text_atomic(path: Path, text: str) -> Path:
    """Write through a sibling ``.tmp`` file and replace the target in one step."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(".tmp")
    tmp_path.write_text(text, encoding="utf-8")
    tmp_path.replace(path)
    return path


__all__ = [
    "DEFAULT_CANDIDATE_ENCODINGS",
    "read_text_auto",
    "write_text_atomic",
    "write_text_utf8",
]
