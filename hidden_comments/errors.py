from __future__ import annotations


class HiddenCommentsError(Exception):
    """Base class for failures surfaced to the user as notices."""


class DriftError(HiddenCommentsError):
    """Both the visible and the hidden form of the comments folder exist."""

    def __init__(self, visible_path: str, hidden_path: str) -> None:
        super().__init__(
            f"Both '{visible_path}' and '{hidden_path}' exist; delete one of them manually."
        )
        self.visible_path = visible_path
        self.hidden_path = hidden_path


class FolderNotFoundError(HiddenCommentsError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Comments folder not found: {path}")
        self.path = path


class NamingExhaustedError(HiddenCommentsError):
    def __init__(self, host_file_name: str, prefix: str, bound: int) -> None:
        super().__init__(
            f"No free comment file name for '{host_file_name}' with prefix '{prefix}' "
            f"within {bound} candidates."
        )
        self.host_file_name = host_file_name
        self.prefix = prefix
        self.bound = bound


class ConflictingMetadataError(HiddenCommentsError):
    def __init__(self, key: str, existing: list[str]) -> None:
        super().__init__(
            f"Front matter already sets '{key}' to {', '.join(existing) or 'another value'}."
        )
        self.key = key
        self.existing = existing


__all__ = [
    "ConflictingMetadataError",
    "DriftError",
    "FolderNotFoundError",
    "HiddenCommentsError",
    "NamingExhaustedError",
]
