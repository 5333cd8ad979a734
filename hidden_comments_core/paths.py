from __future__ import annotations

import os
from pathlib import Path


CONFIG_DIR_NAME = ".hidden-comments"
CONFIG_FILE_NAME = "data.json"


def default_vault_root() -> Path:
    """
    Vault used when none is given explicitly.

    Can be overridden with HIDDEN_COMMENTS_VAULT; falls back to the current
    working directory.
    """
    override = os.environ.get("HIDDEN_COMMENTS_VAULT")
    if override:
        return Path(override).expanduser().resolve()
    return Path.cwd()


def config_dir(vault_root: Path) -> Path:
    """
    Directory holding the persisted settings for a vault.

    Uses `<vault>/.hidden-comments` so the settings travel with the vault and
    stay out of the note index. Can be overridden with
    HIDDEN_COMMENTS_CONFIG_DIR.
    """
    override = os.environ.get("HIDDEN_COMMENTS_CONFIG_DIR")
    if override:
        return Path(override).expanduser().resolve()
    return vault_root / CONFIG_DIR_NAME


def config_path(vault_root: Path) -> Path:
    return config_dir(vault_root) / CONFIG_FILE_NAME


__all__ = [
    "CONFIG_DIR_NAME",
    "CONFIG_FILE_NAME",
    "config_dir",
    "config_path",
    "default_vault_root",
]
