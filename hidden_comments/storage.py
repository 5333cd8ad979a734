from __future__ import annotations

import json
import logging
from pathlib import Path

from hidden_comments_core.paths import config_path
from hidden_comments_core.text import write_text_atomic

from .models import Settings


logger = logging.getLogger(__name__)


class SettingsStore:
    """JSON persistence for plugin settings, loaded over defaults and saved wholesale."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def for_vault(cls, vault_root: Path) -> SettingsStore:
        return cls(config_path(vault_root))

    def load(self) -> Settings:
        """
        Load persisted settings. Returns defaults if missing/invalid.
        """
        if not self.path.is_file():
            return Settings()
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Failed to load settings from %s: %s", self.path, exc)
            return Settings()
        if not isinstance(raw, dict):
            logger.warning("Ignoring settings at %s: expected an object", self.path)
            return Settings()
        return Settings.from_dict(raw)

    def save(self, settings: Settings) -> Path:
        """
        Persist settings using an atomic replace.
        """
        serialized = json.dumps(settings.to_dict(), ensure_ascii=False, indent=2)
        return write_text_atomic(self.path, serialized)
