from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from hidden_comments.models import Settings
from hidden_comments.storage import SettingsStore
from hidden_comments.vault import Vault


class VaultTestCase(unittest.TestCase):
    """Temporary vault with a settings file outside of it and a notice recorder."""

    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        base = Path(tmp.name)
        self.root = base / "vault"
        self.root.mkdir()
        self.vault = Vault(self.root)
        self.store = SettingsStore(base / "config" / "data.json")
        self.notices: list[str] = []

    def notify(self, message: str) -> None:
        self.notices.append(message)

    def write_note(self, relative: str, content: str) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def save_settings(self, **changes: object) -> Settings:
        settings = Settings().with_changes(**changes)
        self.store.save(settings)
        return settings

    def assertForms(self, visible: bool, hidden: bool, name: str = "hiddenComments") -> None:  # noqa: N802
        self.assertEqual((self.root / name).is_dir(), visible)
        self.assertEqual((self.root / f".{name}").is_dir(), hidden)
