from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from hidden_comments.models import Settings
from hidden_comments.storage import SettingsStore


class SettingsStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.path = Path(tmp.name) / "plugin" / "data.json"
        self.store = SettingsStore(self.path)

    def test_missing_file_gives_defaults(self) -> None:
        self.assertEqual(self.store.load(), Settings())

    def test_invalid_json_gives_defaults(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertLogs("hidden_comments.storage", level="WARNING"):
            self.assertEqual(self.store.load(), Settings())

    def test_partial_data_is_merged_over_defaults(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text(
            json.dumps({"show_comments": False, "unknown": 1, "comment_file_prefix": 5}),
            encoding="utf-8",
        )
        settings = self.store.load()
        self.assertFalse(settings.show_comments)
        self.assertEqual(settings.comment_file_prefix, "comment-")
        self.assertEqual(settings.hidden_folder_name, "hiddenComments")

    def test_save_writes_every_field(self) -> None:
        settings = Settings(hidden_folder_name="notes", show_on_quit=True)
        self.store.save(settings)
        payload = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(payload, settings.to_dict())
        self.assertEqual(self.store.load(), settings)
        self.assertFalse(self.path.with_suffix(".tmp").exists())


if __name__ == "__main__":
    unittest.main()
