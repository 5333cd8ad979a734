from __future__ import annotations

import unittest

from hidden_comments.models import EntryKind

from helpers import VaultTestCase


class VaultTests(VaultTestCase):
    def test_index_does_not_see_dot_folders(self) -> None:
        (self.root / ".hiddenComments").mkdir()
        self.assertIs(self.vault.get_entry_by_path(".hiddenComments").kind, EntryKind.ABSENT)
        self.assertTrue(self.vault.adapter.path_exists(".hiddenComments"))

    def test_entry_kinds(self) -> None:
        (self.root / "hiddenComments").mkdir()
        self.write_note("note.md", "x")
        self.assertIs(self.vault.get_entry_by_path("hiddenComments").kind, EntryKind.FOLDER)
        self.assertIs(self.vault.get_entry_by_path("note.md").kind, EntryKind.FILE)
        self.assertIs(self.vault.get_entry_by_path("missing").kind, EntryKind.ABSENT)

    def test_list_documents_skips_hidden_entries(self) -> None:
        self.write_note("b.md", "")
        self.write_note("sub/a.md", "")
        self.write_note(".hiddenComments/comment-1-b.md", "")
        self.write_note("image.png", "")
        self.assertEqual(self.vault.list_documents(), ["a.md", "b.md"])
        self.assertEqual(self.vault.list_document_paths(), ["b.md", "sub/a.md"])

    def test_create_file_needs_parent_and_never_overwrites(self) -> None:
        with self.assertRaises(FileNotFoundError):
            self.vault.create_file("missing/new.md", "x")
        self.vault.create_file("new.md", "first")
        with self.assertRaises(FileExistsError):
            self.vault.create_file("new.md", "second")
        self.assertEqual(self.vault.read_file("new.md"), "first")

    def test_rename_entry_into_hidden_form(self) -> None:
        entry = self.vault.create_folder("hiddenComments")
        renamed = self.vault.rename_entry(entry, ".hiddenComments")
        self.assertIs(renamed.kind, EntryKind.ABSENT)
        self.assertForms(visible=False, hidden=True)

    def test_paths_cannot_escape_vault(self) -> None:
        with self.assertRaises(ValueError):
            self.vault.adapter.path_exists("../outside")


if __name__ == "__main__":
    unittest.main()
