from __future__ import annotations

import itertools
import unittest

from hidden_comments.constants import MSG_ALREADY_HIDDEN, MSG_ALREADY_VISIBLE, MSG_FOLDER_NOT_FOUND
from hidden_comments.errors import DriftError
from hidden_comments.models import ReconcileAction, RenameOutcome, Settings, StopAction
from hidden_comments.storage import SettingsStore
from hidden_comments.visibility import VisibilityStateMachine, plan_reconciliation

from helpers import VaultTestCase


class _RecordingStore(SettingsStore):
    """Records which folder forms were on disk each time settings were saved."""

    def __init__(self, path, root) -> None:
        super().__init__(path)
        self.root = root
        self.snapshots: list[tuple[bool, bool, bool]] = []

    def save(self, settings: Settings):
        self.snapshots.append(
            (
                settings.show_comments,
                (self.root / settings.hidden_folder_name).is_dir(),
                (self.root / f".{settings.hidden_folder_name}").is_dir(),
            )
        )
        return super().save(settings)


class PlanReconciliationTests(unittest.TestCase):
    def test_decision_table(self) -> None:
        expected = {
            (False, True, False): ReconcileAction.REHIDE,
            (True, True, False): ReconcileAction.ADOPT_SHOWN,
            (True, False, True): ReconcileAction.ADOPT_HIDDEN,
            (False, False, True): ReconcileAction.ADOPT_HIDDEN,
            (True, True, True): ReconcileAction.HALT_DRIFT,
            (False, True, True): ReconcileAction.HALT_DRIFT,
            (True, False, False): ReconcileAction.CREATE_FOLDER,
            (False, False, False): ReconcileAction.CREATE_FOLDER,
        }
        for triple in itertools.product((True, False), repeat=3):
            with self.subTest(triple=triple):
                self.assertIs(plan_reconciliation(*triple), expected[triple])
                self.assertIs(plan_reconciliation(*triple), plan_reconciliation(*triple))


class VisibilityStateMachineTests(VaultTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.store = _RecordingStore(self.store.path, self.root)
        self.machine = VisibilityStateMachine(self.vault, self.store, self.notify)

    def test_hide_saves_before_renaming(self) -> None:
        (self.root / "hiddenComments").mkdir()
        result = self.machine.hide(Settings())
        self.assertTrue(result.changed)
        self.assertIs(result.rename, RenameOutcome.RENAMED)
        self.assertFalse(result.settings.show_comments)
        self.assertEqual(self.store.snapshots, [(False, True, False)])
        self.assertForms(visible=False, hidden=True)

    def test_show_when_shown_is_noop(self) -> None:
        (self.root / "hiddenComments").mkdir()
        settings = Settings()
        result = self.machine.show(settings)
        self.assertFalse(result.changed)
        self.assertIs(result.settings, settings)
        self.assertIsNone(result.rename)
        self.assertEqual(self.store.snapshots, [])
        self.assertEqual(self.notices, [MSG_ALREADY_VISIBLE])
        self.assertForms(visible=True, hidden=False)

    def test_hide_when_hidden_is_noop_and_silent(self) -> None:
        (self.root / ".hiddenComments").mkdir()
        result = self.machine.hide(Settings(show_comments=False), silent=True)
        self.assertFalse(result.changed)
        self.assertEqual(self.notices, [])
        self.assertEqual(self.store.snapshots, [])
        self.machine.hide(Settings(show_comments=False))
        self.assertEqual(self.notices, [MSG_ALREADY_HIDDEN])

    def test_hide_then_show_round_trip(self) -> None:
        self.write_note("hiddenComments/comment-1-note.md", "text")
        hidden = self.machine.hide(Settings()).settings
        shown = self.machine.show(hidden)
        self.assertIs(shown.rename, RenameOutcome.RENAMED_RAW)
        self.assertTrue(shown.settings.show_comments)
        self.assertForms(visible=True, hidden=False)
        self.assertTrue((self.root / "hiddenComments" / "comment-1-note.md").is_file())
        self.assertTrue(self.store.load().show_comments)

    def test_hide_with_missing_folder_keeps_new_intent(self) -> None:
        result = self.machine.hide(Settings())
        self.assertTrue(result.changed)
        self.assertIs(result.rename, RenameOutcome.NOT_FOUND)
        self.assertFalse(result.settings.show_comments)
        self.assertEqual(self.store.snapshots, [(False, False, False)])
        self.assertFalse(self.store.load().show_comments)
        self.assertEqual(self.notices, [MSG_FOLDER_NOT_FOUND])
        self.assertForms(visible=False, hidden=False)

    def test_show_with_missing_folder_keeps_new_intent(self) -> None:
        result = self.machine.show(Settings(show_comments=False))
        self.assertIs(result.rename, RenameOutcome.NOT_FOUND)
        self.assertTrue(result.settings.show_comments)
        self.assertTrue(self.store.load().show_comments)
        self.assertEqual(self.notices, [MSG_FOLDER_NOT_FOUND])

        self.notices.clear()
        quiet = self.machine.hide(result.settings, silent=True)
        self.assertIs(quiet.rename, RenameOutcome.NOT_FOUND)
        self.assertEqual(self.notices, [])
        self.assertFalse(self.store.load().show_comments)

    def test_reconcile_rehides_folder_left_visible(self) -> None:
        (self.root / "hiddenComments").mkdir()
        settings = Settings(show_comments=False)
        result = self.machine.reconcile(settings)
        self.assertIs(result.action, ReconcileAction.REHIDE)
        self.assertFalse(result.settings.show_comments)
        self.assertIs(result.rename, RenameOutcome.RENAMED)
        self.assertForms(visible=False, hidden=True)
        self.assertEqual(self.notices, [])

    def test_reconcile_adopts_hidden_form(self) -> None:
        (self.root / ".hiddenComments").mkdir()
        result = self.machine.reconcile(Settings(show_comments=True))
        self.assertIs(result.action, ReconcileAction.ADOPT_HIDDEN)
        self.assertFalse(result.settings.show_comments)
        self.assertFalse(self.store.load().show_comments)

    def test_reconcile_adopts_visible_form(self) -> None:
        (self.root / "hiddenComments").mkdir()
        result = self.machine.reconcile(Settings(show_comments=True))
        self.assertIs(result.action, ReconcileAction.ADOPT_SHOWN)
        self.assertTrue(self.store.load().show_comments)

    def test_reconcile_creates_visible_folder_on_first_run(self) -> None:
        result = self.machine.reconcile(Settings(show_comments=True))
        self.assertIs(result.action, ReconcileAction.CREATE_FOLDER)
        self.assertForms(visible=True, hidden=False)

    def test_reconcile_creates_hidden_folder_when_hidden(self) -> None:
        self.machine.reconcile(Settings(show_comments=False))
        self.assertForms(visible=False, hidden=True)

    def test_reconcile_halts_on_drift(self) -> None:
        (self.root / "hiddenComments").mkdir()
        (self.root / ".hiddenComments").mkdir()
        with self.assertRaises(DriftError):
            self.machine.reconcile(Settings(show_comments=False))
        self.assertForms(visible=True, hidden=True)
        self.assertEqual(self.store.snapshots, [])

    def test_shutdown_reveals_when_requested(self) -> None:
        (self.root / ".hiddenComments").mkdir()
        settings = Settings(show_comments=False, show_on_quit=True)
        self.assertIs(self.machine.shutdown(settings), StopAction.REVEAL)
        self.assertForms(visible=True, hidden=False)
        result = self.machine.reconcile(settings)
        self.assertIs(result.action, ReconcileAction.REHIDE)
        self.assertForms(visible=False, hidden=True)

    def test_shutdown_without_show_on_quit_does_nothing(self) -> None:
        (self.root / ".hiddenComments").mkdir()
        self.assertIs(self.machine.shutdown(Settings(show_comments=False)), StopAction.NONE)
        self.assertForms(visible=False, hidden=True)

    def test_shutdown_leaves_drift_alone(self) -> None:
        (self.root / "hiddenComments").mkdir()
        (self.root / ".hiddenComments").mkdir()
        settings = Settings(show_comments=False, show_on_quit=True)
        self.assertIs(self.machine.shutdown(settings), StopAction.NONE)
        self.assertForms(visible=True, hidden=True)

    def test_rename_base_folder_in_hidden_form(self) -> None:
        (self.root / ".hiddenComments").mkdir()
        updated = self.machine.rename_base_folder(Settings(show_comments=False), "notes")
        self.assertEqual(updated.hidden_folder_name, "notes")
        self.assertForms(visible=False, hidden=True, name="notes")
        self.assertEqual(self.store.load().hidden_folder_name, "notes")

    def test_rename_base_folder_refuses_drift(self) -> None:
        (self.root / "hiddenComments").mkdir()
        (self.root / ".hiddenComments").mkdir()
        with self.assertRaises(DriftError):
            self.machine.rename_base_folder(Settings(), "notes")
        self.assertFalse((self.root / "notes").exists())

    def test_rename_base_folder_refuses_existing_target(self) -> None:
        (self.root / "hiddenComments").mkdir()
        (self.root / "notes").mkdir()
        with self.assertRaises(FileExistsError):
            self.machine.rename_base_folder(Settings(), "notes")
        self.assertForms(visible=True, hidden=False)

    def test_rename_base_folder_rejects_invalid_names(self) -> None:
        for name in ("", "  ", ".notes", "a/b"):
            with self.subTest(name=name), self.assertRaises(ValueError):
                self.machine.rename_base_folder(Settings(), name)


if __name__ == "__main__":
    unittest.main()
