from __future__ import annotations

import logging

from hidden_comments_core.fs import is_hidden_name

from .constants import (
    MSG_ALREADY_HIDDEN,
    MSG_ALREADY_VISIBLE,
    form_prefix,
    hidden_form,
    visible_form,
)
from .errors import DriftError
from .models import (
    ReconcileAction,
    ReconciliationResult,
    RenameOutcome,
    Settings,
    StopAction,
    TransitionResult,
)
from .notices import Notify
from .relocator import FolderRelocator
from .storage import SettingsStore
from .vault import Vault


logger = logging.getLogger(__name__)


def plan_reconciliation(
    show_comments: bool, visible_exists: bool, hidden_exists: bool
) -> ReconcileAction:
    """
    Decide the startup action from the persisted intent and the folder forms on disk.
    """
    if not show_comments and visible_exists and not hidden_exists:
        # Left visible over a shutdown (show_on_quit).
        return ReconcileAction.REHIDE
    if visible_exists and not hidden_exists:
        return ReconcileAction.ADOPT_SHOWN
    if hidden_exists and not visible_exists:
        return ReconcileAction.ADOPT_HIDDEN
    if hidden_exists and visible_exists:
        return ReconcileAction.HALT_DRIFT
    return ReconcileAction.CREATE_FOLDER


class VisibilityStateMachine:
    """
    Shown/Hidden state of the comments folder.

    Settings are passed in and returned explicitly. Every transition saves
    the new intent before renaming, so an interrupted rename is repaired by
    `reconcile` on the next start.
    """

    def __init__(
        self,
        vault: Vault,
        store: SettingsStore,
        notify: Notify,
        relocator: FolderRelocator | None = None,
    ) -> None:
        self._vault = vault
        self._store = store
        self._notify = notify
        self.relocator = relocator or FolderRelocator(vault, notify)

    def forms_present(self, settings: Settings) -> tuple[bool, bool]:
        """Return (visible form exists, hidden form exists)."""
        name = settings.hidden_folder_name
        return (
            self.relocator.folder_exists(visible_form(name)),
            self.relocator.folder_exists(hidden_form(name)),
        )

    def show(self, settings: Settings, *, silent: bool = False) -> TransitionResult:
        if settings.show_comments:
            if not silent:
                self._notify(MSG_ALREADY_VISIBLE)
            return TransitionResult(settings=settings, changed=False)
        updated = settings.with_changes(show_comments=True)
        self._store.save(updated)
        outcome = self.reveal(updated, silent=silent)
        return TransitionResult(settings=updated, changed=True, rename=outcome)

    def hide(self, settings: Settings, *, silent: bool = False) -> TransitionResult:
        if not settings.show_comments:
            if not silent:
                self._notify(MSG_ALREADY_HIDDEN)
            return TransitionResult(settings=settings, changed=False)
        updated = settings.with_changes(show_comments=False)
        self._store.save(updated)
        outcome = self.conceal(updated, silent=silent)
        return TransitionResult(settings=updated, changed=True, rename=outcome)

    def reveal(self, settings: Settings, *, silent: bool = False) -> RenameOutcome:
        name = settings.hidden_folder_name
        return self.relocator.rename(hidden_form(name), visible_form(name), silent=silent)

    def conceal(self, settings: Settings, *, silent: bool = False) -> RenameOutcome:
        name = settings.hidden_folder_name
        return self.relocator.rename(visible_form(name), hidden_form(name), silent=silent)

    def reconcile(self, settings: Settings) -> ReconciliationResult:
        """
        Bring persisted state and the on-disk folder back in line at startup.

        Raises DriftError, without touching the disk, when both forms exist.
        """
        visible_exists, hidden_exists = self.forms_present(settings)
        action = plan_reconciliation(settings.show_comments, visible_exists, hidden_exists)
        logger.info(
            "Reconciling '%s' (show=%s, visible=%s, hidden=%s): %s",
            settings.hidden_folder_name,
            settings.show_comments,
            visible_exists,
            hidden_exists,
            action.value,
        )

        if action is ReconcileAction.REHIDE:
            outcome = self.conceal(settings, silent=True)
            return ReconciliationResult(action=action, settings=settings, rename=outcome)
        if action is ReconcileAction.ADOPT_SHOWN:
            updated = settings.with_changes(show_comments=True)
            self._store.save(updated)
            return ReconciliationResult(action=action, settings=updated)
        if action is ReconcileAction.ADOPT_HIDDEN:
            updated = settings.with_changes(show_comments=False)
            self._store.save(updated)
            return ReconciliationResult(action=action, settings=updated)
        if action is ReconcileAction.HALT_DRIFT:
            name = settings.hidden_folder_name
            raise DriftError(visible_form(name), hidden_form(name))

        folder = form_prefix(settings.show_comments) + settings.hidden_folder_name
        self._vault.create_folder(folder)
        return ReconciliationResult(action=action, settings=settings)

    def shutdown(self, settings: Settings) -> StopAction:
        """
        Reveal the folder for the time the host is closed when `show_on_quit`
        is set. The persisted intent stays Hidden so `reconcile` re-hides it.
        """
        if not settings.show_on_quit:
            return StopAction.NONE
        visible_exists, hidden_exists = self.forms_present(settings)
        if not hidden_exists or visible_exists:
            return StopAction.NONE
        outcome = self.reveal(settings, silent=True)
        return StopAction.REVEAL if outcome.succeeded else StopAction.NONE

    def rename_base_folder(self, settings: Settings, new_name: str) -> Settings:
        """
        Rename the comments folder in its current form and persist the new base name.
        """
        new_name = new_name.strip()
        if not new_name or "/" in new_name or "\\" in new_name or is_hidden_name(new_name):
            raise ValueError(f"Invalid comments folder name: {new_name!r}")
        old_name = settings.hidden_folder_name
        if new_name == old_name:
            return settings

        visible_exists, hidden_exists = self.forms_present(settings)
        if visible_exists and hidden_exists:
            raise DriftError(visible_form(old_name), hidden_form(old_name))

        prefix = form_prefix(settings.show_comments)
        target = prefix + new_name
        if self._vault.adapter.path_exists(target):
            raise FileExistsError(f"Cannot rename comments folder, '{target}' already exists.")

        self.relocator.rename(prefix + old_name, target, silent=False)
        updated = settings.with_changes(hidden_folder_name=new_name)
        self._store.save(updated)
        return updated


__all__ = [
    "VisibilityStateMachine",
    "plan_reconciliation",
]
