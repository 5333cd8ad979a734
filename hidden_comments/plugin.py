from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, TypeVar

from .builder import build_preamble, mark_host_for_embed_suppression
from .constants import (
    MSG_CSSCLASS_FAILED,
    MSG_DRIFT,
    PLUGIN_ID,
    comment_marker,
    visible_form,
)
from .editor import Editor
from .errors import ConflictingMetadataError, DriftError, HiddenCommentsError
from .models import (
    CursorPosition,
    ReconcileAction,
    ReconciliationResult,
    Settings,
    StopAction,
    TransitionResult,
)
from .naming import next_name
from .notices import Notify, log_notice
from .storage import SettingsStore
from .vault import Vault
from .visibility import VisibilityStateMachine


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CommandSpec:
    command_id: str
    name: str
    needs_editor: bool = False


CMD_SHOW = "show-hidden-comments"
CMD_HIDE = "hide-hidden-comments"
CMD_HIDE_SELECTION = "hide-selection-in-comment"
CMD_CREATE = "create-hidden-comment"
CMD_UNLOAD = "unload-self"

COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(CMD_SHOW, "Show comments"),
    CommandSpec(CMD_HIDE, "Hide comments"),
    CommandSpec(CMD_UNLOAD, "Unload Self"),
    CommandSpec(CMD_HIDE_SELECTION, "Hide Selection in Comment", needs_editor=True),
    CommandSpec(CMD_CREATE, "Create New Hidden Comment", needs_editor=True),
)
COMMANDS_BY_ID = {spec.command_id: spec for spec in COMMANDS}


class HiddenCommentsPlugin:
    """
    Command surface over one vault.

    Errors raised while a command runs are logged and turned into notices;
    they never escape a command. A drift between the two folder forms
    unloads the plugin.
    """

    def __init__(self, vault: Vault, store: SettingsStore, notify: Notify = log_notice) -> None:
        self.vault = vault
        self.store = store
        self._notify = notify
        self.state_machine = VisibilityStateMachine(vault, store, notify)
        self.settings = Settings()
        self.loaded = False

    @classmethod
    def for_vault(cls, vault_root: Path, notify: Notify = log_notice) -> HiddenCommentsPlugin:
        return cls(Vault(vault_root), SettingsStore.for_vault(vault_root), notify)

    # lifecycle

    def on_start(self) -> ReconciliationResult:
        self.settings = self.store.load()
        self.loaded = True
        try:
            result = self.state_machine.reconcile(self.settings)
        except DriftError as exc:
            self._halt(exc)
            return ReconciliationResult(action=ReconcileAction.HALT_DRIFT, settings=self.settings)
        self.settings = result.settings
        return result

    def on_stop(self) -> StopAction:
        if not self.loaded:
            return StopAction.NONE
        self.loaded = False
        try:
            action = self.state_machine.shutdown(self.settings)
        except (HiddenCommentsError, OSError) as exc:
            logger.warning("Shutdown action failed: %s", exc)
            action = StopAction.NONE
        logger.info("Unloading %s", PLUGIN_ID)
        return action

    def unload(self) -> StopAction:
        return self.on_stop()

    # commands

    def is_enabled(self, command_id: str) -> bool:
        if command_id not in COMMANDS_BY_ID:
            raise KeyError(f"Unknown command: {command_id}")
        if not self.loaded:
            return False
        if command_id == CMD_UNLOAD:
            return True
        if command_id == CMD_SHOW:
            return not self.settings.show_comments
        return self.settings.show_comments

    def enabled_commands(self) -> list[CommandSpec]:
        return [spec for spec in COMMANDS if self.is_enabled(spec.command_id)]

    def run(
        self,
        command_id: str,
        *,
        host_file_name: str | None = None,
        editor: Editor | None = None,
    ) -> object:
        spec = COMMANDS_BY_ID.get(command_id)
        if spec is None:
            raise KeyError(f"Unknown command: {command_id}")
        if not self.is_enabled(command_id):
            logger.info("Command '%s' is not available right now", command_id)
            return None
        if spec.needs_editor and (editor is None or host_file_name is None):
            raise ValueError(f"Command '{command_id}' needs an open note")

        if command_id == CMD_SHOW:
            return self.show_comments()
        if command_id == CMD_HIDE:
            return self.hide_comments()
        if command_id == CMD_HIDE_SELECTION:
            return self.hide_selection_in_comment(host_file_name, editor)
        if command_id == CMD_CREATE:
            return self.create_new_comment(host_file_name, editor)
        return self.unload()

    def show_comments(self, *, silent: bool = False) -> TransitionResult | None:
        return self._guarded(lambda: self._apply(self.state_machine.show(self.settings, silent=silent)))

    def hide_comments(self, *, silent: bool = False) -> TransitionResult | None:
        return self._guarded(lambda: self._apply(self.state_machine.hide(self.settings, silent=silent)))

    def hide_selection_in_comment(self, host_file_name: str, editor: Editor) -> str | None:
        """Move the selection into a new comment file and embed it in its place."""

        def _run() -> str:
            contents = build_preamble(host_file_name, self.settings) + editor.get_selection()
            comment_file_name = self._create_comment_file(host_file_name, contents)
            editor.replace_selection(comment_marker(comment_file_name))
            self._mark_host(editor)
            return comment_file_name

        return self._guarded(_run)

    def create_new_comment(self, host_file_name: str, editor: Editor) -> str | None:
        """Create an empty comment file and embed it at the cursor."""

        def _run() -> str:
            contents = build_preamble(host_file_name, self.settings)
            comment_file_name = self._create_comment_file(host_file_name, contents)
            marker = comment_marker(comment_file_name)
            cursor = editor.get_cursor()
            editor.replace_range(marker, cursor)
            editor.set_cursor(CursorPosition(line=cursor.line, ch=cursor.ch + len(marker)))
            self._mark_host(editor)
            return comment_file_name

        return self._guarded(_run)

    # settings surface

    def set_show_comments(self, value: bool) -> TransitionResult | None:
        return self.show_comments() if value else self.hide_comments()

    def set_folder_name(self, value: str) -> Settings | None:
        try:
            return self._guarded(
                lambda: self._apply_settings(self.state_machine.rename_base_folder(self.settings, value))
            )
        except ValueError as exc:
            logger.warning("%s", exc)
            self._notify(str(exc))
            return None

    def set_comment_file_prefix(self, value: str) -> Settings | None:
        if "/" in value or "\\" in value:
            self._notify(f"Invalid comment file prefix: {value!r}")
            return None
        return self._update(comment_file_prefix=value)

    def set_css_class(self, value: bool) -> Settings | None:
        return self._update(set_css_class=value)

    def set_hide_embed_titles(self, value: bool) -> Settings | None:
        return self._update(hide_embed_titles=value)

    def set_show_on_quit(self, value: bool) -> Settings | None:
        return self._update(show_on_quit=value)

    # internals

    def _create_comment_file(self, host_file_name: str, contents: str) -> str:
        existing = set(self.vault.list_documents())
        comment_file_name = next_name(host_file_name, self.settings.comment_file_prefix, existing)
        folder = visible_form(self.settings.hidden_folder_name)
        self.vault.create_file(f"{folder}/{comment_file_name}", contents)
        return comment_file_name

    def _mark_host(self, editor: Editor) -> bool:
        if not (self.settings.set_css_class and self.settings.hide_embed_titles):
            return False
        try:
            return mark_host_for_embed_suppression(editor.get_value(), editor)
        except ConflictingMetadataError as exc:
            logger.warning("%s", exc)
            self._notify(MSG_CSSCLASS_FAILED)
            return False

    def _update(self, **changes: object) -> Settings | None:
        return self._guarded(lambda: self._apply_settings(self._save(self.settings.with_changes(**changes))))

    def _save(self, settings: Settings) -> Settings:
        self.store.save(settings)
        return settings

    def _apply(self, result: TransitionResult) -> TransitionResult:
        self.settings = result.settings
        return result

    def _apply_settings(self, settings: Settings) -> Settings:
        self.settings = settings
        return settings

    def _guarded(self, action: Callable[[], T]) -> T | None:
        try:
            return action()
        except DriftError as exc:
            self._halt(exc)
        except HiddenCommentsError as exc:
            logger.warning("%s", exc)
            self._notify(str(exc))
        except OSError as exc:
            logger.exception("File operation failed")
            self._notify(f"File operation failed: {exc}")
        # Whatever was persisted before the failure is the state to continue from.
        self.settings = self.store.load()
        return None

    def _halt(self, exc: DriftError) -> None:
        logger.error("%s", exc)
        self._notify(MSG_DRIFT)
        self.loaded = False
