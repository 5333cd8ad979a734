from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path, PurePosixPath

from hidden_comments_core.paths import default_vault_root

from .constants import hidden_form, visible_form
from .editor import TextEditor
from .models import CursorPosition, ReconcileAction, RenameOutcome, TransitionResult
from .plugin import CMD_CREATE, HiddenCommentsPlugin


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_DRIFT = 2

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_SETTING_KEYS = ("prefix", "css-class", "hide-embed-titles", "show-on-quit")


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Expected a boolean, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hidden-comments",
        description="Show, hide and create hidden comment files in a markdown vault.",
    )
    parser.add_argument(
        "--vault",
        type=Path,
        default=None,
        help="Vault directory (default: $HIDDEN_COMMENTS_VAULT or the current directory).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("status", help="Print settings and the folder forms on disk.")
    subparsers.add_parser("show", help="Make the comments folder visible.")
    subparsers.add_parser("hide", help="Hide the comments folder.")

    new_comment = subparsers.add_parser(
        "new-comment", help="Append a new comment embed to the end of a note."
    )
    new_comment.add_argument("host", help="Vault-relative path of the note.")
    new_comment.add_argument("--text", default=None, help="Initial comment text.")

    hide_lines = subparsers.add_parser(
        "hide-lines", help="Move a line range of a note into a new comment file."
    )
    hide_lines.add_argument("host", help="Vault-relative path of the note.")
    hide_lines.add_argument("start", type=int, help="First line to hide (1-based).")
    hide_lines.add_argument("end", type=int, help="Last line to hide (inclusive).")

    rename_folder = subparsers.add_parser("rename-folder", help="Rename the comments folder.")
    rename_folder.add_argument("name", help="New base name (without the leading dot).")

    set_value = subparsers.add_parser("set", help="Change a setting.")
    set_value.add_argument("key", choices=_SETTING_KEYS)
    set_value.add_argument("value")
    return parser


def _status(plugin: HiddenCommentsPlugin) -> int:
    visible_exists, hidden_exists = plugin.state_machine.forms_present(plugin.settings)
    name = plugin.settings.hidden_folder_name
    print(json.dumps(plugin.settings.to_dict(), indent=2))
    print(f"{visible_form(name)}: {'present' if visible_exists else 'missing'}")
    print(f"{hidden_form(name)}: {'present' if hidden_exists else 'missing'}")
    return EXIT_OK


def _edit_note(plugin: HiddenCommentsPlugin, host: str, args: argparse.Namespace) -> int:
    content = plugin.vault.read_file(host)
    editor = TextEditor(content)
    host_file_name = PurePosixPath(host.replace("\\", "/")).name

    if args.command == "hide-lines":
        if args.start < 1 or args.end < args.start:
            logger.error("Invalid line range %s-%s", args.start, args.end)
            return EXIT_FAILED
        lines = content.split("\n")
        if args.start > len(lines):
            logger.error("Line %s is past the end of %s (%s lines)", args.start, host, len(lines))
            return EXIT_FAILED
        last =min(args.end, len(lines)) - 1
        editor.set_selection(
            CursorPosition(line=args.start - 1, ch=0),
            CursorPosition(line=last, ch=len(lines[last])),
        )
        comment_file_name = plugin.hide_selection_in_comment(host_file_name, editor)
    else:
        end = editor.position_of(len(content))
        if args.text:
            editor.replace_range(args.text, end)
            editor.set_selection(end, editor.position_of(len(editor.get_value())))
            comment_file_name = plugin.hide_selection_in_comment(host_file_name, editor)
        else:
            editor.set_cursor(end)
            comment_file_name = plugin.create_new_comment(host_file_name, editor)

    if comment_file_name is None:
        return EXIT_FAILED
    plugin.vault.write_file(host, editor.get_value())
    logger.info("Embedded %s in %s", comment_file_name, host)
    return EXIT_OK


def _set(plugin: HiddenCommentsPlugin, key: str, value: str) -> int:
    if key == "prefix":
        updated = plugin.set_comment_file_prefix(value)
    else:
        flag = _parse_bool(value)
        setter = {
            "css-class": plugin.set_css_class,
            "hide-embed-titles": plugin.set_hide_embed_titles,
            "show-on-quit": plugin.set_show_on_quit,
        }[key]
        updated = setter(flag)
    return EXIT_OK if updated is not None else EXIT_FAILED


def _toggle_code(result: TransitionResult | None) -> int:
    if result is None or result.rename is RenameOutcome.NOT_FOUND:
        return EXIT_FAILED
    return EXIT_OK


def _dispatch(plugin: HiddenCommentsPlugin, args: argparse.Namespace) -> int:
    if args.command == "status":
        return _status(plugin)
    if args.command == "show":
        return _toggle_code(plugin.show_comments())
    if args.command == "hide":
        return _toggle_code(plugin.hide_comments())
    if args.command in {"new-comment", "hide-lines"}:
        if not plugin.is_enabled(CMD_CREATE):
            logger.error("Comments are hidden; run 'show' first.")
            return EXIT_FAILED
        return _edit_note(plugin, args.host, args)
    if args.command == "rename-folder":
        return EXIT_OK if plugin.set_folder_name(args.name) is not None else EXIT_FAILED
    return _set(plugin, args.key, args.value)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    vault_root = (args.vault or default_vault_root()).expanduser()
    if not vault_root.is_dir():
        logger.error("Vault directory not found: %s", vault_root)
        return EXIT_FAILED

    plugin = HiddenCommentsPlugin.for_vault(vault_root)
    try:
        result = plugin.on_start()
    except OSError:
        logger.exception("Startup reconciliation failed for %s", vault_root)
        return EXIT_FAILED
    if result.action is ReconcileAction.HALT_DRIFT:
        return EXIT_DRIFT

    try:
        code = _dispatch(plugin, args)
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        code = EXIT_FAILED
    finally:
        halted = not plugin.loaded
        plugin.on_stop()
    return EXIT_DRIFT if halted else code


def run() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    sys.exit(main())


__all__ = [
    "build_parser",
    "main",
    "run",
]
