"""Command handlers for vault operations.

The desktop bridge invokes operations by name with a ``params`` dict using the
front end's camelCase argument names. Handlers return JSON-compatible data;
:func:`dispatch_command` wraps the outcome as ``{"status": "ok", "data": ...}``
or ``{"status": "error", "kind": ..., "error": <message>}``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..observability import get_logger
from ..storage import vault as vault_fs
from .errors import InvalidArgumentError, UnknownCommandError, VaultError
from .paths import is_blank_path
from .vault_init import init_vault_config

__all__ = [
    "COMMAND_ALIASES",
    "VaultCommandHandlers",
    "dispatch_command",
    "register_vault_command_handlers",
]

CommandHandler = Callable[[dict[str, Any]], Any]

# Names used by earlier builds of the desktop front end
COMMAND_ALIASES = {
    "list_notes_in_vault": "list_entries",
    "init_space_config": "init_vault_config",
}

logger = get_logger("commands")


def _require(params: dict[str, Any], key: str) -> Any:
    value = params.get(key)
    if value is None:
        raise InvalidArgumentError(f"Missing required parameter: {key}")
    return value


def _require_path(params: dict[str, Any], key: str) -> Any:
    # A blank path would resolve to the working directory
    value = _require(params, key)
    if is_blank_path(value):
        raise InvalidArgumentError(f"Missing required parameter: {key}")
    return value


class VaultCommandHandlers:
    """Handlers for the vault commands.

    Each handler takes the raw ``params`` dict, delegates to the storage layer
    and returns JSON-compatible data. Failures propagate as ``VaultError``.
    """

    def handle_list_entries(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        """Handle list_entries.

        Example params: {"vaultPath": "/home/me/notes"}
        """
        entries = vault_fs.list_entries(_require_path(params, "vaultPath"))
        return [entry.to_dict() for entry in entries]

    def handle_read_note(self, params: dict[str, Any]) -> str:
        return vault_fs.read_note(_require_path(params, "path"))

    def handle_write_note(self, params: dict[str, Any]) -> None:
        vault_fs.write_note(_require_path(params, "path"), _require(params, "content"))

    def handle_create_note(self, params: dict[str, Any]) -> str:
        return str(vault_fs.create_note(_require_path(params, "vaultPath")))

    def handle_delete_note(self, params: dict[str, Any]) -> None:
        vault_fs.delete_note(_require_path(params, "path"))

    def handle_delete_entry(self, params: dict[str, Any]) -> None:
        vault_fs.delete_entry(_require_path(params, "path"))

    def handle_rename_note(self, params: dict[str, Any]) -> str:
        """Handle rename_note.

        Example params: {"oldPath": "/notes/a.md", "newName": "b.md"}
        """
        return str(vault_fs.rename_note(_require_path(params, "oldPath"), _require(params, "newName")))

    def handle_create_directory(self, params: dict[str, Any]) -> str:
        return str(vault_fs.create_directory(_require_path(params, "parentPath"), _require(params, "name")))

    def handle_move_entry(self, params: dict[str, Any]) -> str:
        """Handle move_entry.

        Example params:
            {"oldPath": "/notes/a.md", "newParentPath": "/notes/archive", "newName": null}
        """
        new_path = vault_fs.move_entry(
            _require_path(params, "oldPath"),
            _require_path(params, "newParentPath"),
            params.get("newName"),
        )
        return str(new_path)

    def handle_init_vault_config(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle init_vault_config.

        Example params:
            {"vaultPath": "/notes", "firstName": "Ada", "lastName": "Lovelace", "label": "Work"}
        """
        config = init_vault_config(
            _require_path(params, "vaultPath"),
            _require(params, "firstName"),
            _require(params, "lastName"),
            params.get("label"),
        )
        return config.to_dict()


def register_vault_command_handlers(
    handlers: VaultCommandHandlers | None = None,
) -> dict[str, CommandHandler]:
    """Build the command dispatch table, aliases included.

    Example:
        >>> table = register_vault_command_handlers()
        >>> table["create_note"]({"vaultPath": "/notes"})
        '/notes/Untitled 1.md'
    """
    handlers = handlers or VaultCommandHandlers()

    table: dict[str, CommandHandler] = {
        "list_entries": handlers.handle_list_entries,
        "read_note": handlers.handle_read_note,
        "write_note": handlers.handle_write_note,
        "create_note": handlers.handle_create_note,
        "delete_note": handlers.handle_delete_note,
        "delete_entry": handlers.handle_delete_entry,
        "rename_note": handlers.handle_rename_note,
        "create_directory": handlers.handle_create_directory,
        "move_entry": handlers.handle_move_entry,
        "init_vault_config": handlers.handle_init_vault_config,
    }

    for alias, target in COMMAND_ALIASES.items():
        table[alias] = table[target]

    return table


_default_table: dict[str, CommandHandler] | None = None


def dispatch_command(
    command: str,
    params: dict[str, Any] | None = None,
    *,
    table: dict[str, CommandHandler] | None = None,
) -> dict[str, Any]:
    """Run a command and wrap its outcome for the bridge.

    ``VaultError`` failures become ``{"status": "error", ...}``; any other
    exception propagates.
    """
    global _default_table

    if table is None:
        if _default_table is None:
            _default_table = register_vault_command_handlers()
        table = _default_table

    try:
        handler = table.get(command)
        if handler is None:
            raise UnknownCommandError(f"Unknown command: {command}")
        data = handler(params or {})
    except VaultError as exc:
        logger.debug("Command failed", command=command, kind=exc.kind.value, reason=exc.message)
        return {"status": "error", "kind": exc.kind.value, "error": exc.message}

    return {"status": "ok", "data": data}
