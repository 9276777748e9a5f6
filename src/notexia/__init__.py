"""Notexia: filesystem backend for a Markdown note vault.

Lists, reads, writes, creates, renames, moves and deletes notes and folders
inside a vault directory, and initializes the per-vault metadata in
``.notexia/vault.json``.
"""

from .core.errors import ErrorKind, VaultError
from .core.models import Entry, OwnerInfo, VaultConfig
from .core.vault_init import init_vault_config, read_vault_config
from .storage import (
    create_directory,
    create_note,
    delete_entry,
    delete_note,
    list_entries,
    move_entry,
    read_note,
    rename_note,
    write_note,
)

__version__ = "0.1.0"

__all__ = [
    "Entry",
    "ErrorKind",
    "OwnerInfo",
    "VaultConfig",
    "VaultError",
    "__version__",
    "create_directory",
    "create_note",
    "delete_entry",
    "delete_note",
    "init_vault_config",
    "list_entries",
    "move_entry",
    "read_note",
    "read_vault_config",
    "rename_note",
    "write_note",
]
