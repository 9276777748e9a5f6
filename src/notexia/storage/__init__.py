"""Storage layer: stateless filesystem operations over a vault."""

from .vault import (
    MAX_UNTITLED_NOTES,
    UNTITLED_NOTE_TEMPLATE,
    atomic_write,
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

__all__ = [
    "MAX_UNTITLED_NOTES",
    "UNTITLED_NOTE_TEMPLATE",
    "atomic_write",
    "create_directory",
    "create_note",
    "delete_entry",
    "delete_note",
    "list_entries",
    "move_entry",
    "read_note",
    "rename_note",
    "write_note",
]
