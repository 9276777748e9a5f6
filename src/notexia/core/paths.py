"""Vault path rules: reserved metadata directory, hidden entries, containment.

All name checks shared by the mutation operations live in
:func:`validate_entry_name` so that directory creation, rename and move apply
one policy.
"""

from __future__ import annotations

import os
from pathlib import Path

from .errors import InvalidNameError, NotADirectoryVaultError, ReservedNameError

__all__ = [
    "CONFIG_FILE_NAME",
    "HIDDEN_MARKER",
    "METADATA_DIR_NAME",
    "PATH_SEPARATORS",
    "config_file_path",
    "is_blank_path",
    "is_hidden_name",
    "is_reserved_path",
    "is_within",
    "metadata_dir_path",
    "normalize_path",
    "require_directory",
    "validate_entry_name",
]

METADATA_DIR_NAME = ".notexia"
CONFIG_FILE_NAME = "vault.json"
HIDDEN_MARKER = "."
PATH_SEPARATORS = ("/", "\\")


def is_blank_path(path: Path | str | None) -> bool:
    """True for None and empty or whitespace-only path strings."""
    return path is None or not os.fspath(path).strip()


def normalize_path(path: Path | str) -> Path:
    """Absolute, lexically normalized path (symlinks are not resolved).

    Callers reject blank paths first: ``os.path.abspath("")`` is the working
    directory.
    """
    return Path(os.path.abspath(os.fspath(path)))


def require_directory(path: Path | str | None, what: str = "Vault path") -> Path:
    """Normalize ``path`` and check that it is an existing directory.

    Raises
    ------
    NotADirectoryVaultError
        If the path is blank or not a directory
    """
    if is_blank_path(path):
        raise NotADirectoryVaultError(f"{what} is empty")

    normalized = normalize_path(path)
    if not normalized.is_dir():
        raise NotADirectoryVaultError(f"{what} is not a directory: {normalized}", path=normalized)
    return normalized


def metadata_dir_path(vault_path: Path | str) -> Path:
    return normalize_path(vault_path) / METADATA_DIR_NAME


def config_file_path(vault_path: Path | str) -> Path:
    return metadata_dir_path(vault_path) / CONFIG_FILE_NAME


def is_hidden_name(name: str) -> bool:
    """True for names starting with the hidden marker (``.notexia`` included)."""
    return name.startswith(HIDDEN_MARKER)


def is_within(parent: Path | str, child: Path | str) -> bool:
    """Check whether ``child`` is ``parent`` or lies below it.

    Compares path components, so ``/vault/notes-old`` is not within
    ``/vault/notes``.
    """
    parent_parts = normalize_path(parent).parts
    child_parts = normalize_path(child).parts
    return child_parts[: len(parent_parts)] == parent_parts


def is_reserved_path(path: Path | str) -> bool:
    """True if the path is the metadata directory or anything below it."""
    return METADATA_DIR_NAME in normalize_path(path).parts


def validate_entry_name(name: str | None, *, allow_hidden: bool = True) -> str:
    """Validate a single path component used as a new entry name.

    Parameters
    ----------
    name
        Candidate base name
    allow_hidden
        Accept names starting with the hidden marker

    Returns
    -------
    str
        The name, unchanged

    Raises
    ------
    InvalidNameError
        Empty or whitespace-only name, separator inside the name, or a
        hidden name when ``allow_hidden`` is False
    ReservedNameError
        Name equals the metadata directory name
    """
    if name is None or not name.strip():
        raise InvalidNameError("Name cannot be empty")

    if name == METADATA_DIR_NAME:
        raise ReservedNameError(f"'{METADATA_DIR_NAME}' is reserved for vault metadata")

    if not allow_hidden and is_hidden_name(name):
        raise InvalidNameError(f"Name cannot start with '{HIDDEN_MARKER}': {name}")

    if any(sep in name for sep in PATH_SEPARATORS):
        raise InvalidNameError(f"Name cannot contain path separators: {name}")

    return name
