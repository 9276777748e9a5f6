"""Vault filesystem operations.

Every function here is a thin, stateless wrapper over one filesystem call:
inputs are re-validated against the live disk on each call and nothing is
cached between calls. Failures surface as :class:`~notexia.core.errors.VaultError`
subclasses; OS errors are chained as the cause.

The reserved metadata directory (``.notexia``) is never listed and never used
as a creation, write, rename or move target.
"""

from __future__ import annotations

import os
import shutil
import stat
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from ..core.errors import (
    EntryExistsError,
    EntryNotFoundError,
    InvalidOperationError,
    InvalidTargetError,
    NamespaceExhaustedError,
    ReservedPathError,
    VaultIOError,
)
from ..core.models import Entry
from ..core.paths import (
    is_blank_path,
    is_hidden_name,
    is_reserved_path,
    is_within,
    normalize_path,
    require_directory,
    validate_entry_name,
)
from ..core.time import format_epoch_seconds
from ..observability import get_logger, timing_context

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

UNTITLED_NOTE_TEMPLATE = "Untitled {n}.md"
MAX_UNTITLED_NOTES = 9999

logger = get_logger("vault")


@contextmanager
def _io_errors(action: str, path: Path | str) -> Iterator[None]:
    """Translate OSError raised inside the block into VaultIOError."""
    try:
        yield
    except OSError as exc:
        raise VaultIOError(f"Failed to {action} {path}: {exc}", path=path) from exc


def _reject_reserved(path: Path) -> None:
    if is_reserved_path(path):
        raise ReservedPathError(f"Operations inside the vault metadata directory are not allowed: {path}", path=path)


def _stat_entry(entry: os.DirEntry[str]) -> os.stat_result:
    # Symlinks are reported as themselves and never followed
    return entry.stat(follow_symlinks=False)


def _build_entry(root: Path, entry: os.DirEntry[str], stat_result: os.stat_result) -> Entry:
    path = Path(entry.path)
    modified = stat_result.st_mtime
    created = getattr(stat_result, "st_birthtime", None)
    if created is None:
        created = modified

    return Entry(
        path=path,
        rel_path=str(path.relative_to(root)),
        name=entry.name,
        is_dir=stat.S_ISDIR(stat_result.st_mode),
        created=format_epoch_seconds(created),
        modified=format_epoch_seconds(modified),
    )


def _walk(root: Path, current: Path, acc: list[Entry]) -> None:
    with _io_errors("read directory", current), os.scandir(current) as it:
        for dir_entry in it:
            if is_hidden_name(dir_entry.name):
                continue

            with _io_errors("read metadata of", dir_entry.path):
                stat_result = _stat_entry(dir_entry)

            entry = _build_entry(root, dir_entry, stat_result)
            acc.append(entry)

            if entry.is_dir:
                _walk(root, entry.path, acc)


def list_entries(vault_path: Path | str) -> list[Entry]:
    """List every entry under the vault, depth-first.

    Hidden entries (names starting with ``.``, the metadata directory
    included) are skipped together with their subtrees. Sibling order follows
    the filesystem.

    Parameters
    ----------
    vault_path
        Vault root directory

    Returns
    -------
    list[Entry]
        All visible files and directories

    Raises
    ------
    NotADirectoryVaultError
        If the vault path is not a directory
    VaultIOError
        If any directory or entry metadata cannot be read
    """
    root = require_directory(vault_path)

    entries: list[Entry] = []
    with timing_context("list_entries", component="vault", vault=str(root)) as ctx:
        _walk(root, root, entries)
        ctx["count"] = len(entries)

    return entries


def read_note(path: Path | str) -> str:
    """Read a note as UTF-8 text.

    Raises
    ------
    VaultIOError
        On any read failure (missing file, permissions, decoding)
    """
    if is_blank_path(path):
        raise VaultIOError("Failed to read note: path is empty")

    note_path = normalize_path(path)
    try:
        return note_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise VaultIOError(f"Failed to read {note_path}: {exc}", path=note_path) from exc


def atomic_write(file_path: Path, content: str) -> None:
    """Atomic file write (temp file + fsync + rename + fsync dir).

    The temp file lives in the target directory under a hidden name so it is
    never listed as an entry.

    Raises
    ------
    VaultIOError
        If any step fails; the previous content is left in place
    """
    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=file_path.parent,
            prefix=f".{file_path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp_file:
            tmp_path = Path(tmp_file.name)
            tmp_file.write(content)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())

        # Temp files are created 0600; keep the permissions of the note being replaced
        if file_path.exists():
            os.chmod(tmp_path, stat.S_IMODE(file_path.stat().st_mode))

        os.replace(tmp_path, file_path)
        tmp_path = None

        # Persist the rename itself; not supported for directories on Windows
        if os.name != "nt":
            dir_fd = os.open(file_path.parent, os.O_RDONLY)
            try:
                os.fsync(dir_fd)
            finally:
                os.close(dir_fd)

    except (OSError, UnicodeEncodeError) as exc:
        raise VaultIOError(f"Failed to write {file_path}: {exc}", path=file_path) from exc
    finally:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)


def write_note(path: Path | str, content: str) -> None:
    """Replace the note content, creating the file if absent.

    Raises
    ------
    ReservedPathError
        If the note lies in the metadata directory
    VaultIOError
        If the path is blank, the parent directory is missing or the write fails
    """
    if is_blank_path(path):
        raise VaultIOError("Failed to write note: path is empty")

    note_path = normalize_path(path)
    _reject_reserved(note_path)
    if not note_path.parent.is_dir():
        raise VaultIOError(f"Failed to write {note_path}: parent directory does not exist", path=note_path)
    if note_path.is_dir():
        raise VaultIOError(f"Failed to write {note_path}: path is a directory", path=note_path)

    atomic_write(note_path, content)
    logger.debug("Note written", path=str(note_path), size=len(content))


def create_note(vault_path: Path | str) -> Path:
    """Create an empty note named ``Untitled {n}.md`` in the vault root.

    The first free n in 1..9999 is used.

    Returns
    -------
    Path
        Absolute path of the new note

    Raises
    ------
    NotADirectoryVaultError
        If the vault path is not a directory
    ReservedPathError
        If the vault path lies in the metadata directory
    NamespaceExhaustedError
        If all candidate names are taken
    VaultIOError
        If the file cannot be created
    """
    root = require_directory(vault_path)
    _reject_reserved(root)

    for n in range(1, MAX_UNTITLED_NOTES + 1):
        candidate = root / UNTITLED_NOTE_TEMPLATE.format(n=n)
        if os.path.lexists(candidate):
            continue

        try:
            # Exclusive create: a concurrent creator taking this name pushes us on
            with open(candidate, "x", encoding="utf-8"):
                pass
        except FileExistsError:
            continue
        except OSError as exc:
            raise VaultIOError(f"Failed to create {candidate}: {exc}", path=candidate) from exc

        logger.info("Note created", path=str(candidate))
        return candidate

    raise NamespaceExhaustedError(
        f"Could not create note: all {MAX_UNTITLED_NOTES} untitled names are taken in {root}",
        path=root,
    )


def delete_note(path: Path | str) -> None:
    """Delete a single note file.

    Raises
    ------
    EntryNotFoundError
        If the path is blank or nothing exists at it
    VaultIOError
        If the path is a directory or removal fails
    """
    if is_blank_path(path):
        raise EntryNotFoundError("Note path is empty")

    note_path = normalize_path(path)
    if not os.path.lexists(note_path):
        raise EntryNotFoundError(f"Note not found: {note_path}", path=note_path)
    if note_path.is_dir() and not note_path.is_symlink():
        raise VaultIOError(f"Failed to delete {note_path}: path is a directory, not a note", path=note_path)

    with _io_errors("delete", note_path):
        note_path.unlink()

    logger.info("Note deleted", path=str(note_path))


def delete_entry(path: Path | str) -> None:
    """Delete a file, or a directory with all of its contents.

    Raises
    ------
    VaultIOError
        If the path is blank, does not exist or cannot be removed
    """
    if is_blank_path(path):
        raise VaultIOError("Failed to delete entry: path is empty")

    entry_path = normalize_path(path)

    with _io_errors("delete", entry_path):
        if entry_path.is_dir() and not entry_path.is_symlink():
            shutil.rmtree(entry_path)
        else:
            entry_path.unlink()

    logger.info("Entry deleted", path=str(entry_path))


def rename_note(old_path: Path | str, new_name: str) -> Path:
    """Rename an entry within its parent directory.

    Parameters
    ----------
    old_path
        Existing file or directory
    new_name
        New base name

    Returns
    -------
    Path
        New absolute path

    Raises
    ------
    InvalidTargetError
        If the path is blank or its parent directory cannot be determined
    ReservedPathError
        If the entry lies in the metadata directory
    InvalidNameError, ReservedNameError
        If the new name is rejected by the shared validator
    EntryExistsError
        If the target name is taken
    VaultIOError
        If the rename fails
    """
    if is_blank_path(old_path):
        raise InvalidTargetError("Cannot determine parent directory of an empty path")

    old = normalize_path(old_path)
    if old.parent == old:
        raise InvalidTargetError(f"Cannot determine parent directory: {old}", path=old)

    _reject_reserved(old)
    validate_entry_name(new_name)

    target = old.parent / new_name
    if os.path.lexists(target):
        raise EntryExistsError(f"A file with the target name already exists: {target}", path=target)

    with _io_errors("rename", old):
        os.rename(old, target)

    logger.info("Entry renamed", path=str(old), target=str(target))
    return target


def create_directory(parent_path: Path | str, name: str) -> Path:
    """Create a directory ``name`` inside ``parent_path``.

    Returns
    -------
    Path
        Absolute path of the new directory

    Raises
    ------
    NotADirectoryVaultError
        If the parent is not a directory
    ReservedPathError
        If the parent is, or is inside, the metadata directory
    InvalidNameError
        If the name is empty, hidden or contains a path separator
    ReservedNameError
        If the name is the metadata directory name
    EntryExistsError
        If the path already exists
    VaultIOError
        If creation fails
    """
    parent = require_directory(parent_path, "Parent path")
    _reject_reserved(parent)
    validate_entry_name(name, allow_hidden=False)

    new_path = parent / name
    if os.path.lexists(new_path):
        raise EntryExistsError(f"Directory already exists: {new_path}", path=new_path)

    try:
        new_path.mkdir(parents=True, exist_ok=False)
    except FileExistsError as exc:
        raise EntryExistsError(f"Directory already exists: {new_path}", path=new_path) from exc
    except OSError as exc:
        raise VaultIOError(f"Failed to create directory {new_path}: {exc}", path=new_path) from exc

    logger.info("Directory created", path=str(new_path))
    return new_path


def move_entry(
    old_path: Path | str,
    new_parent_path: Path | str,
    new_name: str | None = None,
) -> Path:
    """Move (and optionally rename) a file or directory.

    Moving an entry onto itself is a no-op that returns the source path.

    Parameters
    ----------
    old_path
        Existing file or directory
    new_parent_path
        Destination directory
    new_name
        New base name (defaults to the current one)

    Returns
    -------
    Path
        New absolute path

    Raises
    ------
    EntryNotFoundError
        If the source is blank or does not exist (a dangling symlink exists)
    NotADirectoryVaultError
        If the destination parent is not a directory
    ReservedPathError
        If source, destination parent or destination lies in the metadata
        directory
    InvalidNameError, ReservedNameError
        If the target name is rejected by the shared validator
    InvalidOperationError
        If a directory would be moved into its own subtree
    EntryExistsError
        If the destination is taken
    VaultIOError
        If the rename fails
    """
    if is_blank_path(old_path):
        raise EntryNotFoundError("Source path is empty")

    old = normalize_path(old_path)
    if not os.path.lexists(old):
        raise EntryNotFoundError(f"Source path does not exist: {old}", path=old)

    new_parent = require_directory(new_parent_path, "Target parent")

    _reject_reserved(old)
    _reject_reserved(new_parent)

    base_name = old.name if new_name is None else new_name
    validate_entry_name(base_name)

    new_path = new_parent / base_name
    _reject_reserved(new_path)

    if new_path == old:
        return old

    if is_within(old, new_path):
        raise InvalidOperationError(
            f"Cannot move a folder into itself or its descendant: {old} -> {new_path}",
            path=old,
        )

    if os.path.lexists(new_path):
        raise EntryExistsError(f"Target already exists: {new_path}", path=new_path)

    with _io_errors("move", old):
        os.rename(old, new_path)

    logger.info("Entry moved", path=str(old), target=str(new_path))
    return new_path
