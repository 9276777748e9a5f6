"""Typed errors for vault filesystem operations.

Every failure raised by the storage layer is a :class:`VaultError` carrying an
:class:`ErrorKind` tag and a human-readable message. Underlying OS errors are
chained as ``__cause__``.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

__all__ = [
    "EntryExistsError",
    "EntryNotFoundError",
    "ErrorKind",
    "InvalidArgumentError",
    "InvalidNameError",
    "InvalidOperationError",
    "InvalidTargetError",
    "NamespaceExhaustedError",
    "NotADirectoryVaultError",
    "ReservedNameError",
    "ReservedPathError",
    "SerializationError",
    "UnknownCommandError",
    "VaultError",
    "VaultIOError",
]


class ErrorKind(str, Enum):
    """Failure kinds reported to callers."""

    NOT_A_DIRECTORY = "NotADirectory"
    NOT_FOUND = "NotFound"
    ALREADY_EXISTS = "AlreadyExists"
    INVALID_NAME = "InvalidName"
    INVALID_TARGET = "InvalidTarget"
    RESERVED_PATH = "ReservedPath"
    RESERVED_NAME = "ReservedName"
    INVALID_OPERATION = "InvalidOperation"
    EXHAUSTED_NAMESPACE = "ExhaustedNamespace"
    IO_ERROR = "IoError"
    SERIALIZATION_ERROR = "SerializationError"
    INVALID_ARGUMENT = "InvalidArgument"
    UNKNOWN_COMMAND = "UnknownCommand"


class VaultError(Exception):
    """Base class for all vault operation failures.

    Parameters
    ----------
    message
        Human-readable description, shown to the end user as is
    path
        Path the operation failed on (if any)
    """

    kind: ErrorKind = ErrorKind.IO_ERROR

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = Path(path) if path is not None else None

    def to_dict(self) -> dict[str, Any]:
        """Error as ``{"kind", "message"}`` for the command bridge."""
        return {"kind": self.kind.value, "message": self.message}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class NotADirectoryVaultError(VaultError):
    """Raised when a path expected to be a directory is not one."""

    kind = ErrorKind.NOT_A_DIRECTORY


class EntryNotFoundError(VaultError):
    """Raised when the source of an operation does not exist."""

    kind = ErrorKind.NOT_FOUND


class EntryExistsError(VaultError):
    """Raised when the target of an operation is already occupied."""

    kind = ErrorKind.ALREADY_EXISTS


class InvalidNameError(VaultError):
    """Raised for empty, hidden or separator-containing entry names."""

    kind = ErrorKind.INVALID_NAME


class InvalidTargetError(VaultError):
    """Raised when the parent of a rename target cannot be determined."""

    kind = ErrorKind.INVALID_TARGET


class ReservedPathError(VaultError):
    """Raised when an operation touches the reserved metadata directory."""

    kind = ErrorKind.RESERVED_PATH


class ReservedNameError(VaultError):
    """Raised when a name equals the reserved metadata directory name."""

    kind = ErrorKind.RESERVED_NAME


class InvalidOperationError(VaultError):
    """Raised when a directory would be moved into its own subtree."""

    kind = ErrorKind.INVALID_OPERATION


class NamespaceExhaustedError(VaultError):
    """Raised when no free auto-generated note name is left."""

    kind = ErrorKind.EXHAUSTED_NAMESPACE


class VaultIOError(VaultError):
    """Raised for any underlying filesystem failure."""

    kind = ErrorKind.IO_ERROR


class SerializationError(VaultError):
    """Raised when the vault config cannot be encoded or decoded."""

    kind = ErrorKind.SERIALIZATION_ERROR

    def __init__(
        self,
        message: str,
        *,
        path: Path | str | None = None,
        errors: list[str] | None = None,
    ) -> None:
        super().__init__(message, path=path)
        self.errors = errors or []


class InvalidArgumentError(VaultError):
    """Raised by the command table when a required parameter is missing."""

    kind = ErrorKind.INVALID_ARGUMENT


class UnknownCommandError(VaultError):
    """Raised by the command table for an unregistered command name."""

    kind = ErrorKind.UNKNOWN_COMMAND
