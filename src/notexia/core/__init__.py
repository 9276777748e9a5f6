"""Core types and rules shared by the vault operations."""

from .errors import ErrorKind, VaultError
from .models import Entry, OwnerInfo, VaultConfig
from .paths import METADATA_DIR_NAME

__all__ = [
    "METADATA_DIR_NAME",
    "Entry",
    "ErrorKind",
    "OwnerInfo",
    "VaultConfig",
    "VaultError",
]
