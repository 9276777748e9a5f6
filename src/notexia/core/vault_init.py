"""Vault metadata initialization.

Creates the reserved ``.notexia`` directory and writes the vault config
document (``.notexia/vault.json``).
"""

from __future__ import annotations

import json
import uuid
from pathlib import Path

from ..observability import get_logger
from ..storage.vault import atomic_write
from .errors import SerializationError, VaultIOError
from .models import CONFIG_VERSION, OwnerInfo, VaultConfig
from .paths import config_file_path, metadata_dir_path, require_directory
from .schemas import validate_vault_config
from .time import format_utc_iso8601, get_current_utc

__all__ = [
    "init_vault_config",
    "read_vault_config",
]

logger = get_logger("vault")


def init_vault_config(
    vault_path: Path | str,
    first_name: str,
    last_name: str,
    label: str | None = None,
) -> VaultConfig:
    """Create the metadata directory and write a fresh vault config.

    Any existing config is overwritten and a new ``spaceId`` is generated on
    every call.

    Parameters
    ----------
    vault_path
        Vault root directory
    first_name
        Owner first name
    last_name
        Owner last name
    label
        Optional human label for the vault

    Returns
    -------
    VaultConfig
        The record as written

    Raises
    ------
    NotADirectoryVaultError
        If the vault path is blank or not a directory
    SerializationError
        If the record cannot be encoded
    VaultIOError
        If the metadata directory or file cannot be written
    """
    root = require_directory(vault_path)

    meta_dir = metadata_dir_path(root)
    try:
        meta_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise VaultIOError(f"Failed to create {meta_dir}: {exc}", path=meta_dir) from exc

    now = format_utc_iso8601(get_current_utc())
    config = VaultConfig(
        space_id=str(uuid.uuid4()),
        vault_path=str(vault_path),
        label=label,
        owner=OwnerInfo(first_name=first_name, last_name=last_name),
        created_at=now,
        updated_at=now,
        version=CONFIG_VERSION,
    )

    config_path = config_file_path(root)
    try:
        document = json.dumps(config.to_dict(), indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Failed to encode vault config: {exc}", path=config_path) from exc

    atomic_write(config_path, document)

    logger.info("Vault config written", path=str(config_path), space_id=config.space_id)
    return config


def read_vault_config(vault_path: Path | str) -> VaultConfig:
    """Load and validate ``.notexia/vault.json``.

    Raises
    ------
    NotADirectoryVaultError
        If the vault path is blank or not a directory
    VaultIOError
        If the file is missing or unreadable
    SerializationError
        If the file is not valid JSON or does not match the config schema
    """
    config_path = config_file_path(require_directory(vault_path))

    try:
        raw = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise VaultIOError(f"Failed to read {config_path}: {exc}", path=config_path) from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SerializationError(f"Invalid JSON in {config_path}: {exc}", path=config_path) from exc

    result = validate_vault_config(data)
    if not result:
        raise SerializationError(
            f"Invalid vault config {config_path}: {'; '.join(result.errors)}",
            path=config_path,
            errors=result.errors,
        )

    return VaultConfig.from_dict(data)
