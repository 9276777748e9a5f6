"""Records exchanged with the desktop front end.

Entry fields keep the snake_case names the explorer tree consumes; the vault
config keeps the camelCase keys stored in ``.notexia/vault.json``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

__all__ = [
    "CONFIG_VERSION",
    "Entry",
    "OwnerInfo",
    "VaultConfig",
]

CONFIG_VERSION = 1


@dataclass(frozen=True)
class Entry:
    """A file or directory inside a vault.

    Attributes
    ----------
    path : Path
        Absolute path
    rel_path : str
        Path relative to the vault root
    name : str
        Base name
    is_dir : bool
        Directory flag
    created : str | None
        Creation time in epoch seconds (falls back to modification time)
    modified : str | None
        Modification time in epoch seconds
    """

    path: Path
    rel_path: str
    name: str
    is_dir: bool
    created: str | None = None
    modified: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "rel_path": self.rel_path,
            "name": self.name,
            "is_dir": self.is_dir,
            "created": self.created,
            "modified": self.modified,
        }


@dataclass
class OwnerInfo:
    """Vault owner."""

    first_name: str
    last_name: str

    def to_dict(self) -> dict[str, Any]:
        return {"firstName": self.first_name, "lastName": self.last_name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OwnerInfo:
        return cls(first_name=data["firstName"], last_name=data["lastName"])


@dataclass
class VaultConfig:
    """Identity and ownership record persisted per vault.

    Attributes
    ----------
    space_id : str
        Generated vault identifier (UUID4)
    vault_path : str
        Vault root as given at initialization
    label : str | None
        Optional human label
    owner : OwnerInfo
        Owner name
    created_at : str
        ISO-8601 UTC creation time
    updated_at : str
        ISO-8601 UTC last update time
    version : int
        Config schema version
    """

    space_id: str
    vault_path: str
    label: str | None
    owner: OwnerInfo
    created_at: str
    updated_at: str
    version: int = CONFIG_VERSION

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the on-disk key names."""
        return {
            "spaceId": self.space_id,
            "vaultPath": self.vault_path,
            "label": self.label,
            "owner": self.owner.to_dict(),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VaultConfig:
        """Build from an already validated document.

        Raises
        ------
        KeyError
            If a required key is missing
        """
        return cls(
            space_id=data["spaceId"],
            vault_path=data["vaultPath"],
            label=data.get("label"),
            owner=OwnerInfo.from_dict(data["owner"]),
            created_at=data["createdAt"],
            updated_at=data["updatedAt"],
            version=data["version"],
        )
