"""JSON Schema for the vault config document.

The schema pins the camelCase keys read by other consumers of
``.notexia/vault.json``.
"""

from __future__ import annotations

from typing import Any

import jsonschema  # type: ignore[import-untyped]

__all__ = [
    "VAULT_CONFIG_SCHEMA",
    "ValidationResult",
    "validate_vault_config",
]

VAULT_CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "$id": "https://notexia.schema/vault.json",
    "type": "object",
    "required": ["spaceId", "vaultPath", "owner", "createdAt", "updatedAt", "version"],
    "properties": {
        "spaceId": {"type": "string", "minLength": 1},
        "vaultPath": {"type": "string"},
        "label": {"type": ["string", "null"]},
        "owner": {
            "type": "object",
            "required": ["firstName", "lastName"],
            "properties": {
                "firstName": {"type": "string"},
                "lastName": {"type": "string"},
            },
        },
        "createdAt": {"type": "string"},
        "updatedAt": {"type": "string"},
        "version": {"type": "integer", "minimum": 1},
    },
}

_validator = jsonschema.Draft7Validator(VAULT_CONFIG_SCHEMA)


class ValidationResult:
    """Result of schema validation."""

    def __init__(self, valid: bool, errors: list[str] | None = None) -> None:
        self.valid = valid
        self.errors = errors or []

    def __bool__(self) -> bool:
        return self.valid

    def __str__(self) -> str:
        if self.valid:
            return "Valid"
        return f"Invalid: {'; '.join(self.errors)}"


def validate_vault_config(data: Any) -> ValidationResult:
    """Validate a decoded vault config document.

    Parameters
    ----------
    data
        Decoded JSON document

    Returns
    -------
    ValidationResult
        Validation result with one message per violation
    """
    errors = []

    for error in _validator.iter_errors(data):
        error_path = " -> ".join(str(p) for p in error.absolute_path) if error.absolute_path else "root"
        errors.append(f"[{error_path}] {error.message}")

    return ValidationResult(valid=len(errors) == 0, errors=errors)
