"""End-to-end vault workflow through the public API."""

from pathlib import Path

import pytest

import notexia
from notexia import (
    create_directory,
    create_note,
    delete_entry,
    init_vault_config,
    list_entries,
    move_entry,
    read_note,
    rename_note,
    write_note,
)

pytestmark = pytest.mark.integration


class TestVaultWorkflow:
    """Explorer session: init, create, organise, delete."""

    def test_full_session(self, vault: Path, snapshot):
        config = init_vault_config(vault, "Ada", "Lovelace", label="Personal")
        assert config.vault_path == str(vault)

        first = create_note(vault)
        second = create_note(vault)
        write_note(first, "# Ideas\n")
        write_note(second, "# Todo\n")

        ideas = rename_note(first, "Ideas.md")
        projects = create_directory(vault, "Projects")
        archive = create_directory(projects, "Archive")
        moved = move_entry(ideas, projects)
        assert moved == projects / "Ideas.md"
        assert read_note(moved) == "# Ideas\n"

        tree = {e.rel_path: e.is_dir for e in list_entries(vault)}
        assert tree == {
            "Untitled 2.md": False,
            "Projects": True,
            str(Path("Projects") / "Archive"): True,
            str(Path("Projects") / "Ideas.md"): False,
        }

        # Freed name is reused
        assert create_note(vault).name == "Untitled 1.md"

        with pytest.raises(notexia.VaultError) as exc_info:
            move_entry(projects, archive)
        assert exc_info.value.kind is notexia.ErrorKind.INVALID_OPERATION

        delete_entry(projects)
        assert sorted(e.name for e in list_entries(vault)) == ["Untitled 1.md", "Untitled 2.md"]

        # Metadata survives every operation
        assert ".notexia/vault.json" in {p.replace("\\", "/") for p in snapshot(vault)}

    def test_failed_operations_leave_vault_unchanged(self, populated_vault: Path, snapshot):
        before = snapshot(populated_vault)
        attempts = [
            lambda: rename_note(populated_vault / "a.md", "folder"),
            lambda: create_directory(populated_vault, ".notexia"),
            lambda: create_directory(populated_vault / ".notexia", "x"),
            lambda: move_entry(populated_vault / "folder", populated_vault / "folder" / "sub"),
            lambda: move_entry(populated_vault / "a.md", populated_vault / ".notexia"),
            lambda: move_entry(populated_vault / "missing.md", populated_vault),
            lambda: create_note(populated_vault / ".notexia"),
        ]

        for attempt in attempts:
            with pytest.raises(notexia.VaultError):
                attempt()

        assert snapshot(populated_vault) == before
