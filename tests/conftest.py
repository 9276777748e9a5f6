"""Shared fixtures for Notexia tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

import notexia.core.config as config_module


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run every test from an empty cwd without NOTEXIA_* variables."""
    for var in [k for k in os.environ if k.startswith("NOTEXIA_")]:
        monkeypatch.delenv(var)

    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    config_module.reset_config()
    yield
    config_module.reset_config()


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    """Empty vault directory."""
    path = tmp_path / "vault"
    path.mkdir()
    return path


@pytest.fixture
def populated_vault(vault: Path) -> Path:
    """Vault with notes, a nested folder, metadata and hidden entries.

    Layout::

        a.md
        folder/
            b.md
            .draft.md
            sub/
                c.md
        .notexia/vault.json
        .obsidian/workspace.json
    """
    (vault / "a.md").write_text("# A\n", encoding="utf-8")
    (vault / "folder" / "sub").mkdir(parents=True)
    (vault / "folder" / "b.md").write_text("# B\n", encoding="utf-8")
    (vault / "folder" / ".draft.md").write_text("draft", encoding="utf-8")
    (vault / "folder" / "sub" / "c.md").write_text("# C\n", encoding="utf-8")
    (vault / ".notexia").mkdir()
    (vault / ".notexia" / "vault.json").write_text("{}", encoding="utf-8")
    (vault / ".obsidian").mkdir()
    (vault / ".obsidian" / "workspace.json").write_text("{}", encoding="utf-8")
    return vault


def _snapshot(root: Path) -> set[str]:
    return {str(p.relative_to(root)) for p in root.rglob("*")}


@pytest.fixture
def snapshot():
    """Relative paths of everything under a root, hidden entries included."""
    return _snapshot
