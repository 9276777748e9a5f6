"""Integration tests for CLI exit codes and output modes.

Tests verify that:
- Stable exit codes (0,2,3,4,5,6) are returned per failure kind
- --json prints a single machine-readable envelope
- The vault path falls back to configuration
"""

import json
from pathlib import Path

import pytest

from notexia.cli.cli_common import ExitCode
from notexia.cli.notexia_vault import main as vault_cli_main


def _json_out(capsys) -> dict:
    return json.loads(capsys.readouterr().out.strip())


class TestExitCodes:
    """Test stable exit codes."""

    def test_success_exit_code(self, vault: Path, capsys):
        """Successful command returns exit code 0."""
        exit_code = vault_cli_main(["new", "--vault-path", str(vault), "--json"])

        result = _json_out(capsys)
        assert exit_code == ExitCode.SUCCESS
        assert result["status"] == "success"
        assert result["data"] == str(vault / "Untitled 1.md")

    @pytest.mark.parametrize(
        ("args", "kind"),
        [
            (["mkdir", "{vault}", ".hidden"], "InvalidName"),
            (["mkdir", "{vault}", ".notexia"], "ReservedName"),
            (["rename", "{vault}/a.md", "x/y.md"], "InvalidName"),
            (["mv", "{vault}/folder", "{vault}/folder/sub"], "InvalidOperation"),
            (["mkdir", "{vault}/.notexia", "x"], "ReservedPath"),
        ],
    )
    def test_validation_error_exit_code(self, populated_vault: Path, capsys, args, kind):
        """Rejected input returns exit code 2."""
        argv = [arg.format(vault=populated_vault) for arg in args] + ["--json"]

        exit_code = vault_cli_main(argv)

        result = _json_out(capsys)
        assert exit_code == ExitCode.INVALID_INPUT
        assert result["status"] == "error"
        assert result["meta"] == {"exit_code": 2, "kind": kind}

    def test_conflict_exit_code(self, populated_vault: Path, capsys):
        """Occupied target returns exit code 3."""
        exit_code = vault_cli_main(["mkdir", str(populated_vault), "folder", "--json"])

        assert exit_code == ExitCode.CONFLICT
        assert _json_out(capsys)["meta"]["kind"] == "AlreadyExists"

    def test_not_found_exit_code(self, vault: Path, capsys):
        """Missing source returns exit code 4."""
        exit_code = vault_cli_main(["rm", str(vault / "missing.md"), "--json"])

        assert exit_code == ExitCode.NOT_FOUND
        assert _json_out(capsys)["meta"]["kind"] == "NotFound"

    def test_not_a_directory_exit_code(self, tmp_path: Path, capsys):
        exit_code = vault_cli_main(["ls", "--vault-path", str(tmp_path / "nope"), "--json"])

        assert exit_code == ExitCode.NOT_FOUND
        assert _json_out(capsys)["meta"]["kind"] == "NotADirectory"

    def test_io_error_exit_code(self, vault: Path, capsys):
        """Unreadable note returns exit code 5."""
        exit_code = vault_cli_main(["cat", str(vault / "missing.md"), "--json"])

        result = _json_out(capsys)
        assert exit_code == ExitCode.IO_ERROR
        assert result["meta"]["kind"] == "IoError"
        assert "missing.md" in result["error"]

    def test_config_error_without_vault_path(self, capsys):
        """No --vault-path and nothing configured returns exit code 6."""
        exit_code = vault_cli_main(["ls", "--json"])

        result = _json_out(capsys)
        assert exit_code == ExitCode.CONFIG_ERROR
        assert "Vault path is not set" in result["error"]

    def test_malformed_config_file(self, capsys):
        Path("notexia.yaml").write_text("- not\n- a mapping\n")

        exit_code = vault_cli_main(["ls", "--json"])

        assert exit_code == ExitCode.CONFIG_ERROR
        assert _json_out(capsys)["meta"] == {"exit_code": 6}

    def test_usage_error(self, capsys):
        """Missing click arguments use click's own exit code."""
        exit_code = vault_cli_main(["mkdir"])

        assert exit_code == 2
        assert "Missing argument" in capsys.readouterr().err

    def test_help(self, capsys):
        assert vault_cli_main(["--help"]) == 0
        assert "Notexia" in capsys.readouterr().out


class TestOutputModes:
    """Test human-readable and JSON output."""

    def test_ls_human_output(self, populated_vault: Path, capsys):
        exit_code = vault_cli_main(["ls", "--vault-path", str(populated_vault)])

        lines = capsys.readouterr().out.splitlines()
        assert exit_code == ExitCode.SUCCESS
        assert lines == ["a.md", "folder/", "folder/b.md", "folder/sub/", "folder/sub/c.md"]

    def test_ls_json_output(self, populated_vault: Path, capsys):
        vault_cli_main(["ls", "--vault-path", str(populated_vault), "--json"])

        result = _json_out(capsys)
        assert result["meta"] == {"count": 5}
        assert [item["rel_path"] for item in result["data"]][0] == "a.md"

    def test_vault_path_from_environment(self, populated_vault: Path, capsys, monkeypatch):
        monkeypatch.setenv("NOTEXIA_VAULT_PATH", str(populated_vault))

        exit_code = vault_cli_main(["ls", "--json"])

        assert exit_code == ExitCode.SUCCESS
        assert _json_out(capsys)["meta"]["count"] == 5

    def test_human_error_goes_to_stderr(self, vault: Path, capsys):
        exit_code = vault_cli_main(["rm", str(vault / "missing.md")])

        captured = capsys.readouterr()
        assert exit_code == ExitCode.NOT_FOUND
        assert captured.out == ""
        assert captured.err.startswith("Error: Note not found")

    def test_write_and_cat(self, vault: Path, capsys):
        note = str(vault / "note.md")

        assert vault_cli_main(["write", note, "--content", "# Hello\n"]) == ExitCode.SUCCESS
        capsys.readouterr()

        assert vault_cli_main(["cat", note]) == ExitCode.SUCCESS
        assert capsys.readouterr().out == "# Hello\n"

    def test_init_and_info(self, vault: Path, capsys):
        exit_code = vault_cli_main(
            ["init", "--vault-path", str(vault), "--first-name", "Ada", "--last-name", "Lovelace", "--json"]
        )
        written = _json_out(capsys)["data"]
        assert exit_code == ExitCode.SUCCESS

        assert vault_cli_main(["info", "--vault-path", str(vault), "--json"]) == ExitCode.SUCCESS
        assert _json_out(capsys)["data"] == written

    def test_info_without_config(self, vault: Path, capsys):
        exit_code = vault_cli_main(["info", "--vault-path", str(vault), "--json"])

        assert exit_code == ExitCode.IO_ERROR

    def test_mv_with_new_name(self, populated_vault: Path, capsys):
        exit_code = vault_cli_main(
            ["mv", str(populated_vault / "a.md"), str(populated_vault / "folder"), "--name", "z.md", "--json"]
        )

        assert exit_code == ExitCode.SUCCESS
        assert _json_out(capsys)["data"] == str(populated_vault / "folder" / "z.md")

    def test_rm_recursive(self, populated_vault: Path):
        assert vault_cli_main(["rm", "-r", str(populated_vault / "folder")]) == ExitCode.SUCCESS
        assert not (populated_vault / "folder").exists()

    def test_rm_blank_path(self, capsys):
        (Path.cwd() / "keep.md").write_text("x")

        assert vault_cli_main(["rm", "-r", "", "--json"]) == ExitCode.IO_ERROR
        assert vault_cli_main(["rm", "", "--json"]) == ExitCode.NOT_FOUND
        assert (Path.cwd() / "keep.md").exists()

    def test_rm_directory_without_recursive(self, populated_vault: Path):
        assert vault_cli_main(["rm", str(populated_vault / "folder")]) == ExitCode.IO_ERROR
        assert (populated_vault / "folder").exists()

    def test_log_files_written_when_configured(self, vault: Path, tmp_path: Path, monkeypatch):
        log_dir = tmp_path / "logs"
        monkeypatch.setenv("NOTEXIA_LOG_DIR", str(log_dir))

        assert vault_cli_main(["new", "--vault-path", str(vault)]) == ExitCode.SUCCESS

        assert (log_dir / "notexia.jsonl").exists()
        assert (log_dir / "vault.jsonl").exists()


class TestConfigCommands:
    """Test config show/set."""

    def test_set_then_show(self, vault: Path, capsys):
        exit_code = vault_cli_main(["config", "set", "vault.path", str(vault), "--json"])

        result = _json_out(capsys)
        assert exit_code == ExitCode.SUCCESS
        assert result["data"] == {"key": "vault.path", "value": str(vault), "file": "notexia.yaml"}

        assert vault_cli_main(["config", "show", "--json"]) == ExitCode.SUCCESS
        assert _json_out(capsys)["data"]["vault"]["path"] == str(vault)

    def test_configured_vault_path_is_used(self, populated_vault: Path, capsys):
        vault_cli_main(["config", "set", "vault.path", str(populated_vault)])
        capsys.readouterr()

        assert vault_cli_main(["ls", "--json"]) == ExitCode.SUCCESS
        assert _json_out(capsys)["meta"]["count"] == 5

    def test_value_is_parsed_as_yaml(self, capsys):
        vault_cli_main(["config", "set", "logging.dir", "null", "--json"])

        assert _json_out(capsys)["data"]["value"] is None

    def test_invalid_yaml_value(self, capsys):
        exit_code = vault_cli_main(["config", "set", "vault.path", "[unclosed", "--json"])

        assert exit_code == ExitCode.CONFIG_ERROR
        assert not Path("notexia.yaml").exists()
