"""Vault commands: list, read, write, create, rename, move and delete entries.

Also shows and edits the Notexia configuration file.
"""

from __future__ import annotations

import sys

import click
import yaml

from .. import storage
from ..core.config import ConfigError, set_config_value
from ..core.vault_init import init_vault_config, read_vault_config
from .cli_common import CLIContext, ExitCode, cli_command, handle_cli_error, handle_cli_success

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

EPILOG = """
Examples:
  notexia init --first-name Ada --last-name Lovelace --label Work
  notexia ls                          # every note and folder in the vault
  notexia new                         # creates "Untitled N.md"
  notexia write "Untitled 1.md" --content "# Hello"
  notexia mkdir . projects
  notexia mv "Untitled 1.md" projects --name hello.md
  notexia rm -r projects
  notexia config set vault.path ~/notes
""".strip()

vault_path_option = click.option(
    "--vault-path",
    type=str,
    help="Vault directory (default: from configuration)",
)


@click.group(
    context_settings=CONTEXT_SETTINGS,
    help="Notexia - manage notes and folders in a vault",
    epilog=EPILOG,
)
def cli() -> None:
    """Root command."""


@cli.command("init")
@click.option("--first-name", required=True, help="Owner first name")
@click.option("--last-name", required=True, help="Owner last name")
@click.option("--label", type=str, help="Human-readable vault label")
@vault_path_option
@cli_command
def init_command(ctx: CLIContext, first_name: str, last_name: str, label: str | None, vault_path: str | None) -> int:
    """Create .notexia/vault.json (overwrites an existing one)."""
    try:
        root = ctx.resolve_vault_path(vault_path)
        config = init_vault_config(root, first_name, last_name, label)
        return handle_cli_success(ctx, config.to_dict())
    except Exception as exc:
        return handle_cli_error(ctx, exc, "init")


@cli.command("info")
@vault_path_option
@cli_command
def info_command(ctx: CLIContext, vault_path: str | None) -> int:
    """Show the vault config."""
    try:
        root = ctx.resolve_vault_path(vault_path)
        return handle_cli_success(ctx, read_vault_config(root).to_dict())
    except Exception as exc:
        return handle_cli_error(ctx, exc, "info")


@cli.command("ls")
@vault_path_option
@cli_command
def list_command(ctx: CLIContext, vault_path: str | None) -> int:
    """List all notes and folders."""
    try:
        root = ctx.resolve_vault_path(vault_path)
        entries = sorted(storage.list_entries(root), key=lambda e: e.rel_path)

        if ctx.json_output:
            return handle_cli_success(ctx, [entry.to_dict() for entry in entries], meta={"count": len(entries)})

        lines = [f"{entry.rel_path}/" if entry.is_dir else entry.rel_path for entry in entries]
        return handle_cli_success(ctx, lines)
    except Exception as exc:
        return handle_cli_error(ctx, exc, "ls")


@cli.command("new")
@vault_path_option
@cli_command
def new_command(ctx: CLIContext, vault_path: str | None) -> int:
    """Create an empty untitled note in the vault root."""
    try:
        root = ctx.resolve_vault_path(vault_path)
        return handle_cli_success(ctx, str(storage.create_note(root)))
    except Exception as exc:
        return handle_cli_error(ctx, exc, "new")


@cli.command("cat")
@click.argument("path")
@cli_command
def cat_command(ctx: CLIContext, path: str) -> int:
    """Print a note."""
    try:
        content = storage.read_note(path)
        if ctx.json_output:
            return handle_cli_success(ctx, content)
        click.echo(content, nl=False)
        return int(ExitCode.SUCCESS)
    except Exception as exc:
        return handle_cli_error(ctx, exc, "cat")


@cli.command("write")
@click.argument("path")
@click.option("--content", type=str, help="New content (default: read from stdin)")
@cli_command
def write_command(ctx: CLIContext, path: str, content: str | None) -> int:
    """Replace the content of a note, creating it if needed."""
    try:
        if content is None:
            content = sys.stdin.read()
        storage.write_note(path, content)
        return handle_cli_success(ctx, path)
    except Exception as exc:
        return handle_cli_error(ctx, exc, "write")


@cli.command("rm")
@click.argument("path")
@click.option("--recursive", "-r", is_flag=True, help="Delete folders with their contents")
@cli_command
def remove_command(ctx: CLIContext, path: str, recursive: bool) -> int:
    """Delete a note (or any entry with -r)."""
    try:
        if recursive:
            storage.delete_entry(path)
        else:
            storage.delete_note(path)
        return handle_cli_success(ctx, path)
    except Exception as exc:
        return handle_cli_error(ctx, exc, "rm")


@cli.command("rename")
@click.argument("path")
@click.argument("new_name")
@cli_command
def rename_command(ctx: CLIContext, path: str, new_name: str) -> int:
    """Rename an entry in place."""
    try:
        return handle_cli_success(ctx, str(storage.rename_note(path, new_name)))
    except Exception as exc:
        return handle_cli_error(ctx, exc, "rename")


@cli.command("mkdir")
@click.argument("parent")
@click.argument("name")
@cli_command
def mkdir_command(ctx: CLIContext, parent: str, name: str) -> int:
    """Create a folder NAME inside PARENT."""
    try:
        return handle_cli_success(ctx, str(storage.create_directory(parent, name)))
    except Exception as exc:
        return handle_cli_error(ctx, exc, "mkdir")


@cli.command("mv")
@click.argument("source")
@click.argument("target_dir")
@click.option("--name", "new_name", type=str, help="New name at the destination")
@cli_command
def move_command(ctx: CLIContext, source: str, target_dir: str, new_name: str | None) -> int:
    """Move SOURCE into TARGET_DIR."""
    try:
        return handle_cli_success(ctx, str(storage.move_entry(source, target_dir, new_name)))
    except Exception as exc:
        return handle_cli_error(ctx, exc, "mv")


@cli.group("config")
def config_group() -> None:
    """Show or change settings."""


@config_group.command("show")
@cli_command
def config_show_command(ctx: CLIContext) -> int:
    """Show the effective configuration (defaults, file and environment)."""
    return handle_cli_success(ctx, ctx.config.to_dict())


@config_group.command("set")
@click.argument("key")
@click.argument("value")
@click.option("--config-file", type=str, help="File to update (default: $NOTEXIA_CONFIG or notexia.yaml)")
@cli_command
def config_set_command(ctx: CLIContext, key: str, value: str, config_file: str | None) -> int:
    """Set KEY (dotted, e.g. logging.level) to VALUE in the config file.

    VALUE is parsed as YAML, so "null" clears a setting.
    """
    try:
        try:
            parsed = yaml.safe_load(value)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid value for {key}: {exc}") from exc

        path = set_config_value(key, parsed, config_file)
        return handle_cli_success(ctx, {"key": key, "value": parsed, "file": str(path)})
    except Exception as exc:
        return handle_cli_error(ctx, exc, "config set")


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    if args is None:
        args = sys.argv[1:]

    try:
        return cli.main(args=list(args), prog_name="notexia", standalone_mode=False) or 0
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except SystemExit as exc:
        return int(exc.code) if exc.code is not None else 0


if __name__ == "__main__":
    sys.exit(main())
