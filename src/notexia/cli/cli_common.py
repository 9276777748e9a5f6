"""Common CLI utilities: JSON output, stable exit codes, logging setup."""

from __future__ import annotations

import functools
import json
import traceback
from enum import IntEnum
from pathlib import Path
from typing import Any

import click

from ..core.config import Config, ConfigError, load_config
from ..core.errors import ErrorKind, VaultError
from ..observability import configure_loguru, get_logger

logger = get_logger("cli")


class ExitCode(IntEnum):
    """Stable exit codes for CLI commands."""

    SUCCESS = 0
    INVALID_INPUT = 2
    CONFLICT = 3
    NOT_FOUND = 4
    IO_ERROR = 5
    CONFIG_ERROR = 6
    UNKNOWN_ERROR = 7


EXIT_CODES_BY_KIND = {
    ErrorKind.INVALID_NAME: ExitCode.INVALID_INPUT,
    ErrorKind.INVALID_TARGET: ExitCode.INVALID_INPUT,
    ErrorKind.RESERVED_NAME: ExitCode.INVALID_INPUT,
    ErrorKind.RESERVED_PATH: ExitCode.INVALID_INPUT,
    ErrorKind.INVALID_OPERATION: ExitCode.INVALID_INPUT,
    ErrorKind.INVALID_ARGUMENT: ExitCode.INVALID_INPUT,
    ErrorKind.UNKNOWN_COMMAND: ExitCode.INVALID_INPUT,
    ErrorKind.ALREADY_EXISTS: ExitCode.CONFLICT,
    ErrorKind.EXHAUSTED_NAMESPACE: ExitCode.CONFLICT,
    ErrorKind.NOT_FOUND: ExitCode.NOT_FOUND,
    ErrorKind.NOT_A_DIRECTORY: ExitCode.NOT_FOUND,
    ErrorKind.IO_ERROR: ExitCode.IO_ERROR,
    ErrorKind.SERIALIZATION_ERROR: ExitCode.IO_ERROR,
}


class CLIContext:
    """Per-invocation state: output mode and loaded configuration."""

    def __init__(self, json_output: bool = False, verbose: bool = False, config: Config | None = None) -> None:
        self.json_output = json_output
        self.verbose = verbose
        self._config = config

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = load_config()
        return self._config

    def resolve_vault_path(self, vault_path: str | None) -> Path:
        """Vault path from the option, else from configuration.

        Raises
        ------
        ConfigError
            If neither provides a vault path
        """
        if vault_path:
            return Path(vault_path)

        configured = self.config.vault_path
        if configured is None:
            raise ConfigError(
                "Vault path is not set. Pass --vault-path, set NOTEXIA_VAULT_PATH, "
                "or add vault.path to notexia.yaml"
            )
        return configured

    def output(self, data: Any, status: str = "success", error: str | None = None, meta: dict[str, Any] | None = None) -> None:
        """Print a result as JSON or as human-readable text."""
        if self.json_output:
            result: dict[str, Any] = {"status": status}

            if error:
                result["error"] = error
            else:
                result["data"] = data

            if meta:
                result["meta"] = meta

            click.echo(json.dumps(result, ensure_ascii=False, indent=2))
            return

        if status == "error":
            click.echo(f"Error: {error}", err=True)
        elif isinstance(data, dict):
            for key, value in data.items():
                click.echo(f"{key}: {value}")
        elif isinstance(data, list):
            for item in data:
                click.echo(item)
        elif data is not None:
            click.echo(data)


def cli_command(func):
    """Add --json and --verbose to a command and inject a CLIContext.

    Also configures loguru from the loaded configuration.
    """

    @click.option("--json", "json_output", is_flag=True, help="Output as JSON (machine-readable)")
    @click.option("--verbose", "-v", is_flag=True, help="Verbose output")
    @functools.wraps(func)
    def wrapper(json_output: bool, verbose: bool, *args: Any, **kwargs: Any) -> Any:
        ctx = CLIContext(json_output=json_output, verbose=verbose)

        try:
            config = ctx.config
        except ConfigError as exc:
            return handle_cli_error(ctx, exc, func.__name__)

        configure_loguru(
            log_dir=config.log_dir,
            level="DEBUG" if verbose else config.log_level,
            enable_console=verbose,
        )

        return func(ctx, *args, **kwargs)

    return wrapper


def exit_code_for(exc: Exception) -> ExitCode:
    if isinstance(exc, VaultError):
        return EXIT_CODES_BY_KIND.get(exc.kind, ExitCode.UNKNOWN_ERROR)
    if isinstance(exc, ConfigError):
        return ExitCode.CONFIG_ERROR
    if isinstance(exc, OSError):
        return ExitCode.IO_ERROR
    return ExitCode.UNKNOWN_ERROR


def handle_cli_error(ctx: CLIContext, exc: Exception, cmd: str) -> int:
    """Report an error and return the matching exit code."""
    exit_code = exit_code_for(exc)
    meta: dict[str, Any] = {"exit_code": int(exit_code)}

    if isinstance(exc, VaultError):
        meta["kind"] = exc.kind.value
        logger.debug("Command failed", command=cmd, kind=exc.kind.value, reason=exc.message)
    else:
        logger.error("Command failed", command=cmd, error=str(exc), error_type=type(exc).__name__)

    ctx.output(None, status="error", error=str(exc), meta=meta)

    if ctx.verbose and not ctx.json_output and exit_code == ExitCode.UNKNOWN_ERROR:
        click.echo("\nTraceback:", err=True)
        traceback.print_exc()

    return int(exit_code)


def handle_cli_success(ctx: CLIContext, data: Any, meta: dict[str, Any] | None = None) -> int:
    ctx.output(data, status="success", meta=meta)
    return int(ExitCode.SUCCESS)
