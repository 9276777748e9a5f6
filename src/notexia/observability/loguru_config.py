"""Loguru configuration for Notexia.

Provides:
- Console sink with colored output
- Optional structured JSONL sinks with rotation and retention
- Component-bound loggers
- Timing context for filesystem operations
"""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = [
    "COMPONENTS",
    "configure_loguru",
    "get_logger",
    "timing_context",
]

COMPONENTS = ("vault", "cli", "commands")


def configure_loguru(
    *,
    log_dir: Path | None = None,
    level: str = "INFO",
    rotation: str = "10 MB",
    retention: str = "10 days",
    compression: str = "zip",
    enable_console: bool = True,
) -> None:
    """Configure loguru sinks.

    Parameters
    ----------
    log_dir
        Directory for JSONL log files (no file sinks if None)
    level
        Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    rotation
        Log rotation policy (e.g., "10 MB", "1 day")
    retention
        Log retention policy (e.g., "10 days", "1 week")
    compression
        Compression for rotated logs (zip, gz, bz2, xz)
    enable_console
        Enable stderr output

    Example
    -------
    >>> configure_loguru(log_dir=Path("logs"), level="DEBUG")
    """
    logger.remove()
    logger.configure(extra={"component": "notexia"})

    if enable_console:
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[component]}</cyan> | "
            "<level>{message}</level>",
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=False,
        )

    if log_dir is None:
        return

    log_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_dir / "notexia.jsonl",
        format="{message}",
        level=level,
        rotation=rotation,
        retention=retention,
        compression=compression,
        serialize=True,
        backtrace=True,
        diagnose=False,
    )

    for component in COMPONENTS:
        logger.add(
            log_dir / f"{component}.jsonl",
            format="{message}",
            level=level,
            rotation=rotation,
            retention=retention,
            compression=compression,
            serialize=True,
            filter=lambda record, comp=component: record["extra"].get("component") == comp,
        )

    logger.bind(component="notexia").debug("Loguru configured", log_dir=str(log_dir), level=level)


def get_logger(component: str = "notexia") -> Any:
    """Get logger bound to a component.

    Parameters
    ----------
    component
        Component name (vault, cli, commands)

    Returns
    -------
    Logger
        Loguru logger bound to component
    """
    return logger.bind(component=component)


@contextmanager
def timing_context(
    operation: str,
    *,
    component: str = "notexia",
    **metadata: Any,
) -> Generator[dict[str, Any], None, None]:
    """Time an operation and log its duration at DEBUG level.

    Yields
    ------
    dict
        Context dictionary; keys added to it are logged with the duration

    Example
    -------
    >>> with timing_context("list_entries", component="vault") as ctx:
    ...     ctx["count"] = 3
    """
    start_ns = time.perf_counter_ns()
    context: dict[str, Any] = dict(metadata)

    try:
        yield context
    finally:
        duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
        logger.bind(component=component, timing=True, operation=operation).debug(
            f"{operation} took {duration_ms:.2f} ms",
            duration_ms=duration_ms,
            **context,
        )
