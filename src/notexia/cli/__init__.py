"""Command line interface for Notexia."""

from .notexia_vault import cli, main

__all__ = ["cli", "main"]
