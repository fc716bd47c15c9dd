"""Command line interface."""

from .core import cli, main

__all__ = ["cli", "main"]
