"""Command-line interface for dirdigest."""

from dirdigest.cli.main import main

__all__ = ["main"]
