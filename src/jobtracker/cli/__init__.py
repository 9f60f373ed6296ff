"""Command line interface."""

from jobtracker.cli.main import app, main

__all__ = ["app", "main"]
