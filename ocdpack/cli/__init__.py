"""Command-line front end."""

from ocdpack.cli.app import app, main

__all__ = ["app", "main"]
