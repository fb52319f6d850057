"""authkit command-line interface."""

from authkit_cli.app import app, cli

__all__ = ["app", "cli"]
