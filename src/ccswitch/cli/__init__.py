"""Command line client for the cc-switch server."""

from ccswitch.cli.app import app

__all__ = ["app"]
