"""Command-line interface for svc."""

from svc.cli.app import app

__all__ = ["app"]
