"""Command-line interface for ad-hoc REST calls."""

from restclient.cli.main import cli


__all__ = ["cli"]
