"""CLI commands for Newsdesk."""

from newsdesk.cli.commands.run import run

__all__ = ["run"]
