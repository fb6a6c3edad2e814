"""Command-line interface for Newsdesk."""

import click

from newsdesk.__version__ import __version__
from newsdesk.cli.commands import run


@click.group()
@click.version_option(version=__version__, prog_name="newsdesk")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Newsdesk - collect news, enrich it with an LLM, publish editions.

    Each run produces one edition for the current date and time slot
    (morning, afternoon or evening) as JSON and Markdown, and links it into
    the mdBook navigation documents.
    """
    ctx.ensure_object(dict)


# Register commands
cli.add_command(run)


def main() -> None:
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
