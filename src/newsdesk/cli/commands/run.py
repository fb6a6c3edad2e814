"""Run pipeline command."""

import asyncio
from pathlib import Path
from typing import Any, Dict, Optional

import click

from newsdesk.core.config import Config
from newsdesk.pipeline.orchestrator import PipelineOrchestrator
from newsdesk.utils.logging import setup_logging


@click.command()
@click.option(
    "--json-output-dir",
    "-j",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for edition JSON files",
)
@click.option(
    "--markdown-output-dir",
    "-m",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for edition Markdown and index files",
)
@click.option(
    "--sources",
    type=str,
    default=None,
    help="Comma-separated sources to collect (e.g. cnn,npr)",
)
@click.option(
    "--concurrency",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum articles enriched at the same time",
)
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding prompts/<name>.yaml",
)
def run(
    json_output_dir: Optional[Path],
    markdown_output_dir: Optional[Path],
    sources: Optional[str],
    concurrency: Optional[int],
    config_dir: Optional[Path],
) -> None:
    """Run the news enrichment pipeline.

    Examples:
        newsdesk run                              # Use settings from .env
        newsdesk run -j out/json -m out/markdown  # Choose output directories
        newsdesk run --sources cnn --concurrency 4
    """
    overrides: Dict[str, Any] = {}
    if json_output_dir is not None:
        overrides["json_output_dir"] = json_output_dir
    if markdown_output_dir is not None:
        overrides["markdown_output_dir"] = markdown_output_dir
    if sources is not None:
        overrides["sources"] = sources
    if concurrency is not None:
        overrides["max_concurrency"] = concurrency
    if config_dir is not None:
        overrides["config_dir"] = config_dir

    # Load configuration
    try:
        config = Config(**overrides)  # type: ignore
        config.validate_paths()
    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        click.echo("Please ensure .env file exists with required settings.", err=True)
        raise click.Abort()

    # Setup logging
    setup_logging(log_level=config.log_level, log_format=config.log_format, log_dir=config.log_dir)

    # Display configuration
    click.echo("Newsdesk Pipeline")
    click.echo("=" * 50)
    click.echo(f"Sources: {', '.join(config.source_list)}")
    click.echo(f"Model: {config.model}")
    click.echo(f"Concurrency: {config.max_concurrency}")
    click.echo(f"JSON output: {config.json_output_dir}")
    click.echo(f"Markdown output: {config.markdown_output_dir}")
    click.echo("=" * 50)

    try:
        orchestrator = PipelineOrchestrator(config=config)
        stats = asyncio.run(orchestrator.run())
        _display_pipeline_results(stats)
        click.echo("\nPipeline completed successfully!")

    except KeyboardInterrupt:
        click.echo("\nPipeline interrupted by user.", err=True)
        raise click.Abort()

    except Exception as e:
        click.echo(f"\nPipeline failed: {e}", err=True)
        raise click.Abort()


def _display_pipeline_results(stats: Dict[str, Any]) -> None:
    """Display pipeline results.

    Args:
        stats: Statistics from the pipeline run.
    """
    click.echo("\nPipeline Results:")
    click.echo("=" * 50)
    click.echo(f"  Edition:       {stats.get('local_date')} {stats.get('time_slot')}")
    click.echo(f"  Collected:     {stats.get('collected', 0):>6} articles")
    click.echo(f"  Enriched:      {stats.get('enriched', 0):>6} articles")
    click.echo(f"  Failed:        {stats.get('failed', 0):>6} articles")

    click.echo("\nOutputs:")
    click.echo(f"  JSON:          {'written' if stats.get('json_written') else 'FAILED'}")
    click.echo(f"  Markdown:      {'written' if stats.get('markdown_written') else 'FAILED'}")
    click.echo(f"  Indexes:       {stats.get('indexes_updated', 0)}/3 updated")
