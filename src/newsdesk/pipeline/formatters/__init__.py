"""Output formatters."""

from newsdesk.pipeline.formatters.json_formatter import JSONFormatter, write_edition_json
from newsdesk.pipeline.formatters.markdown_formatter import (
    MarkdownFormatter,
    write_edition_markdown,
)

__all__ = [
    "JSONFormatter",
    "MarkdownFormatter",
    "write_edition_json",
    "write_edition_markdown",
]
