"""Markdown output formatter."""

from pathlib import Path
from typing import List

from newsdesk.core.article import EnrichedArticle
from newsdesk.core.edition import EditionRecord
from newsdesk.utils.exceptions import OutputError
from newsdesk.utils.logging import get_logger
from newsdesk.utils.text_utils import upcase

logger = get_logger(__name__)


class MarkdownFormatter:
    """Format an edition as a Markdown page."""

    def format(self, edition: EditionRecord) -> str:
        """Format edition as Markdown.

        Articles are grouped under one ``##`` heading per category, sorted
        by category name. Each article heading is ``Title - `tag```, which
        gives it the ``title---tag`` anchor the date TOC links to.

        Args:
            edition: Edition to format.

        Returns:
            Markdown string.
        """
        logger.info(
            "formatting_markdown_edition",
            local_date=edition.local_date,
            time_slot=edition.time_slot.value,
        )

        lines = []
        lines.append(f"# {upcase(edition.time_slot.value)} Edition - {edition.local_date}")
        lines.append("")
        lines.append(f"**Articles**: {len(edition.articles)}  ")
        lines.append(f"**Generated**: {edition.local_date} {edition.local_time}  ")
        lines.append("")

        for category, articles in edition.articles_by_category().items():
            lines.append(f"## {category}")
            lines.append("")

            for article in articles:
                lines.extend(self._format_article(article))
                lines.append("")

        markdown_output = "\n".join(lines)

        logger.info("markdown_formatted", size=len(markdown_output))
        return markdown_output

    def _format_article(self, article: EnrichedArticle) -> List[str]:
        lines = []

        tag = article.source_tag
        heading = f"### {article.title}"
        if tag:
            heading += f" - `{tag}`"
        lines.append(heading)
        lines.append("")

        lines.append(
            f"*Published {article.publication_date} {article.publication_time}*  "
        )
        if article.source:
            lines.append(f"**Source**: [{article.source}]({article.source})  ")
        lines.append("")

        lines.append(article.summary)
        lines.append("")

        if article.key_takeaways:
            lines.append("**Key Takeaways**")
            lines.append("")
            for takeaway in article.key_takeaways:
                lines.append(f"- {takeaway}")
            lines.append("")

        if article.named_entities:
            lines.append("**Named Entities**")
            lines.append("")
            for entity in article.named_entities:
                lines.append(
                    f"- **{entity.name}**: {entity.what_it_is}. {entity.why_relevant}"
                )
            lines.append("")

        if article.important_dates:
            lines.append("**Important Dates**")
            lines.append("")
            for date in article.important_dates:
                lines.append(f"- **{date.mentioned_date}**: {date.why_relevant}")
            lines.append("")

        if article.important_timeframes:
            lines.append("**Important Timeframes**")
            lines.append("")
            for frame in article.important_timeframes:
                lines.append(
                    f"- **{frame.start} to {frame.end}**: {frame.why_relevant}"
                )
            lines.append("")

        if article.tags:
            lines.append("**Tags**: " + ", ".join(f"`{t}`" for t in article.tags))

        # Drop the trailing blank line, the caller separates articles
        while lines and lines[-1] == "":
            lines.pop()
        return lines


def write_edition_markdown(edition: EditionRecord, markdown_output_dir: Path) -> Path:
    """Write an edition to ``{markdown_output_dir}/{date}_{slot}.md``.

    Raises:
        OutputError: If the file cannot be written.
    """
    output_path = Path(markdown_output_dir) / edition.edition_filename

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            MarkdownFormatter().format(edition) + "\n", encoding="utf-8"
        )
    except OSError as e:
        logger.error("markdown_write_failed", path=str(output_path), error=str(e))
        raise OutputError(f"Failed to write {output_path}: {e}") from e

    logger.info("markdown_written", path=str(output_path))
    return output_path
