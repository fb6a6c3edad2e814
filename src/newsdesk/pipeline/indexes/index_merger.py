"""Persist edition links into the outline documents."""

from pathlib import Path
from typing import Callable, Dict, Optional

from newsdesk.core.edition import EditionRecord
from newsdesk.pipeline.indexes.documents import (
    merge_daily_index,
    merge_date_toc,
    merge_summary,
)
from newsdesk.utils.fs_utils import read_text_if_exists
from newsdesk.utils.logging import get_logger

logger = get_logger(__name__)

SUMMARY_FILENAME = "SUMMARY.md"
DAILY_INDEX_FILENAME = "daily_news.md"


class IndexMerger:
    """Update SUMMARY.md, daily_news.md and the per-date TOC for an edition.

    Each update reads the document, merges the edition in and writes the
    file back only when the text changed. Re-running an edition is a no-op.
    """

    def __init__(self, markdown_output_dir: Path):
        """Initialize the merger.

        Args:
            markdown_output_dir: Directory holding the Markdown output.
        """
        self.markdown_output_dir = Path(markdown_output_dir)

    def update_date_toc(self, edition: EditionRecord) -> bool:
        """Merge the edition into ``{date}.md``. Returns True if written."""
        path = self.markdown_output_dir / f"{edition.local_date}.md"
        return self._update(
            path,
            lambda text: merge_date_toc(
                text,
                edition.local_date,
                edition.time_slot,
                edition.edition_filename,
                edition.articles,
            ),
        )

    def update_summary(self, edition: EditionRecord) -> bool:
        """Merge the edition into SUMMARY.md. Returns True if written."""
        path = self.markdown_output_dir / SUMMARY_FILENAME
        return self._update(
            path,
            lambda text: merge_summary(
                text, edition.local_date, edition.time_slot, edition.edition_filename
            ),
        )

    def update_daily_index(self, edition: EditionRecord) -> bool:
        """Merge the edition into daily_news.md. Returns True if written."""
        path = self.markdown_output_dir / DAILY_INDEX_FILENAME
        return self._update(
            path,
            lambda text: merge_daily_index(
                text, edition.local_date, edition.time_slot, edition.edition_filename
            ),
        )

    def update_all(self, edition: EditionRecord) -> Dict[str, bool]:
        """Update every outline document.

        A failure in one document is logged and does not stop the others.

        Returns:
            Document filename -> whether its update succeeded.
        """
        updates = {
            f"{edition.local_date}.md": self.update_date_toc,
            SUMMARY_FILENAME: self.update_summary,
            DAILY_INDEX_FILENAME: self.update_daily_index,
        }

        results: Dict[str, bool] = {}
        for name, update in updates.items():
            try:
                update(edition)
                results[name] = True
            except Exception as e:
                logger.error("index_update_failed", document=name, error=str(e))
                results[name] = False
        return results

    def _update(self, path: Path, merge: Callable[[Optional[str]], str]) -> bool:
        current = read_text_if_exists(path)
        merged = merge(current)

        if merged == current:
            logger.debug("index_entry_present", path=str(path))
            return False

        path.write_text(merged, encoding="utf-8")
        logger.info("index_entry_inserted", path=str(path))
        return True
