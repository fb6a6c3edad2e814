"""Build the edition record for a run from the enrichment results."""

from datetime import datetime
from typing import Callable, Optional, Sequence

from newsdesk.core.article import EnrichedArticle
from newsdesk.core.edition import EditionRecord
from newsdesk.pipeline.scheduler import successes
from newsdesk.utils.date_utils import (
    format_local_date,
    format_local_time,
    now_local,
    time_slot_for,
)
from newsdesk.utils.logging import get_logger

logger = get_logger(__name__)


class EditionAssembler:
    """Stamp successful articles with the run's local date and time slot."""

    def __init__(self, clock: Callable[[], datetime] = now_local):
        """Initialize the assembler.

        Args:
            clock: Returns the current local time. Read once per edition.
        """
        self.clock = clock

    def assemble(self, results: Sequence[Optional[EnrichedArticle]]) -> EditionRecord:
        """Build an edition from per-article results.

        Dropped articles (None) are skipped; the rest keep input order.
        """
        moment = self.clock()
        articles = successes(results)

        edition = EditionRecord(
            local_date=format_local_date(moment),
            time_slot=time_slot_for(moment.time()),
            local_time=format_local_time(moment),
            articles=articles,
        )

        logger.info(
            "edition_assembled",
            local_date=edition.local_date,
            time_slot=edition.time_slot.value,
            articles=len(articles),
            dropped=len(results) - len(articles),
        )
        return edition
