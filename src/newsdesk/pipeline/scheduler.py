"""Bounded-concurrency fan-out of article enrichment."""

import asyncio
from typing import List, Optional, Sequence

from newsdesk.core.article import EnrichedArticle, RawArticle
from newsdesk.pipeline.enrichment.article_enricher import ArticleEnricher
from newsdesk.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONCURRENCY = 12


class FanOutScheduler:
    """Run the enricher over a batch with at most N articles in flight.

    A new article starts as soon as a running one finishes. Results are
    collated by input position, so ``results[i]`` always belongs to
    ``articles[i]`` whatever order the tasks complete in. One article
    failing never affects the others.
    """

    def __init__(self, enricher: ArticleEnricher, concurrency: int = DEFAULT_CONCURRENCY):
        """Initialize the scheduler.

        Args:
            enricher: Per-article worker.
            concurrency: Default maximum number of articles in flight.
        """
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.enricher = enricher
        self.concurrency = concurrency

    async def process(
        self,
        articles: Sequence[RawArticle],
        concurrency: Optional[int] = None,
    ) -> List[Optional[EnrichedArticle]]:
        """Enrich all articles.

        Args:
            articles: Raw articles, in dispatch order.
            concurrency: Maximum articles in flight (defaults to the
                scheduler's own setting).

        Returns:
            One slot per input article: the enriched article, or None if
            it was dropped.
        """
        limit = self.concurrency if concurrency is None else concurrency
        if limit < 1:
            raise ValueError("concurrency must be >= 1")

        logger.info("fan_out_starting", total=len(articles), concurrency=limit)

        semaphore = asyncio.Semaphore(limit)
        tasks = [
            self._run_one(index, article, semaphore)
            for index, article in enumerate(articles)
        ]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        results: List[Optional[EnrichedArticle]] = [None] * len(articles)
        for index, outcome in outcomes:
            results[index] = outcome

        succeeded = sum(1 for r in results if r is not None)
        logger.info(
            "fan_out_complete",
            total=len(articles),
            successful=succeeded,
            failed=len(articles) - succeeded,
        )
        return results

    async def _run_one(
        self, index: int, article: RawArticle, semaphore: asyncio.Semaphore
    ) -> tuple:
        async with semaphore:
            try:
                return index, await self.enricher.enrich(article, index=index)
            except Exception as e:
                logger.error(
                    "fan_out_task_failed",
                    index=index,
                    source=article.source,
                    error=str(e),
                )
                return index, None


def successes(results: Sequence[Optional[EnrichedArticle]]) -> List[EnrichedArticle]:
    """Keep the populated slots, in input order."""
    return [r for r in results if r is not None]
