"""Per-article enrichment: ask the model, parse, re-ask once on truncation."""

from dataclasses import dataclass
from typing import List, Optional

from newsdesk.core.article import EnrichedArticle, RawArticle
from newsdesk.core.enums import EnrichmentFailureReason
from newsdesk.integrations.backoff import AskClient
from newsdesk.pipeline.enrichment.response_parser import parse_enriched_article
from newsdesk.utils.exceptions import ResponseParseError, TruncatedResponseError
from newsdesk.utils.logging import get_logger
from newsdesk.utils.text_utils import truncate_for_log

logger = get_logger(__name__)

RESPONSE_PREVIEW_CHARS = 300


@dataclass(frozen=True)
class EnrichmentFailure:
    """Record of an article dropped during enrichment."""

    index: Optional[int]
    source: str
    reason: EnrichmentFailureReason
    error: str


class ArticleEnricher:
    """Turn a RawArticle into an EnrichedArticle.

    The client is expected to handle transient failures itself (normally a
    BackoffCaller). On top of that, a reply that was cut off mid-document is
    asked for once more; every other failure drops the article. ``enrich``
    never raises, failed articles come back as None and are recorded in
    ``failures``.
    """

    def __init__(self, client: AskClient):
        """Initialize the enricher.

        Args:
            client: Generation client, shared read-only by all tasks.
        """
        self.client = client
        self.failures: List[EnrichmentFailure] = []

    async def enrich(
        self, article: RawArticle, index: Optional[int] = None
    ) -> Optional[EnrichedArticle]:
        """Enrich one article.

        Args:
            article: Raw article to enrich.
            index: Position of the article in the batch (for logs).

        Returns:
            EnrichedArticle if successful, None if the article was dropped.
        """
        try:
            return await self._enrich(article, index)
        except Exception as e:
            logger.error(
                "article_enrichment_crashed",
                index=index,
                source=article.source,
                error=str(e),
                exc_info=True,
            )
            self._record(article, index, EnrichmentFailureReason.UNEXPECTED_ERROR, e)
            return None

    async def _enrich(
        self, article: RawArticle, index: Optional[int]
    ) -> Optional[EnrichedArticle]:
        logger.debug("enriching_article", index=index, source=article.source)

        response = await self._ask(article, index)
        if response is None:
            return None

        try:
            parsed = parse_enriched_article(response)
        except TruncatedResponseError as e:
            logger.warning(
                "response_truncated_reasking",
                index=index,
                source=article.source,
                error=str(e),
            )
            response = await self._ask(article, index)
            if response is None:
                return None
            try:
                parsed = parse_enriched_article(response)
            except ResponseParseError as second:
                self._drop_unparseable(article, index, second)
                return None
        except ResponseParseError as e:
            self._drop_unparseable(article, index, e)
            return None

        enriched = parsed.with_provenance(article).deduplicated()

        logger.info(
            "article_enriched",
            index=index,
            source=article.source,
            title=enriched.title[:80],
            category=enriched.category,
        )
        return enriched

    async def _ask(self, article: RawArticle, index: Optional[int]) -> Optional[str]:
        try:
            return await self.client.ask(article.content)
        except Exception as e:
            logger.error(
                "article_api_call_failed",
                index=index,
                source=article.source,
                error=str(e),
            )
            self._record(article, index, EnrichmentFailureReason.API_ERROR, e)
            return None

    def _drop_unparseable(
        self, article: RawArticle, index: Optional[int], error: ResponseParseError
    ) -> None:
        if isinstance(error, TruncatedResponseError):
            reason = EnrichmentFailureReason.TRUNCATED_RESPONSE
        else:
            reason = EnrichmentFailureReason.NON_CONFORMING_RESPONSE

        logger.warning(
            "article_response_unusable",
            index=index,
            source=article.source,
            reason=reason.value,
            error=str(error),
            response_preview=truncate_for_log(
                error.response_text, RESPONSE_PREVIEW_CHARS
            ),
        )
        self._record(article, index, reason, error)

    def _record(
        self,
        article: RawArticle,
        index: Optional[int],
        reason: EnrichmentFailureReason,
        error: Exception,
    ) -> None:
        self.failures.append(
            EnrichmentFailure(
                index=index,
                source=article.source,
                reason=reason,
                error=str(error),
            )
        )
