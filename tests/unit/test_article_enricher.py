# tests/unit/test_article_enricher.py
"""Unit tests for ArticleEnricher."""

import json

import pytest

from conftest import ScriptedClient, article_payload
from newsdesk.core.enums import EnrichmentFailureReason
from newsdesk.pipeline.enrichment import ArticleEnricher
from newsdesk.utils.exceptions import AIServiceError


def truncated_reply() -> str:
    return json.dumps(article_payload())[:80]


@pytest.mark.unit
class TestArticleEnricher:
    """Tests for ArticleEnricher.enrich."""

    async def test_success_stamps_provenance(self, raw_article, valid_reply):
        """Should return the parsed article with source and content."""
        client = ScriptedClient([valid_reply])
        enricher = ArticleEnricher(client)

        result = await enricher.enrich(raw_article, index=0)

        assert result is not None
        assert result.source == raw_article.source
        assert result.content == raw_article.content
        assert result.source_tag == "cnn"
        assert client.calls == [raw_article.content]
        assert enricher.failures == []

    async def test_duplicates_removed(self, raw_article):
        """Should deduplicate entities, dates, timeframes and takeaways."""
        entity = {
            "name": "A",
            "whatIsThisEntity": "x",
            "whyIsThisEntityRelevantToTheArticle": "y",
        }
        other = dict(entity, name="B")
        reply = json.dumps(
            article_payload(
                namedEntities=[entity, other, dict(entity, whatIsThisEntity="z")],
                keyTakeAways=["one", "two", "one"],
            )
        )
        enricher = ArticleEnricher(ScriptedClient([reply]))

        result = await enricher.enrich(raw_article)

        assert [e.name for e in result.named_entities] == ["A", "B"]
        assert result.named_entities[0].what_it_is == "x"
        assert result.key_takeaways == ["one", "two"]

    async def test_truncated_then_valid_reasks_once(self, raw_article, valid_reply):
        """Should ask again after a truncated reply and use the second answer."""
        client = ScriptedClient([truncated_reply(), valid_reply])
        enricher = ArticleEnricher(client)

        result = await enricher.enrich(raw_article)

        assert result is not None
        assert len(client.calls) == 2
        assert enricher.failures == []

    async def test_truncated_twice_drops_article(self, raw_article):
        """Should give up after a single re-ask."""
        client = ScriptedClient([truncated_reply(), truncated_reply(), "unused"])
        enricher = ArticleEnricher(client)

        assert await enricher.enrich(raw_article) is None
        assert len(client.calls) == 2
        assert enricher.failures[0].reason is EnrichmentFailureReason.TRUNCATED_RESPONSE

    async def test_non_conforming_not_retried(self, raw_article, valid_reply):
        """Should drop a complete but invalid reply without asking again."""
        client = ScriptedClient(['{"title": "only a title"}', valid_reply])
        enricher = ArticleEnricher(client)

        assert await enricher.enrich(raw_article, index=3) is None
        assert len(client.calls) == 1
        failure = enricher.failures[0]
        assert failure.reason is EnrichmentFailureReason.NON_CONFORMING_RESPONSE
        assert failure.index == 3

    async def test_client_error_drops_article(self, raw_article):
        """Should drop the article when the client raises."""
        enricher = ArticleEnricher(ScriptedClient([AIServiceError("retries exhausted")]))

        assert await enricher.enrich(raw_article) is None
        assert enricher.failures[0].reason is EnrichmentFailureReason.API_ERROR
        assert "retries exhausted" in enricher.failures[0].error

    async def test_reask_error_drops_article(self, raw_article):
        """Should drop the article when the re-ask itself fails."""
        client = ScriptedClient([truncated_reply(), AIServiceError("down")])
        enricher = ArticleEnricher(client)

        assert await enricher.enrich(raw_article) is None
        assert enricher.failures[0].reason is EnrichmentFailureReason.API_ERROR
