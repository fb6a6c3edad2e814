"""Article enrichment."""

from newsdesk.pipeline.enrichment.article_enricher import (
    ArticleEnricher,
    EnrichmentFailure,
)
from newsdesk.pipeline.enrichment.response_parser import (
    looks_truncated,
    parse_enriched_article,
    strip_code_fence,
)

__all__ = [
    "ArticleEnricher",
    "EnrichmentFailure",
    "looks_truncated",
    "parse_enriched_article",
    "strip_code_fence",
]
