"""Core domain models and configurations."""

from newsdesk.core.article import (
    EnrichedArticle,
    ImportantDate,
    ImportantTimeframe,
    NamedEntity,
    RawArticle,
)
from newsdesk.core.config import Config, PromptConfig
from newsdesk.core.edition import EditionRecord
from newsdesk.core.enums import EnrichmentFailureReason, TimeSlot

__all__ = [
    # Article models
    "RawArticle",
    "EnrichedArticle",
    "NamedEntity",
    "ImportantDate",
    "ImportantTimeframe",
    # Edition models
    "EditionRecord",
    # Configuration models
    "Config",
    "PromptConfig",
    # Enums
    "TimeSlot",
    "EnrichmentFailureReason",
]
