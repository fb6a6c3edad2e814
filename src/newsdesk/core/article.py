"""Article domain models."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from newsdesk.utils.text_utils import source_tag_from_url, unique_by


class RawArticle(BaseModel):
    """Article text as fetched from a news source, before enrichment."""

    source: str = Field(..., min_length=1)
    content: str

    model_config = ConfigDict(frozen=True)


class NamedEntity(BaseModel):
    """Person, organization or place mentioned in an article."""

    name: str
    what_it_is: str = Field(..., alias="whatIsThisEntity")
    why_relevant: str = Field(..., alias="whyIsThisEntityRelevantToTheArticle")

    model_config = ConfigDict(populate_by_name=True)


class ImportantDate(BaseModel):
    """Significant date mentioned in an article."""

    mentioned_date: str = Field(..., alias="dateMentionedInArticle")
    why_relevant: str = Field(..., alias="descriptionOfWhyDateIsRelevant")

    model_config = ConfigDict(populate_by_name=True)


class ImportantTimeframe(BaseModel):
    """Significant period mentioned in an article."""

    start: str = Field(..., alias="approximateTimeFrameStart")
    end: str = Field(..., alias="approximateTimeFrameEnd")
    why_relevant: str = Field(..., alias="descriptionOfWhyTimeFrameIsRelevant")

    model_config = ConfigDict(populate_by_name=True)


class EnrichedArticle(BaseModel):
    """Article with model-extracted summary, entities, dates and tags.

    Attribute names are snake_case; the aliases are the camelCase keys the
    generation prompt asks for and the keys written to the JSON output.
    ``source`` and ``content`` are not produced by the model, they are
    stamped from the raw article after a successful parse.
    """

    source: Optional[str] = None
    publication_date: str = Field(..., alias="dateOfPublication")
    publication_time: str = Field(..., alias="timeOfPublication")
    title: str
    category: str
    summary: str = Field(..., alias="summaryOfNewsArticle")
    key_takeaways: List[str] = Field(default_factory=list, alias="keyTakeAways")
    named_entities: List[NamedEntity] = Field(
        default_factory=list, alias="namedEntities"
    )
    important_dates: List[ImportantDate] = Field(
        default_factory=list, alias="importantDates"
    )
    important_timeframes: List[ImportantTimeframe] = Field(
        default_factory=list, alias="importantTimeframes"
    )
    tags: List[str] = Field(default_factory=list)
    content: Optional[str] = None

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "dateOfPublication": "2025-05-06",
                "timeOfPublication": "14:30:00",
                "title": "Senate passes budget bill",
                "category": "Politics & Governance",
                "summaryOfNewsArticle": "The Senate approved ...",
                "keyTakeAways": ["The bill passed 51-49"],
                "namedEntities": [
                    {
                        "name": "US Senate",
                        "whatIsThisEntity": "Upper chamber of Congress",
                        "whyIsThisEntityRelevantToTheArticle": "Passed the bill",
                    }
                ],
                "importantDates": [],
                "importantTimeframes": [],
                "tags": ["budget", "congress"],
            }
        },
    )

    @property
    def source_tag(self) -> Optional[str]:
        """Short source name derived from the source URL (e.g. "cnn")."""
        return source_tag_from_url(self.source)

    def deduplicated(self) -> "EnrichedArticle":
        """Return a copy with repeated sub-entries removed.

        Each collection is deduplicated on its own key, keeping the first
        occurrence: takeaways by value, entities by name, dates and
        timeframes by their relevance description.
        """
        return self.model_copy(
            update={
                "key_takeaways": unique_by(self.key_takeaways, lambda t: t),
                "named_entities": unique_by(self.named_entities, lambda e: e.name),
                "important_dates": unique_by(
                    self.important_dates, lambda d: d.why_relevant
                ),
                "important_timeframes": unique_by(
                    self.important_timeframes, lambda f: f.why_relevant
                ),
            }
        )

    def with_provenance(self, raw: RawArticle) -> "EnrichedArticle":
        """Return a copy carrying the raw article's source and content."""
        return self.model_copy(update={"source": raw.source, "content": raw.content})
