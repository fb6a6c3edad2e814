"""Edition domain models."""

from typing import Dict, Iterable, List

from pydantic import BaseModel, ConfigDict, Field

from newsdesk.core.article import EnrichedArticle
from newsdesk.core.enums import TimeSlot


def group_by_category(
    articles: Iterable[EnrichedArticle],
) -> Dict[str, List[EnrichedArticle]]:
    """Group articles by category, categories sorted by name.

    Articles keep their input order inside each category.
    """
    grouped: Dict[str, List[EnrichedArticle]] = {}
    for article in articles:
        grouped.setdefault(article.category, []).append(article)
    return {category: grouped[category] for category in sorted(grouped)}


class EditionRecord(BaseModel):
    """All articles enriched during one run, keyed by date and time slot."""

    local_date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    time_slot: TimeSlot = Field(..., alias="time_of_day")
    local_time: str
    articles: List[EnrichedArticle] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @property
    def edition_filename(self) -> str:
        """Markdown filename of this edition, e.g. 2025-05-06_morning.md."""
        return f"{self.local_date}_{self.time_slot.value}.md"

    def articles_by_category(self) -> Dict[str, List[EnrichedArticle]]:
        """Articles grouped by category, categories sorted by name."""
        return group_by_category(self.articles)
