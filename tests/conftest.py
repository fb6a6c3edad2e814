# tests/conftest.py
"""Shared test fixtures and configuration."""

import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pytest

from newsdesk.core.article import EnrichedArticle, RawArticle
from newsdesk.core.config import Config, PromptConfig
from newsdesk.core.edition import EditionRecord
from newsdesk.core.enums import TimeSlot


def article_payload(title: str = "Senate passes budget bill", **overrides: Any) -> Dict[str, Any]:
    """Model reply for one article, using the wire names."""
    payload = {
        "dateOfPublication": "2025-05-06",
        "timeOfPublication": "14:30:00",
        "title": title,
        "category": "Politics & Governance",
        "summaryOfNewsArticle": "The Senate approved the budget late on Tuesday.",
        "keyTakeAways": ["The bill passed 51-49", "Spending rises 3%"],
        "namedEntities": [
            {
                "name": "US Senate",
                "whatIsThisEntity": "Upper chamber of Congress",
                "whyIsThisEntityRelevantToTheArticle": "Passed the bill",
            }
        ],
        "importantDates": [
            {
                "dateMentionedInArticle": "2025-05-06",
                "descriptionOfWhyDateIsRelevant": "Day of the vote",
            }
        ],
        "importantTimeframes": [
            {
                "approximateTimeFrameStart": "2025-10-01",
                "approximateTimeFrameEnd": "2026-09-30",
                "descriptionOfWhyTimeFrameIsRelevant": "Fiscal year covered",
            }
        ],
        "tags": ["budget", "congress"],
    }
    payload.update(overrides)
    return payload


class ScriptedClient:
    """AskClient that plays back a script of replies and errors, in order.

    The last script entry repeats once the script is used up.
    """

    def __init__(self, script: List[Union[str, Exception]]):
        self.script = list(script)
        self.calls: List[str] = []

    async def ask(self, text: str) -> str:
        self.calls.append(text)
        step = self.script[min(len(self.calls), len(self.script)) - 1]
        if isinstance(step, Exception):
            raise step
        return step


class RoutingClient:
    """AskClient whose reply depends on the article text.

    ``routes`` maps article text to a ScriptedClient-style script.
    """

    def __init__(self, routes: Dict[str, List[Union[str, Exception]]], delay: float = 0.0):
        self.routes = {text: ScriptedClient(script) for text, script in routes.items()}
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0

    async def ask(self, text: str) -> str:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            return await self.routes[text].ask(text)
        finally:
            self.in_flight -= 1

    def calls_for(self, text: str) -> int:
        return len(self.routes[text].calls)


class FakeCollector:
    """Collector returning a fixed list of articles."""

    def __init__(self, articles: List[RawArticle], name: str = "fake", error: Optional[Exception] = None):
        self.articles = articles
        self.name = name
        self.error = error

    async def collect(self) -> List[RawArticle]:
        if self.error is not None:
            raise self.error
        return list(self.articles)


async def no_sleep(delay: float) -> None:
    """Sleep replacement that records nothing and returns at once."""
    return None


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Test configuration with temporary paths."""
    return Config(
        openai_api_key="test-key-12345",
        json_output_dir=tmp_path / "out" / "json",
        markdown_output_dir=tmp_path / "out" / "markdown",
        config_dir=tmp_path / "config",
        max_concurrency=4,
        max_retries=5,
    )


@pytest.fixture
def prompt_config() -> PromptConfig:
    """Prompt template for client tests."""
    return PromptConfig(
        system_prompt="You are a news analyst.",
        user_prompt_template="Article:\n{content}",
        output_schema={"type": "object"},
    )


@pytest.fixture
def raw_article() -> RawArticle:
    """Raw article as returned by a collector."""
    return RawArticle(
        source="https://lite.cnn.com/2025/05/06/politics/senate-budget",
        content="The Senate approved the budget late on Tuesday ...",
    )


@pytest.fixture
def enriched_article(raw_article: RawArticle) -> EnrichedArticle:
    """Enriched article with provenance."""
    return EnrichedArticle.model_validate(article_payload()).with_provenance(raw_article)


@pytest.fixture
def sample_edition(enriched_article: EnrichedArticle) -> EditionRecord:
    """Morning edition with two articles in two categories."""
    second = EnrichedArticle.model_validate(
        article_payload(title="Rain expected all week", category="Environment & Climate")
    ).model_copy(update={"source": "https://text.npr.org/nx-s1-1234"})
    return EditionRecord(
        local_date="2025-05-06",
        time_slot=TimeSlot.MORNING,
        local_time="07:15:00.000000",
        articles=[enriched_article, second],
    )


@pytest.fixture
def fixed_clock():
    """Clock factory returning a fixed local time."""

    def make(hour: int = 7, minute: int = 15):
        return lambda: datetime(2025, 5, 6, hour, minute, 0)

    return make


@pytest.fixture
def valid_reply() -> str:
    """Well-formed model reply."""
    return json.dumps(article_payload())


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")
    config.addinivalue_line("markers", "slow: Slow tests")
