"""Base collector interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

import httpx

from newsdesk.core.article import RawArticle
from newsdesk.utils.exceptions import CollectorError
from newsdesk.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
}


class BaseCollector(ABC):
    """Abstract base class for news collectors.

    Collection runs in two phases: index the source's front page for
    article URLs, then fetch each article. A failing article is logged and
    skipped; a failing index raises CollectorError.
    """

    name: str = "base"

    def __init__(self, timeout: float = 30.0, client: Optional[httpx.AsyncClient] = None):
        """Initialize collector.

        Args:
            timeout: HTTP request timeout in seconds.
            client: HTTP client to use. When omitted a client is opened for
                the duration of ``collect``.
        """
        self.timeout = timeout
        self._client = client

    @abstractmethod
    async def index_articles(self) -> List[str]:
        """Return the absolute URLs of the articles on the source's front page.

        Raises:
            CollectorError: If the front page cannot be fetched.
        """

    @abstractmethod
    async def fetch_article(self, url: str) -> Optional[RawArticle]:
        """Fetch one article, or None if the page has no usable text."""

    async def collect(self) -> List[RawArticle]:
        """Collect all articles from the source.

        Returns:
            Fetched articles, in index order.

        Raises:
            CollectorError: If indexing fails.
        """
        logger.info("collecting_source", source=self.name)

        if self._client is not None:
            return await self._collect()

        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers=DEFAULT_HEADERS,
        ) as client:
            self._client = client
            try:
                return await self._collect()
            finally:
                self._client = None

    async def _collect(self) -> List[RawArticle]:
        urls = await self.index_articles()
        logger.info("source_indexed", source=self.name, urls=len(urls))

        articles = []
        for url in urls:
            try:
                article = await self.fetch_article(url)
            except Exception as e:
                logger.warning(
                    "article_fetch_failed", source=self.name, url=url, error=str(e)
                )
                continue

            if article is None:
                logger.warning("article_fetch_empty", source=self.name, url=url)
                continue
            articles.append(article)

        logger.info(
            "source_collection_complete",
            source=self.name,
            articles_collected=len(articles),
        )
        return articles

    async def _fetch_page(self, url: str) -> str:
        """Fetch a page's HTML.

        Raises:
            CollectorError: If the HTTP request fails.
        """
        if self._client is None:
            raise CollectorError(f"{self.name}: no HTTP client open for {url}")

        try:
            response = await self._client.get(url)
            response.raise_for_status()
            return response.text
        except httpx.HTTPError as e:
            raise CollectorError(f"HTTP request failed for {url}: {e}") from e
