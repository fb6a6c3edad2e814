"""Collectors for text-only news sites, using Beautiful Soup."""

from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from newsdesk.core.article import RawArticle
from newsdesk.pipeline.collectors.base import BaseCollector
from newsdesk.utils.logging import get_logger
from newsdesk.utils.text_utils import clean_whitespace, unique_by

logger = get_logger(__name__)


class TextSiteCollector(BaseCollector):
    """Collector for a site whose front page links to plain-text articles.

    Subclasses set the front page URL, the CSS selector of article links
    and the selectors of the article text blocks.
    """

    base_url: str = ""
    link_selector: str = "a[href]"
    content_selectors: List[str] = []

    async def index_articles(self) -> List[str]:
        html = await self._fetch_page(self.base_url)
        return self.extract_links(html)

    async def fetch_article(self, url: str) -> Optional[RawArticle]:
        html = await self._fetch_page(url)
        content = self.extract_content(html)
        if not content.strip():
            return None

        logger.debug("article_parsed", source=self.name, url=url, chars=len(content))
        return RawArticle(source=url, content=content)

    def extract_links(self, html: str) -> List[str]:
        """Resolve the article links on a front page, first occurrence kept."""
        soup = BeautifulSoup(html, "html.parser")
        urls = []
        for link in soup.select(self.link_selector):
            href = link.get("href")
            if not href:
                continue
            urls.append(urljoin(self.base_url, href))
        return unique_by(urls, lambda u: u)

    def extract_content(self, html: str) -> str:
        """Article text: each matching block on its own line, selectors in order."""
        soup = BeautifulSoup(html, "html.parser")
        lines = []
        for selector in self.content_selectors:
            for element in soup.select(selector):
                text = clean_whitespace(element.get_text(" "))
                if text:
                    lines.append(text)
        return "\n".join(lines)


class CNNLiteCollector(TextSiteCollector):
    """CNN Lite (lite.cnn.com), the text-only edition of CNN."""

    name = "cnn"
    base_url = "https://lite.cnn.com"
    link_selector = ".card--lite a[href]"
    content_selectors = [".headline--lite", ".article--lite"]


class NPRTextCollector(TextSiteCollector):
    """NPR Text (text.npr.org), the text-only edition of NPR."""

    name = "npr"
    base_url = "https://text.npr.org"
    link_selector = ".topic-title"
    content_selectors = [".story-title", ".paragraphs-container p"]
