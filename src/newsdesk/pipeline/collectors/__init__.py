"""News collectors for the supported sources."""

from typing import Optional

import httpx

from newsdesk.pipeline.collectors.base import BaseCollector
from newsdesk.pipeline.collectors.text_sites import (
    CNNLiteCollector,
    NPRTextCollector,
    TextSiteCollector,
)
from newsdesk.utils.exceptions import CollectorError

__all__ = [
    "BaseCollector",
    "CNNLiteCollector",
    "NPRTextCollector",
    "TextSiteCollector",
    "create_collector",
]

COLLECTORS = {
    "cnn": CNNLiteCollector,
    "npr": NPRTextCollector,
}


def create_collector(
    name: str, timeout: float = 30.0, client: Optional[httpx.AsyncClient] = None
) -> BaseCollector:
    """Factory function to create the collector for a source name.

    Args:
        name: Source name ("cnn", "npr").
        timeout: HTTP request timeout in seconds.
        client: Optional shared HTTP client.

    Returns:
        Collector instance for the source.

    Raises:
        CollectorError: If the source is not supported.
    """
    collector_class = COLLECTORS.get(name.strip().lower())
    if collector_class is None:
        raise CollectorError(f"Unsupported source: {name}")

    return collector_class(timeout=timeout, client=client)
