"""Text processing utilities."""

import re
from typing import Callable, Hashable, Iterable, List, Optional, TypeVar
from urllib.parse import urlparse

T = TypeVar("T")


def slugify_title(title: str) -> str:
    """Convert a title to a Markdown anchor slug.

    Lowercases the text, drops every character that is not alphanumeric,
    a space or a hyphen, then turns each space into a hyphen. Runs of
    spaces are kept as runs of hyphens so the result matches the heading
    ids mdBook generates.

    Args:
        title: Title to slugify

    Returns:
        Slug string
    """
    kept = "".join(
        c for c in title.lower() if c.isalnum() or c == " " or c == "-"
    )
    return kept.replace(" ", "-")


def source_tag_from_url(url: Optional[str]) -> Optional[str]:
    """Derive a short source tag from a URL.

    The tag is the host label right before the top-level domain, e.g.
    ``https://lite.cnn.com/2025/05/06/x`` -> ``cnn``.

    Args:
        url: Source URL

    Returns:
        Source tag, or None if the URL has no usable host
    """
    if not url:
        return None

    host = urlparse(url).hostname
    if not host:
        return None

    parts = host.split(".")
    if len(parts) < 2:
        return None
    return parts[-2]


def upcase(text: str) -> str:
    """Uppercase the first character, leaving the rest untouched."""
    return text[:1].upper() + text[1:]


def truncate_for_log(text: str, max_length: int) -> str:
    """Shorten a string for log output.

    Args:
        text: Text to shorten
        max_length: Number of characters to keep

    Returns:
        The text itself if short enough, otherwise its head followed by
        the number of dropped characters.
    """
    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}…(+{len(text) - max_length} chars)"


def clean_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces.

    Args:
        text: Text to clean

    Returns:
        Cleaned text
    """
    return re.sub(r"\s+", " ", text).strip()


def unique_by(items: Iterable[T], key: Callable[[T], Hashable]) -> List[T]:
    """Drop items whose key was already seen, keeping first occurrences in order."""
    seen = set()
    unique = []
    for item in items:
        marker = key(item)
        if marker in seen:
            continue
        seen.add(marker)
        unique.append(item)
    return unique
