"""Turn raw model replies into EnrichedArticle objects.

A reply can fail in two distinguishable ways. It can be *truncated*: the
token stream stopped before the JSON document was closed, usually because
the model hit its output limit. Asking again has a fair chance of
succeeding. Or it can be *non-conforming*: a complete document that is not
valid JSON or does not match the article schema. Asking again would most
likely produce the same thing.
"""

import json
import re
from typing import Any

from pydantic import ValidationError

from newsdesk.core.article import EnrichedArticle
from newsdesk.utils.exceptions import (
    NonConformingResponseError,
    TruncatedResponseError,
)

_FENCE_OPEN = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")

_CLOSERS = {"}": "{", "]": "["}


def strip_code_fence(text: str) -> str:
    """Remove a Markdown code fence wrapped around the payload, if any.

    An opening fence without a closing one is removed as well, since a
    truncated reply never gets to write the closing fence.
    """
    stripped = text.strip()
    if not stripped.startswith("```"):
        return stripped
    stripped = _FENCE_OPEN.sub("", stripped, count=1)
    stripped = _FENCE_CLOSE.sub("", stripped, count=1)
    return stripped.strip()


def looks_truncated(payload: str) -> bool:
    """Check whether a JSON payload ends before its structure is closed.

    Scans the text keeping track of string literals and of the stack of
    open brackets. The payload is truncated when the scan ends inside a
    string or with brackets still open. A closing bracket that does not
    match the innermost open one means the document is malformed rather
    than cut short. A blank payload counts as truncated: the reply ended
    before any document began.

    Args:
        payload: Response text with any code fence already removed.

    Returns:
        True if the payload looks cut off.
    """
    text = payload.strip()
    if not text:
        return True

    stack = []
    in_string = False
    escaped = False

    for char in text:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char in "{[":
            stack.append(char)
        elif char in _CLOSERS:
            if not stack or stack[-1] != _CLOSERS[char]:
                return False
            stack.pop()

    return in_string or bool(stack)


def parse_enriched_article(text: str) -> EnrichedArticle:
    """Parse a model reply into an EnrichedArticle.

    Args:
        text: Raw response text.

    Returns:
        Parsed article (without source/content provenance).

    Raises:
        TruncatedResponseError: If the reply was cut off mid-document.
        NonConformingResponseError: If the reply is complete but unusable.
    """
    payload = strip_code_fence(text)

    try:
        data: Any = json.loads(payload)
    except json.JSONDecodeError as e:
        if looks_truncated(payload):
            raise TruncatedResponseError(
                f"Response ended before the JSON document was closed: {e}",
                response_text=text,
            ) from e
        raise NonConformingResponseError(
            f"Response is not valid JSON: {e}", response_text=text
        ) from e

    # Some models wrap the object in a one-element list
    if isinstance(data, list) and len(data) == 1:
        data = data[0]

    if not isinstance(data, dict):
        raise NonConformingResponseError(
            f"Expected a JSON object, got {type(data).__name__}",
            response_text=text,
        )

    try:
        return EnrichedArticle.model_validate(data)
    except ValidationError as e:
        raise NonConformingResponseError(
            f"Response does not match the article schema: {e.error_count()} error(s)",
            response_text=text,
        ) from e
