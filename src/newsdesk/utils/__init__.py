"""Utility modules for newsdesk."""

from newsdesk.utils.exceptions import (
    AIServiceError,
    APIError,
    CollectorError,
    ConfigurationError,
    EnrichmentError,
    NewsdeskError,
    NonConformingResponseError,
    OutputError,
    PipelineError,
    ResponseParseError,
    TruncatedResponseError,
)
from newsdesk.utils.logging import get_logger, setup_logging
from newsdesk.utils.text_utils import (
    clean_whitespace,
    slugify_title,
    source_tag_from_url,
    truncate_for_log,
    unique_by,
    upcase,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    # Exceptions
    "NewsdeskError",
    "ConfigurationError",
    "PipelineError",
    "CollectorError",
    "EnrichmentError",
    "ResponseParseError",
    "TruncatedResponseError",
    "NonConformingResponseError",
    "OutputError",
    "APIError",
    "AIServiceError",
    # Text utils
    "slugify_title",
    "source_tag_from_url",
    "upcase",
    "truncate_for_log",
    "clean_whitespace",
    "unique_by",
]
