"""Custom exceptions for newsdesk."""


class NewsdeskError(Exception):
    """Base exception for newsdesk."""


class ConfigurationError(NewsdeskError):
    """Configuration error."""


class PipelineError(NewsdeskError):
    """Pipeline execution error."""


class CollectorError(PipelineError):
    """Collector error."""


class EnrichmentError(PipelineError):
    """Article enrichment error."""


class ResponseParseError(EnrichmentError):
    """Model response could not be turned into an enriched article."""

    def __init__(self, message: str, response_text: str = ""):
        super().__init__(message)
        self.response_text = response_text


class TruncatedResponseError(ResponseParseError):
    """Model response ended before its JSON structure was closed."""


class NonConformingResponseError(ResponseParseError):
    """Model response is complete but not a valid enriched article."""


class OutputError(PipelineError):
    """Output sink error."""


class APIError(NewsdeskError):
    """External API error."""


class AIServiceError(APIError):
    """AI service error."""
