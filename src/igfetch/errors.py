"""Extraction error taxonomy."""

from __future__ import annotations


class ExtractionError(RuntimeError):
    """Base extraction error for Instagram media lookups."""


class InvalidInputError(ExtractionError, ValueError):
    """Raised when the input is not a supported Instagram post URL."""


class UpstreamUnavailableError(ExtractionError):
    """Raised when an upstream request fails or returns a non-success status."""


class UpstreamTimeoutError(UpstreamUnavailableError):
    """Raised when an upstream request exceeds its timeout."""


class MalformedUpstreamDataError(ExtractionError):
    """Raised when an upstream response cannot be parsed."""


class MediaNotFoundError(ExtractionError):
    """Raised when every strategy finished without a usable result."""


class ExtractionTimeoutError(ExtractionError):
    """Raised when the caller's deadline expires before a result is found."""


_HTTP_STATUS = (
    (InvalidInputError, 400),
    (MediaNotFoundError, 404),
    (ExtractionTimeoutError, 504),
)


def http_status_for(exc: BaseException) -> int:
    """Map an extraction failure to the HTTP status a web layer should return."""

    for error_type, status in _HTTP_STATUS:
        if isinstance(exc, error_type):
            return status
    return 500
