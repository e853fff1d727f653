"""Direct media link extraction for public Instagram posts."""

from igfetch.errors import (
    ExtractionError,
    ExtractionTimeoutError,
    InvalidInputError,
    MalformedUpstreamDataError,
    MediaNotFoundError,
    UpstreamUnavailableError,
    http_status_for,
)
from igfetch.input import is_supported_url
from igfetch.models import ExtractionResult, MediaCandidate
from igfetch.orchestrator import Orchestrator, extract_media

__all__ = [
    "ExtractionError",
    "ExtractionResult",
    "ExtractionTimeoutError",
    "InvalidInputError",
    "MalformedUpstreamDataError",
    "MediaCandidate",
    "MediaNotFoundError",
    "Orchestrator",
    "UpstreamUnavailableError",
    "extract_media",
    "http_status_for",
    "is_supported_url",
]

__version__ = "0.1.0"
