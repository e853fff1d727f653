"""Domain models used by igfetch."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PostKind(str, Enum):
    POST = "p"
    REEL = "reel"
    TV = "tv"


class MediaReference(BaseModel):
    """A validated Instagram post URL and its parsed shortcode."""

    model_config = ConfigDict(frozen=True)

    url: str
    kind: PostKind
    shortcode: str


class MediaCandidate(BaseModel):
    """One downloadable asset discovered for a post."""

    model_config = ConfigDict(frozen=True)

    url: str
    quality: str
    type: str


class ExtractionResult(BaseModel):
    """Normalized media data extracted from Instagram."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    description: str
    thumbnail: str = ""
    duration: float = Field(default=0, ge=0)
    download_urls: tuple[MediaCandidate, ...] = Field(alias="downloadUrls", min_length=1)
    strategy: str | None = Field(default=None, exclude=True)

    @model_validator(mode="after")
    def validate_unique_urls(self) -> "ExtractionResult":
        urls = [candidate.url for candidate in self.download_urls]
        if len(urls) != len(set(urls)):
            raise ValueError("download_urls must not contain duplicate urls")
        return self

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the public response shape."""

        return self.model_dump(mode="json", by_alias=True)


class BatchReport(BaseModel):
    """Summary returned by extract_batch."""

    total: int
    succeeded: int
    failed: int
    results: dict[str, ExtractionResult] = Field(default_factory=dict)
    failures: list[str] = Field(default_factory=list)
