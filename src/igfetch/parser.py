"""Normalization of Instagram ``shortcode_media`` records."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from igfetch.maybe import Maybe
from igfetch.models import ExtractionResult, MediaCandidate
from igfetch.text import make_description, make_title

logger = logging.getLogger(__name__)

VIDEO_MP4 = "video/mp4"
IMAGE_JPEG = "image/jpeg"
QUALITY_HD = "HD"
QUALITY_IMAGE = "Image"

_MEDIA_FIELDS = ("video_url", "display_resources", "display_url", "thumbnail_src")


def _dimension(value: Maybe) -> str:
    number = value.number()
    if number is not None and number.is_integer():
        return str(int(number))
    return str(value.value(""))


def _video_candidates(media: Maybe) -> list[MediaCandidate]:
    candidates: list[MediaCandidate] = []
    seen: set[str] = set()

    video_url = media.get("video_url").text()
    if video_url:
        candidates.append(MediaCandidate(url=video_url, quality=QUALITY_HD, type=VIDEO_MP4))
        seen.add(video_url)

    for resource in media.get("display_resources").items():
        src = resource.get("src").text()
        if not src or src in seen:
            continue
        quality = f"{_dimension(resource.get('config_width'))}x{_dimension(resource.get('config_height'))}"
        candidates.append(MediaCandidate(url=src, quality=quality, type=VIDEO_MP4))
        seen.add(src)

    return candidates


def _display_url(media: Maybe) -> str | None:
    return media.get("display_url").text() or media.get("thumbnail_src").text()


def _caption(media: Maybe) -> str | None:
    return media.get("edge_media_to_caption").get("edges").at(0).get("node").get("text").text()


def _duration(media: Maybe) -> float:
    duration = media.get("video_duration").number()
    if duration is None or duration < 0:
        return 0
    return duration


def parse_structured(record: Any, *, strategy: str | None = None) -> ExtractionResult | None:
    """Build an ExtractionResult from a raw media record, or None if unusable."""

    media = Maybe.of(record)
    if not isinstance(media.value(), dict):
        return None
    if not any(media.get(field).present for field in _MEDIA_FIELDS):
        return None

    display_url = _display_url(media)
    candidates = _video_candidates(media)
    if not candidates:
        if not display_url:
            logger.debug("Media record has neither video nor display url")
            return None
        candidates = [MediaCandidate(url=display_url, quality=QUALITY_IMAGE, type=IMAGE_JPEG)]

    caption = _caption(media)
    try:
        return ExtractionResult(
            title=make_title(caption),
            description=make_description(caption),
            thumbnail=display_url or "",
            duration=_duration(media),
            download_urls=tuple(candidates),
            strategy=strategy,
        )
    except ValidationError as exc:
        logger.debug("Discarding media record that failed validation: %s", exc)
        return None
