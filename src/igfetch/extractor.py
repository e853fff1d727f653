"""Extraction of media data from raw page bodies."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable

from bs4 import BeautifulSoup

from igfetch.maybe import Maybe
from igfetch.models import ExtractionResult, MediaCandidate
from igfetch.parser import QUALITY_HD, VIDEO_MP4, parse_structured
from igfetch.text import clean_text, make_description, make_title

logger = logging.getLogger(__name__)

JsonParser = Callable[[str], Any]

_SHARED_DATA_RE = re.compile(r"window\._sharedData\s*=\s*({.+?});", re.DOTALL)
_VIDEO_URL_RE = re.compile(r'"video_url":"([^"]+)"')
_DISPLAY_URL_RE = re.compile(r'"display_url":"([^"]+)"')
_CAPTION_RE = re.compile(r'"caption":"((?:[^"\\]|\\.)*)"')


def _single_video(
    video_url: str,
    thumbnail: str,
    caption: str | None = None,
    *,
    strategy: str | None = None,
) -> ExtractionResult:
    return ExtractionResult(
        title=make_title(caption),
        description=make_description(caption),
        thumbnail=thumbnail,
        download_urls=(MediaCandidate(url=video_url, quality=QUALITY_HD, type=VIDEO_MP4),),
        strategy=strategy,
    )


def _from_shared_data(body: str, json_parser: JsonParser, strategy: str | None) -> ExtractionResult | None:
    match = _SHARED_DATA_RE.search(body)
    if match is None:
        return None

    try:
        shared_data = json_parser(match.group(1))
    except ValueError as exc:
        logger.debug("Embedded shared data is not valid JSON: %s", exc)
        return None

    media = (
        Maybe.of(shared_data)
        .get("entry_data")
        .get("PostPage")
        .at(0)
        .get("graphql")
        .get("shortcode_media")
    )
    return parse_structured(media.value(), strategy=strategy)


def _from_field_markers(body: str, strategy: str | None) -> ExtractionResult | None:
    video_match = _VIDEO_URL_RE.search(body)
    if video_match is None:
        return None

    display_match = _DISPLAY_URL_RE.search(body)
    caption_match = _CAPTION_RE.search(body)
    return _single_video(
        clean_text(video_match.group(1)),
        clean_text(display_match.group(1)) if display_match else "",
        caption_match.group(1) if caption_match else None,
        strategy=strategy,
    )


def _attribute(tag: Any, name: str) -> str:
    value = tag.get(name) if tag is not None else None
    return value.strip() if isinstance(value, str) else ""


def _from_video_element(body: str, strategy: str | None) -> ExtractionResult | None:
    if "<video" not in body.lower():
        return None

    soup = BeautifulSoup(body, "html.parser")
    video = soup.find("video")
    if video is None:
        return None

    src = _attribute(video, "src") or _attribute(video.find("source"), "src")
    if not src:
        return None

    return _single_video(src, _attribute(video, "poster"), strategy=strategy)


def extract_from_body(
    body: str,
    *,
    json_parser: JsonParser = json.loads,
    strategy: str | None = None,
) -> ExtractionResult | None:
    """Find media data in an HTML/JSON page body.

    Instagram serializes the same post in several shapes, so each recognizer
    runs independently: embedded ``window._sharedData`` JSON first, then raw
    ``"video_url"`` field markers, then a ``<video>`` element.
    """

    if not body:
        return None

    result = _from_shared_data(body, json_parser, strategy)
    if result is None:
        result = _from_field_markers(body, strategy)
    if result is None:
        result = _from_video_element(body, strategy)
    return result


def extract_from_embed(body: str, *, strategy: str | None = None) -> ExtractionResult | None:
    """Find the ``<video>`` element of an embed page."""

    if not body:
        return None
    return _from_video_element(body, strategy)
