"""The three upstream fetch strategies, in the order they are tried."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from igfetch.config import HTML_ACCEPT, JSON_ACCEPT, FetchConfig
from igfetch.errors import MalformedUpstreamDataError, UpstreamUnavailableError
from igfetch.extractor import JsonParser, extract_from_body, extract_from_embed
from igfetch.http import HttpClient, HttpResponse
from igfetch.input import embed_url, json_endpoint_url, with_scheme
from igfetch.maybe import Maybe
from igfetch.models import ExtractionResult
from igfetch.parser import parse_structured


@dataclass(frozen=True)
class StrategyContext:
    """Per-invocation collaborators handed to a strategy."""

    http_client: HttpClient
    json_parser: JsonParser
    config: FetchConfig
    timeout: float


Strategy = Callable[[str, StrategyContext], "ExtractionResult | None"]


def _fetch(url: str, accept: str, context: StrategyContext) -> HttpResponse:
    response = context.http_client.get(url, context.config.headers_for(accept), context.timeout)
    if not response.ok:
        raise UpstreamUnavailableError(f"Upstream returned HTTP {response.status_code} for '{url}'")
    return response


def json_endpoint(url: str, context: StrategyContext) -> ExtractionResult | None:
    """Ask the post URL for its JSON representation."""

    response = _fetch(json_endpoint_url(url), JSON_ACCEPT, context)
    try:
        data = context.json_parser(response.text)
    except ValueError as exc:
        raise MalformedUpstreamDataError(f"JSON endpoint returned invalid JSON: {exc}") from exc

    media = Maybe.of(data).get("graphql").get("shortcode_media")
    if not media.present:
        return None
    return parse_structured(media.value(), strategy="json_endpoint")


def page_html(url: str, context: StrategyContext) -> ExtractionResult | None:
    """Scrape the post page itself."""

    response = _fetch(with_scheme(url), HTML_ACCEPT, context)
    return extract_from_body(response.text, json_parser=context.json_parser, strategy="page_html")


def embed_page(url: str, context: StrategyContext) -> ExtractionResult | None:
    """Scrape the embeddable variant of the post page."""

    response = _fetch(embed_url(url), HTML_ACCEPT, context)
    return extract_from_embed(response.text, strategy="embed_page")


DEFAULT_STRATEGIES: tuple[tuple[str, Strategy], ...] = (
    ("json_endpoint", json_endpoint),
    ("page_html", page_html),
    ("embed_page", embed_page),
)
