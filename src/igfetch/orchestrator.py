"""Ordered strategy orchestration for Instagram media extraction."""

from __future__ import annotations

import json
import logging
import time
from typing import Callable, Sequence

from igfetch.config import FetchConfig
from igfetch.errors import (
    ExtractionError,
    ExtractionTimeoutError,
    InvalidInputError,
    MediaNotFoundError,
    UpstreamTimeoutError,
)
from igfetch.extractor import JsonParser
from igfetch.http import HttpClient, HttpxClient
from igfetch.input import parse_media_reference
from igfetch.models import BatchReport, ExtractionResult, MediaReference
from igfetch.strategies import DEFAULT_STRATEGIES, Strategy, StrategyContext

logger = logging.getLogger(__name__)


class Orchestrator:
    """Runs the fetch strategies in order and returns the first usable result.

    The orchestrator holds no per-request state, so one instance can serve
    concurrent callers as long as its HTTP client can.
    """

    def __init__(
        self,
        http_client: HttpClient,
        *,
        json_parser: JsonParser = json.loads,
        config: FetchConfig | None = None,
        strategies: Sequence[tuple[str, Strategy]] = DEFAULT_STRATEGIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._http_client = http_client
        self._json_parser = json_parser
        self._config = config if config is not None else FetchConfig()
        self._strategies = tuple(strategies)
        self._clock = clock

    def now(self) -> float:
        """Current value of the clock deadlines are measured against."""

        return self._clock()

    def _timeout_for(self, deadline: float | None, reference: MediaReference) -> float:
        if deadline is None:
            return self._config.timeout_seconds

        remaining = deadline - self._clock()
        if remaining <= 0:
            raise ExtractionTimeoutError(f"Deadline expired while extracting {reference.url}")
        return min(self._config.timeout_seconds, remaining)

    def orchestrate(self, url: str, *, deadline: float | None = None) -> ExtractionResult:
        """Extract media for one post URL.

        ``deadline`` is an absolute value of the orchestrator's clock
        (``time.monotonic`` by default). Raises InvalidInputError before any
        network call, ExtractionTimeoutError once the deadline passes and
        MediaNotFoundError when every strategy comes back empty.
        """

        try:
            reference = parse_media_reference(url)
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc

        for name, strategy in self._strategies:
            context = StrategyContext(
                http_client=self._http_client,
                json_parser=self._json_parser,
                config=self._config,
                timeout=self._timeout_for(deadline, reference),
            )

            try:
                result = strategy(reference.url, context)
            except UpstreamTimeoutError as exc:
                if deadline is not None and self._clock() >= deadline:
                    raise ExtractionTimeoutError(
                        f"Deadline expired during {name} for {reference.url}"
                    ) from exc
                logger.warning("Strategy %s timed out for %s: %s", name, reference.url, exc)
                continue
            except ExtractionTimeoutError:
                raise
            except ExtractionError as exc:
                logger.warning("Strategy %s failed for %s: %s", name, reference.url, exc)
                continue
            except Exception as exc:
                logger.warning(
                    "Strategy %s raised unexpectedly for %s: %s", name, reference.url, exc, exc_info=True
                )
                continue

            if result is None:
                logger.info("Strategy %s found no media for %s", name, reference.url)
                continue

            logger.info("Strategy %s extracted %d url(s) for %s", name, len(result.download_urls), reference.url)
            return result

        raise MediaNotFoundError(
            f"Could not extract media from {reference.url}. Make sure the post is public."
        )

    def extract_batch(
        self,
        references: Sequence[MediaReference],
        *,
        continue_on_error: bool = False,
    ) -> BatchReport:
        """Extract every reference, collecting failures when continue_on_error is set."""

        results: dict[str, ExtractionResult] = {}
        failures: list[str] = []

        for reference in references:
            try:
                results[reference.url] = self.orchestrate(reference.url)
            except ExtractionError as exc:
                message = f"{reference.url}: {exc}"
                if continue_on_error:
                    failures.append(message)
                    continue
                raise RuntimeError(message) from exc

        return BatchReport(
            total=len(references),
            succeeded=len(results),
            failed=len(failures),
            results=results,
            failures=failures,
        )


def extract_media(url: str, config: FetchConfig | None = None) -> ExtractionResult:
    """One-shot extraction with a short-lived httpx client."""

    with HttpxClient() as client:
        return Orchestrator(client, config=config).orchestrate(url)
