"""HTTP client capability used by the fetch strategies."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Mapping, Protocol

import httpx

from igfetch.errors import UpstreamTimeoutError, UpstreamUnavailableError


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class HttpClient(Protocol):
    """Anything that can issue a GET and return status and body.

    Implementations raise UpstreamUnavailableError (UpstreamTimeoutError for
    timeouts) instead of library-specific exceptions.
    """

    def get(self, url: str, headers: Mapping[str, str], timeout: float) -> HttpResponse:
        ...


class HttpxClient:
    """HttpClient backed by a single pooled ``httpx.Client``.

    httpx applies ``timeout`` to each connect, read and write separately, so
    the body is streamed and the whole request is also held to ``timeout``.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client = client if client is not None else httpx.Client(follow_redirects=True)
        self._clock = clock

    def __enter__(self) -> "HttpxClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get(self, url: str, headers: Mapping[str, str], timeout: float) -> HttpResponse:
        limit = self._clock() + timeout
        try:
            with self._client.stream("GET", url, headers=dict(headers), timeout=timeout) as response:
                chunks: list[bytes] = []
                for chunk in response.iter_bytes():
                    if self._clock() > limit:
                        raise UpstreamTimeoutError(f"Timed out after {timeout:.1f}s reading '{url}'")
                    chunks.append(chunk)
                content = b"".join(chunks)
                encoding = response.encoding or "utf-8"
                status_code = response.status_code
        except httpx.TimeoutException as exc:
            raise UpstreamTimeoutError(f"Timed out after {timeout:.1f}s requesting '{url}'") from exc
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(f"Request to '{url}' failed: {exc}") from exc

        return HttpResponse(status_code=status_code, text=content.decode(encoding, errors="replace"))
