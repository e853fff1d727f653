from __future__ import annotations

from pathlib import Path
from typing import Mapping

import pytest

from igfetch.http import HttpResponse

FIXTURES = Path(__file__).parent / "fixtures"


class FakeHttpClient:
    """HttpClient stand-in that serves canned responses keyed by URL."""

    def __init__(self, routes: dict[str, HttpResponse | Exception] | None = None) -> None:
        self.routes = dict(routes or {})
        self.calls: list[tuple[str, dict[str, str], float]] = []

    def get(self, url: str, headers: Mapping[str, str], timeout: float) -> HttpResponse:
        self.calls.append((url, dict(headers), timeout))
        route = self.routes.get(url)
        if route is None:
            return HttpResponse(status_code=404, text="")
        if isinstance(route, Exception):
            raise route
        return route

    def urls(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_client() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture
def fixture_html():
    def _read(name: str) -> str:
        return (FIXTURES / name).read_text(encoding="utf-8")

    return _read
