import httpx
import pytest

from igfetch.errors import UpstreamTimeoutError, UpstreamUnavailableError
from igfetch.http import HttpxClient


def _client(handler) -> HttpxClient:
    return HttpxClient(httpx.Client(transport=httpx.MockTransport(handler)))


def test_httpx_client_returns_status_and_body() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="<html>ok</html>")

    with _client(handler) as client:
        response = client.get("https://instagram.com/p/ABC/", {"User-Agent": "TestAgent/1.0"}, 5.0)

    assert response.status_code == 200
    assert response.ok
    assert response.text == "<html>ok</html>"
    assert seen[0].headers["User-Agent"] == "TestAgent/1.0"


def test_httpx_client_passes_through_error_statuses() -> None:
    with _client(lambda request: httpx.Response(404, text="missing")) as client:
        response = client.get("https://instagram.com/p/ABC/", {}, 5.0)

    assert response.status_code == 404
    assert not response.ok


def test_httpx_client_maps_timeouts() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    with _client(handler) as client:
        with pytest.raises(UpstreamTimeoutError):
            client.get("https://instagram.com/p/ABC/", {}, 0.5)


def test_httpx_client_maps_network_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with _client(handler) as client:
        with pytest.raises(UpstreamUnavailableError) as exc_info:
            client.get("https://instagram.com/p/ABC/", {}, 5.0)

    assert not isinstance(exc_info.value, UpstreamTimeoutError)


def test_httpx_client_bounds_total_time_of_slow_bodies() -> None:
    now = [0.0]
    produced: list[int] = []

    def trickle():
        for _ in range(100):
            produced.append(1)
            now[0] += 0.3
            yield b"x"

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=trickle())

    client = HttpxClient(httpx.Client(transport=httpx.MockTransport(handler)), clock=lambda: now[0])
    with client:
        with pytest.raises(UpstreamTimeoutError):
            client.get("https://instagram.com/p/ABC/", {}, 1.0)

    assert len(produced) < 10


def test_httpx_client_decodes_declared_charset() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content="café".encode("latin-1"),
            headers={"Content-Type": "text/html; charset=latin-1"},
        )

    with _client(handler) as client:
        response = client.get("https://instagram.com/p/ABC/", {}, 5.0)

    assert response.text == "café"
