# tests/test_fetcher.py
import asyncio
import time

import httpx
import pytest

from core.exceptions import FetchError
from services.fetcher import Fetcher

URL = "https://news.example.com/articles/bridge"


def fetch_with(settings, handler):
    fetcher = Fetcher(settings, transport=httpx.MockTransport(handler))

    async def run():
        try:
            return await fetcher.fetch(URL)
        finally:
            await fetcher.aclose()

    return asyncio.run(run())


def test_returns_page_text_and_sends_user_agent(settings):
    seen = {}

    def handler(request):
        seen["ua"] = request.headers["user-agent"]
        return httpx.Response(200, text="<html><body>ok</body></html>")

    assert fetch_with(settings, handler) == "<html><body>ok</body></html>"
    assert seen["ua"] == settings.USER_AGENT


def test_non_2xx_carries_upstream_status(settings):
    with pytest.raises(FetchError) as exc_info:
        fetch_with(settings, lambda request: httpx.Response(404, text="gone"))

    err = exc_info.value
    assert err.upstream_status == 404
    assert err.is_timeout is False
    assert err.status_code == 502
    assert err.to_dict()["error"]["statusCode"] == 404


def test_timeout_is_reported_separately(settings):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(FetchError) as exc_info:
        fetch_with(settings, handler)

    assert exc_info.value.is_timeout is True
    assert exc_info.value.upstream_status is None
    assert exc_info.value.to_dict()["error"]["isTimeout"] is True


def test_slow_download_is_cut_off_at_the_deadline(settings):
    # each chunk arrives well inside any per-read timeout, the total does not
    async def trickle():
        for _ in range(8):
            await asyncio.sleep(0.3)
            yield b"x"

    short = settings.model_copy(update={"FETCH_TIMEOUT": 0.5})
    started = time.perf_counter()

    with pytest.raises(FetchError) as exc_info:
        fetch_with(short, lambda request: httpx.Response(200, content=trickle()))

    assert exc_info.value.is_timeout is True
    assert exc_info.value.message == "Request timeout"
    assert time.perf_counter() - started < 2.0


def test_connection_failure_is_not_a_timeout(settings):
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError) as exc_info:
        fetch_with(settings, handler)

    assert exc_info.value.is_timeout is False
    # single attempt, no retries
    assert len(calls) == 1


def test_default_timeout_is_thirty_seconds(settings):
    assert settings.FETCH_TIMEOUT == 30
    assert Fetcher(settings).timeout == 30
