# services/fetcher/fetcher.py
"""
Download article pages.

One attempt per call, no retries: a timeout or a failed response is reported
to the caller straight away as ``FetchError``.
"""

import asyncio
from typing import Optional

import httpx
from loguru import logger
from prometheus_client import Counter, Histogram

from core.config import Settings
from core.exceptions import FetchError

FETCH_DURATION = Histogram("article_fetch_duration_seconds", "Time spent downloading article pages")
FETCH_ERRORS = Counter("article_fetch_errors_total", "Failed article downloads", ["reason"])


class Fetcher:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = settings.FETCH_TIMEOUT
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.FETCH_TIMEOUT),
            follow_redirects=True,
            headers={"User-Agent": settings.USER_AGENT},
            transport=transport,
        )

    async def fetch(self, url: str) -> str:
        """
        Return the page body as text.

        Raises
        ------
        FetchError
            ``is_timeout=True`` when the page did not arrive within the
            timeout, ``upstream_status`` set for non-2xx responses.
        """
        logger.info(f"Fetching article page: {url}")
        try:
            with FETCH_DURATION.time():
                # httpx timeouts apply per phase; this bounds the whole download
                response = await asyncio.wait_for(self._client.get(url), self.timeout)
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            FETCH_ERRORS.labels(reason="timeout").inc()
            logger.warning(f"Timed out after {self.timeout}s fetching {url}: {exc}")
            raise FetchError("Request timeout", is_timeout=True) from exc
        except httpx.HTTPError as exc:
            FETCH_ERRORS.labels(reason="transport").inc()
            logger.warning(f"Failed to fetch {url}: {exc}")
            raise FetchError(str(exc) or "Failed to fetch article") from exc

        if not response.is_success:
            FETCH_ERRORS.labels(reason="status").inc()
            logger.warning(f"Fetching {url} returned HTTP {response.status_code}")
            raise FetchError(
                f"Failed to fetch page: {response.status_code} {response.reason_phrase}",
                upstream_status=response.status_code,
            )

        return response.text

    async def aclose(self) -> None:
        await self._client.aclose()
