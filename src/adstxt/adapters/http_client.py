"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts, headers and body limits for every ads.txt fetch.
- Redirects are disabled at the client: the crawl engine follows them itself
  so it can count hops and record the chain.
- Eases testing: any `httpx` transport (e.g. `httpx.MockTransport`) can be
  injected.
"""

from __future__ import annotations

import logging
from typing import Mapping

import httpx

from adstxt.core.config import AppSettings
from adstxt.core.errors import ReadError, TransportError

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with safe defaults.

    Why a builder:
    - Centralizes timeouts/headers so every crawl behaves the same.
    - `transport` lets tests swap the network for `httpx.MockTransport`.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "text/plain, */*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )


class HttpxResponse:
    """Streamed `httpx.Response` exposed as a `TransportResponse`."""

    def __init__(self, response: httpx.Response, *, domain: str) -> None:
        self._response = response
        self._domain = domain

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def reason_phrase(self) -> str:
        return self._response.reason_phrase

    @property
    def headers(self) -> Mapping[str, str]:
        return self._response.headers

    async def read(self, limit: int) -> bytes:
        url = str(self._response.url)
        chunks: list[bytes] = []
        size = 0
        try:
            async for chunk in self._response.aiter_bytes():
                size += len(chunk)
                if size > limit:
                    raise ReadError(
                        f"ads.txt: body larger than {limit} bytes for domain {self._domain} url {url}",
                        domain=self._domain,
                        url=url,
                    )
                chunks.append(chunk)
        except httpx.HTTPError as exc:
            raise ReadError(
                f"ads.txt: failed reading body for domain {self._domain} url {url}: {exc}",
                domain=self._domain,
                url=url,
            ) from exc
        return b"".join(chunks)

    async def aclose(self) -> None:
        await self._response.aclose()


class HttpxTransport:
    """`AdsTxtTransport` backed by a shared `httpx.AsyncClient`."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def send(self, method: str, url: str, *, domain: str) -> HttpxResponse:
        try:
            request = self._client.build_request(method, url)
            response = await self._client.send(request, stream=True)
        except httpx.InvalidURL as exc:
            raise TransportError(
                f"ads.txt: invalid url for domain {domain}: {url} ({exc})",
                domain=domain,
                url=url,
            ) from exc
        except httpx.HTTPError as exc:
            logger.debug("Transport failure for %s (%s): %s", domain, url, exc)
            raise TransportError(
                f"ads.txt: request failed for domain {domain} url {url}: {exc}",
                domain=domain,
                url=url,
            ) from exc
        return HttpxResponse(response, domain=domain)
