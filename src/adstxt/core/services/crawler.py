"""Single ads.txt crawl.

Implements the fetch/redirect/classify loop of the IAB Ads.txt
Specification 1.0.x:
https://iabtechlab.com/wp-content/uploads/2019/03/IAB-OpenRTB-Ads.txt-Public-Spec-1.0.2.pdf

- 3xx: follow `Location` (bounded by `AppSettings.max_redirects`).
- 4xx: `ClientError`. The domain has no usable ads.txt.
- 200: read, parse and compute the expiry.
- anything else: `ServerError`.

Retries are the caller's concern; every failure is final.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from urllib.parse import urljoin

from adstxt.adapters.http_client import HttpxTransport, build_async_client
from adstxt.core.config import AppSettings
from adstxt.core.domain.models import AdsTxtRequest, AdsTxtResponse
from adstxt.core.errors import ClientError, RedirectError, ServerError, TooManyRedirects
from adstxt.core.interfaces.transport import AdsTxtTransport, TransportResponse
from adstxt.core.services.expiration import header_value, resolve_expires
from adstxt.core.services.parser import parse_body

logger = logging.getLogger(__name__)


async def fetch_ads_txt(
    request: AdsTxtRequest,
    *,
    transport: AdsTxtTransport | None = None,
    settings: AppSettings | None = None,
) -> AdsTxtResponse:
    """Crawl and parse the ads.txt file described by `request`.

    Without a `transport`, a dedicated `httpx.AsyncClient` is opened for this
    crawl and closed afterwards. The caller's request is never modified.
    """

    settings = settings or AppSettings()
    if transport is None:
        async with build_async_client(settings) as client:
            return await _crawl(request, HttpxTransport(client), settings)
    return await _crawl(request, transport, settings)


async def _crawl(
    request: AdsTxtRequest,
    transport: AdsTxtTransport,
    settings: AppSettings,
) -> AdsTxtResponse:
    url = request.url
    redirects: list[str] = []

    while True:
        logger.debug("GET %s (domain=%s, hop=%d)", url, request.domain, len(redirects))
        response = await transport.send("GET", url, domain=request.domain)
        try:
            status = response.status_code

            if 300 <= status < 400:
                target = _redirect_target(request, url, response)
                if len(redirects) >= settings.max_redirects:
                    raise TooManyRedirects(
                        domain=request.domain,
                        url=target,
                        max_redirects=settings.max_redirects,
                    )
                logger.debug("Redirect %d %s -> %s", status, url, target)
                redirects.append(target)
                url = target
                continue

            if 400 <= status < 500:
                logger.warning("ads.txt client error %d for %s (%s)", status, request.domain, url)
                raise ClientError(
                    status_code=status,
                    reason=response.reason_phrase,
                    domain=request.domain,
                    url=url,
                )

            if status == 200:
                return await _build_response(request, url, redirects, response, settings)

            logger.warning("ads.txt server error %d for %s (%s)", status, request.domain, url)
            raise ServerError(
                status_code=status,
                reason=response.reason_phrase,
                domain=request.domain,
                url=url,
            )
        finally:
            await response.aclose()


def _redirect_target(request: AdsTxtRequest, url: str, response: TransportResponse) -> str:
    location = (header_value(response.headers, "Location") or "").strip()
    if not location:
        raise RedirectError(
            f"ads.txt: redirect {response.status_code} without Location for domain {request.domain} url {url}",
            domain=request.domain,
            url=url,
        )
    return urljoin(url, location)


async def _build_response(
    request: AdsTxtRequest,
    url: str,
    redirects: list[str],
    response: TransportResponse,
    settings: AppSettings,
) -> AdsTxtResponse:
    body = await response.read(settings.max_body_bytes)
    records = parse_body(body)
    expires = resolve_expires(
        response.headers,
        default_ttl=timedelta(days=settings.default_expiration_days),
    )
    logger.info("ads.txt for %s: %d records from %s", request.domain, len(records), url)
    return AdsTxtResponse(
        request=request,
        records=records,
        expires=expires,
        final_url=url,
        redirects=redirects,
    )


def get(
    request: AdsTxtRequest,
    *,
    transport: AdsTxtTransport | None = None,
    settings: AppSettings | None = None,
) -> AdsTxtResponse:
    """Blocking variant of `fetch_ads_txt` for code without an event loop."""

    return asyncio.run(fetch_ads_txt(request, transport=transport, settings=settings))
