"""Crawl engine tests.

Only the HTTP layer is mocked (`httpx.MockTransport`); the adapter, the
redirect loop, the parser and the expiry resolver run for real.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from adstxt.adapters.http_client import HttpxTransport, build_async_client
from adstxt.core.config import AppSettings
from adstxt.core.domain.models import AdsTxtRequest, Relationship
from adstxt.core.errors import (
    ClientError,
    ReadError,
    RedirectError,
    ServerError,
    TooManyRedirects,
    TransportError,
)
from adstxt.core.services.crawler import fetch_ads_txt, get

BODY = b"example.com, 1234, DIRECT\n#comment\n\nCONTACT=adops@example.com\n"


async def _crawl(handler, request: AdsTxtRequest, settings: AppSettings):
    async with build_async_client(settings, transport=httpx.MockTransport(handler)) as client:
        return await fetch_ads_txt(request, transport=HttpxTransport(client), settings=settings)


@pytest.mark.asyncio
async def test_success_parses_body_and_sets_default_expiry(settings):
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, content=BODY)

    request = AdsTxtRequest.for_domain("example.com")
    before = datetime.now(timezone.utc)
    response = await _crawl(handler, request, settings)

    assert seen == ["https://example.com/ads.txt"]
    assert response.request is request
    assert response.final_url == "https://example.com/ads.txt"
    assert response.redirects == []
    assert len(response.data_records) == 1
    assert response.data_records[0].relationship is Relationship.DIRECT
    assert [(v.name, v.value) for v in response.variables] == [("CONTACT", "adops@example.com")]
    assert abs(response.expires - (before + timedelta(days=7))) < timedelta(seconds=5)


@pytest.mark.asyncio
async def test_sends_configured_user_agent():
    settings = AppSettings(user_agent="test-agent/1.0")
    agents: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        agents.append(request.headers["User-Agent"])
        return httpx.Response(200, content=b"")

    await _crawl(handler, AdsTxtRequest.for_domain("example.com"), settings)

    assert agents == ["test-agent/1.0"]


@pytest.mark.asyncio
async def test_expires_header_overrides_default(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"Expires": "Wed, 21 Oct 2026 07:28:00 GMT"}, content=BODY)

    response = await _crawl(handler, AdsTxtRequest.for_domain("example.com"), settings)

    assert response.expires == datetime(2026, 10, 21, 7, 28, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_301_triggers_exactly_one_follow_up_fetch(settings):
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        if request.url.host == "example.com":
            return httpx.Response(301, headers={"Location": "https://www.example.com/ads.txt"})
        return httpx.Response(200, content=BODY)

    request = AdsTxtRequest.for_domain("example.com")
    response = await _crawl(handler, request, settings)

    assert seen == ["https://example.com/ads.txt", "https://www.example.com/ads.txt"]
    assert response.final_url == "https://www.example.com/ads.txt"
    assert response.redirects == ["https://www.example.com/ads.txt"]
    # The caller's request keeps its original URL.
    assert request.url == "https://example.com/ads.txt"
    assert response.request.url == "https://example.com/ads.txt"


@pytest.mark.asyncio
async def test_relative_location_is_resolved(settings):
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        if request.url.path == "/ads.txt":
            return httpx.Response(302, headers={"Location": "/static/ads.txt"})
        return httpx.Response(200, content=BODY)

    await _crawl(handler, AdsTxtRequest.for_domain("example.com"), settings)

    assert seen[-1] == "https://example.com/static/ads.txt"


@pytest.mark.asyncio
async def test_redirect_loop_stops_with_too_many_redirects():
    settings = AppSettings(max_redirects=3)
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        target = "/b" if request.url.path == "/a" else "/a"
        return httpx.Response(302, headers={"Location": target})

    with pytest.raises(TooManyRedirects) as excinfo:
        await _crawl(handler, AdsTxtRequest(domain="example.com", url="https://example.com/a"), settings)

    assert calls == 4
    assert excinfo.value.max_redirects == 3
    assert excinfo.value.domain == "example.com"


@pytest.mark.asyncio
async def test_redirect_without_location_fails(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302)

    with pytest.raises(RedirectError):
        await _crawl(handler, AdsTxtRequest.for_domain("example.com"), settings)


@pytest.mark.asyncio
async def test_404_is_client_error_without_further_fetch(settings):
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(404)

    with pytest.raises(ClientError) as excinfo:
        await _crawl(handler, AdsTxtRequest.for_domain("example.com"), settings)

    assert calls == 1
    err = excinfo.value
    assert err.status_code == 404
    assert err.domain == "example.com"
    assert err.url == "https://example.com/ads.txt"
    assert "404 Not Found" in str(err)


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [500, 503, 204, 206])
async def test_other_statuses_are_server_errors(settings, status):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status)

    with pytest.raises(ServerError) as excinfo:
        await _crawl(handler, AdsTxtRequest.for_domain("example.com"), settings)

    assert excinfo.value.status_code == status


@pytest.mark.asyncio
async def test_connection_failure_is_transport_error(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as excinfo:
        await _crawl(handler, AdsTxtRequest.for_domain("example.com"), settings)

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_oversized_body_is_read_error():
    settings = AppSettings(max_body_bytes=16)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=BODY)

    with pytest.raises(ReadError):
        await _crawl(handler, AdsTxtRequest.for_domain("example.com"), settings)


@pytest.mark.asyncio
async def test_every_response_is_closed(settings, static_transport):
    transport = static_transport(
        {
            "https://example.com/ads.txt": (301, {"location": "https://www.example.com/ads.txt"}, b""),
            "https://www.example.com/ads.txt": (200, {}, BODY),
        }
    )

    await fetch_ads_txt(AdsTxtRequest.for_domain("example.com"), transport=transport, settings=settings)

    assert len(transport.responses) == 2
    assert all(r.closed for r in transport.responses)


def test_blocking_get(settings, static_transport):
    transport = static_transport({"https://example.com/ads.txt": (200, {}, BODY)})

    response = get(AdsTxtRequest.for_domain("example.com"), transport=transport, settings=settings)

    assert len(response.records) == 2
    assert transport.calls == ["https://example.com/ads.txt"]


@pytest.mark.asyncio
async def test_out_of_range_expires_keeps_crawl_successful(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"Expires": "Fri, 31 Dec 9999 23:30:00 -0100"}, content=BODY)

    before = datetime.now(timezone.utc)
    response = await _crawl(handler, AdsTxtRequest.for_domain("example.com"), settings)

    assert len(response.data_records) == 1
    assert abs(response.expires - (before + timedelta(days=7))) < timedelta(seconds=5)
