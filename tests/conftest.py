from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import pytest

from adstxt.core.config import AppSettings


@dataclass
class StaticResponse:
    status_code: int
    reason_phrase: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    closed: bool = False

    async def read(self, limit: int) -> bytes:
        return self.body

    async def aclose(self) -> None:
        self.closed = True


class StaticTransport:
    """In-memory `AdsTxtTransport`: one canned response per URL."""

    def __init__(self, routes: dict[str, tuple[int, dict[str, str], bytes]]) -> None:
        self._routes = routes
        self.calls: list[str] = []
        self.responses: list[StaticResponse] = []

    async def send(self, method: str, url: str, *, domain: str) -> StaticResponse:
        self.calls.append(url)
        status, headers, body = self._routes[url]
        response = StaticResponse(status_code=status, headers=headers, body=body)
        self.responses.append(response)
        return response


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(max_concurrency=10)


@pytest.fixture
def static_transport() -> Callable[..., StaticTransport]:
    return StaticTransport
