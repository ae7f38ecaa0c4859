"""Transport contract consumed by the crawl engine.

Why Protocol:
- Structural contract (duck typing) without rigid inheritance.
- The engine stays independent of httpx; tests can plug in any fake.
"""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable


@runtime_checkable
class TransportResponse(Protocol):
    """A response whose body has not been read yet."""

    status_code: int
    reason_phrase: str
    headers: Mapping[str, str]

    async def read(self, limit: int) -> bytes:
        """Read the whole body, failing with `ReadError` beyond `limit` bytes."""

        ...

    async def aclose(self) -> None:
        """Release the underlying connection."""

        ...


@runtime_checkable
class AdsTxtTransport(Protocol):
    """Minimal HTTP capability: one request, no redirect following.

    Rules:
    - `send` performs exactly one network round trip.
    - Network failures are raised as `adstxt.core.errors.TransportError`.
    """

    async def send(self, method: str, url: str, *, domain: str) -> TransportResponse:
        ...
