"""Batch result sink contract."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from adstxt.core.domain.models import AdsTxtRequest, AdsTxtResponse


@runtime_checkable
class ResultHandler(Protocol):
    """Receives the outcome of every crawl in a batch.

    Exactly one of `response` / `error` is set. Calls happen one at a time,
    in completion order.
    """

    def handle(
        self,
        request: AdsTxtRequest,
        response: AdsTxtResponse | None,
        error: Exception | None,
    ) -> None:
        ...
