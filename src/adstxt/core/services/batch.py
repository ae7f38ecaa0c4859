"""Batch crawling of many ads.txt files.

Every request runs in its own task. A spawner takes a semaphore permit
before creating each task, so no more than the ceiling of crawl tasks exist
at once; the task gives the permit back when it ends. Finished crawls are
pushed to a queue and a single consumer delivers them, so handlers are
never called concurrently and one failing domain never affects the others.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import AsyncExitStack
from dataclasses import dataclass
from typing import AsyncIterator, Sequence

from adstxt.adapters.http_client import HttpxTransport, build_async_client
from adstxt.core.config import AppSettings
from adstxt.core.domain.models import AdsTxtRequest, AdsTxtResponse
from adstxt.core.interfaces.handler import ResultHandler
from adstxt.core.interfaces.transport import AdsTxtTransport
from adstxt.core.services.crawler import fetch_ads_txt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CrawlOutcome:
    """Result of one crawl in a batch: exactly one of `response`/`error` is set."""

    request: AdsTxtRequest
    response: AdsTxtResponse | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def iter_crawl(
    requests: Sequence[AdsTxtRequest],
    *,
    transport: AdsTxtTransport | None = None,
    settings: AppSettings | None = None,
    max_concurrency: int | None = None,
) -> AsyncIterator[CrawlOutcome]:
    """Crawl `requests` concurrently, yielding outcomes in completion order.

    Exactly one outcome is yielded per request. Without a `transport`, one
    `httpx.AsyncClient` is shared by the whole batch.
    """

    settings = settings or AppSettings()
    limit = max_concurrency if max_concurrency is not None else settings.effective_max_concurrency()
    if limit < 1:
        raise ValueError(f"max_concurrency must be >= 1, got {limit}")
    if not requests:
        return

    sem = asyncio.Semaphore(limit)
    queue: asyncio.Queue[CrawlOutcome] = asyncio.Queue()

    async with AsyncExitStack() as stack:
        if transport is None:
            client = await stack.enter_async_context(build_async_client(settings))
            transport = HttpxTransport(client)

        running: set[asyncio.Task[None]] = set()

        async def crawl_one(request: AdsTxtRequest) -> None:
            # The permit was taken by `spawn` before this task existed.
            try:
                try:
                    response = await fetch_ads_txt(request, transport=transport, settings=settings)
                    outcome = CrawlOutcome(request=request, response=response)
                except Exception as exc:
                    logger.debug("Crawl failed for %s: %s", request.domain, exc)
                    outcome = CrawlOutcome(request=request, error=exc)
                queue.put_nowait(outcome)
            finally:
                sem.release()

        async def spawn() -> None:
            # At most `limit` crawl tasks exist at any time.
            for request in requests:
                await sem.acquire()
                task = asyncio.create_task(crawl_one(request))
                running.add(task)
                task.add_done_callback(running.discard)

        logger.debug("Crawling %d ads.txt files (max_concurrency=%d)", len(requests), limit)
        spawner = asyncio.create_task(spawn())
        try:
            for _ in range(len(requests)):
                yield await queue.get()
        finally:
            spawner.cancel()
            pending = [spawner, *running]
            for task in pending:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)


async def crawl_many(
    requests: Sequence[AdsTxtRequest],
    handler: ResultHandler,
    *,
    transport: AdsTxtTransport | None = None,
    settings: AppSettings | None = None,
    max_concurrency: int | None = None,
) -> None:
    """Crawl every request and hand each outcome to `handler` exactly once.

    Returns after all crawls finished and all handler calls returned. An
    exception raised by the handler is logged and the batch continues.
    """

    failed = 0
    async for outcome in iter_crawl(
        requests,
        transport=transport,
        settings=settings,
        max_concurrency=max_concurrency,
    ):
        if not outcome.ok:
            failed += 1
        try:
            handler.handle(outcome.request, outcome.response, outcome.error)
        except Exception:
            logger.exception("Result handler failed for %s", outcome.request.domain)

    logger.info("Batch finished: %d requests, %d failed", len(requests), failed)


def get_multiple(
    requests: Sequence[AdsTxtRequest],
    handler: ResultHandler,
    *,
    transport: AdsTxtTransport | None = None,
    settings: AppSettings | None = None,
    max_concurrency: int | None = None,
) -> None:
    """Blocking variant of `crawl_many`."""

    asyncio.run(
        crawl_many(
            requests,
            handler,
            transport=transport,
            settings=settings,
            max_concurrency=max_concurrency,
        )
    )
