"""Crawl services.

- lines: byte buffer to logical lines.
- parser: lines to data/variable records.
- expiration: freshness deadline of a fetched file.
- crawler: single fetch/redirect/classify loop.
- batch: bounded-concurrency fan-out over many requests.
"""

from adstxt.core.services.batch import CrawlOutcome, crawl_many, get_multiple, iter_crawl
from adstxt.core.services.crawler import fetch_ads_txt, get
from adstxt.core.services.expiration import resolve_expires
from adstxt.core.services.lines import split_lines
from adstxt.core.services.parser import parse_body, parse_line, parse_records

__all__ = [
    "CrawlOutcome",
    "crawl_many",
    "fetch_ads_txt",
    "get",
    "get_multiple",
    "iter_crawl",
    "parse_body",
    "parse_line",
    "parse_records",
    "resolve_expires",
    "split_lines",
]
