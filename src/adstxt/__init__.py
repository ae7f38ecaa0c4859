"""Crawl and parse IAB ads.txt files.

Typical use:

    from adstxt import AdsTxtRequest, get

    response = get(AdsTxtRequest.for_domain("example.com"))
    for record in response.data_records:
        ...
"""

from __future__ import annotations

import logging

from adstxt.core.config import AppSettings
from adstxt.core.domain.models import (
    AdsTxtRequest,
    AdsTxtResponse,
    DataRecord,
    KnownVariable,
    Record,
    Relationship,
    VariableRecord,
)
from adstxt.core.errors import (
    AdsTxtError,
    ClientError,
    HTTPStatusError,
    ReadError,
    RedirectError,
    ServerError,
    TooManyRedirects,
    TransportError,
)
from adstxt.core.interfaces import AdsTxtTransport, ResultHandler, TransportResponse
from adstxt.core.services import (
    CrawlOutcome,
    crawl_many,
    fetch_ads_txt,
    get,
    get_multiple,
    iter_crawl,
    parse_body,
    parse_line,
    parse_records,
    resolve_expires,
    split_lines,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "AdsTxtError",
    "AdsTxtRequest",
    "AdsTxtResponse",
    "AdsTxtTransport",
    "AppSettings",
    "ClientError",
    "CrawlOutcome",
    "DataRecord",
    "HTTPStatusError",
    "KnownVariable",
    "ReadError",
    "Record",
    "RedirectError",
    "Relationship",
    "ResultHandler",
    "ServerError",
    "TooManyRedirects",
    "TransportError",
    "TransportResponse",
    "VariableRecord",
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
