"""Adapters: concrete I/O implementations of the core contracts."""

from adstxt.adapters.http_client import HttpxResponse, HttpxTransport, build_async_client

__all__ = [
    "HttpxResponse",
    "HttpxTransport",
    "build_async_client",
]
