"""Crawl error taxonomy.

All failures of a crawl surface as an `AdsTxtError` subclass. There is no
parse error: malformed ads.txt lines are dropped by the parser.
"""

from __future__ import annotations


class AdsTxtError(Exception):
    """Base class for every crawl failure."""

    def __init__(self, message: str, *, domain: str, url: str) -> None:
        super().__init__(message)
        self.domain = domain
        self.url = url


class TransportError(AdsTxtError):
    """The server could not be reached (connection, DNS, TLS, timeout)."""


class ReadError(AdsTxtError):
    """The response body could not be read completely."""


class RedirectError(AdsTxtError):
    """A redirect response could not be followed."""


class TooManyRedirects(RedirectError):
    """The redirect chain exceeded the configured hop limit."""

    def __init__(self, *, domain: str, url: str, max_redirects: int) -> None:
        super().__init__(
            f"ads.txt: more than {max_redirects} redirects for domain {domain} (last url {url})",
            domain=domain,
            url=url,
        )
        self.max_redirects = max_redirects


class HTTPStatusError(AdsTxtError):
    """The final response carried a status code other than 200."""

    kind = "unexpected HTTP status"

    def __init__(self, *, status_code: int, reason: str, domain: str, url: str) -> None:
        status = f"{status_code} {reason}".strip()
        super().__init__(
            f"ads.txt: {self.kind} [{status}] for domain {domain} url {url}",
            domain=domain,
            url=url,
        )
        self.status_code = status_code
        self.reason = reason


class ClientError(HTTPStatusError):
    """HTTP 4xx: the domain has no (or no accessible) ads.txt file."""

    kind = "HTTP client error"


class ServerError(HTTPStatusError):
    """HTTP 5xx or any status the crawler does not know how to handle."""

    kind = "HTTP server error"
