"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) for the crawler.
- Lets the transport adapter and the crawl services read limits consistently.
"""

from __future__ import annotations

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Central crawler configuration.

    Every field can be overridden with an `ADSTXT_` prefixed environment
    variable (e.g. `ADSTXT_MAX_REDIRECTS=5`) or a local `.env` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="ADSTXT_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="adstxt-crawler/0.1 (+https://iabtechlab.com/ads-txt/)",
        min_length=1,
        description="User-Agent sent with every ads.txt request.",
    )
    max_redirects: int = Field(
        default=10,
        ge=0,
        le=50,
        description="Maximum redirect hops followed for a single crawl.",
    )
    max_body_bytes: int = Field(
        default=2 * 1024 * 1024,
        gt=0,
        description="Largest ads.txt body accepted (bytes).",
    )
    default_expiration_days: int = Field(
        default=7,
        ge=0,
        le=365,
        description="Validity window used when the server sends no expiry information.",
    )
    max_concurrency: int | None = Field(
        default=None,
        ge=1,
        le=10_000,
        description="Concurrent crawls in a batch. Defaults to 5x the CPU count.",
    )

    def effective_max_concurrency(self) -> int:
        if self.max_concurrency is not None:
            return self.max_concurrency
        return (os.cpu_count() or 1) * 5
