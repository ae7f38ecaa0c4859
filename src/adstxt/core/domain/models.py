"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to I/O libraries.
- Responses can be dumped to JSON for whatever persistence the caller uses.

Note:
- These models describe *what* an ads.txt file says, not *how* it is fetched.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Relationship(str, Enum):
    """Type of account relationship declared by a data record."""

    DIRECT = "DIRECT"
    RESELLER = "RESELLER"

    @classmethod
    def parse(cls, value: str) -> "Relationship | None":
        """Case-insensitive lookup; `None` when the value is not a relationship."""

        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


class KnownVariable(str, Enum):
    """Variable names defined by the IAB ads.txt specification."""

    CONTACT = "CONTACT"
    SUBDOMAIN = "SUBDOMAIN"
    OWNERDOMAIN = "OWNERDOMAIN"
    MANAGERDOMAIN = "MANAGERDOMAIN"
    INVENTORYPARTNERDOMAIN = "INVENTORYPARTNERDOMAIN"


class AdsTxtRequest(BaseModel):
    """An ads.txt file to crawl.

    The crawler never mutates a request: redirects are tracked on the
    response (`final_url`, `redirects`).
    """

    model_config = ConfigDict(frozen=True)

    domain: str = Field(
        ...,
        min_length=1,
        description="Advertised domain, used for correlation and error messages.",
    )
    url: str = Field(
        ...,
        min_length=1,
        description="Concrete ads.txt endpoint fetched first.",
    )

    @classmethod
    def for_domain(cls, domain: str, *, scheme: str = "https") -> "AdsTxtRequest":
        """Build the request for the well-known `/ads.txt` path of `domain`."""

        host = domain.strip().rstrip("/")
        return cls(domain=host, url=f"{scheme}://{host}/ads.txt")


class DataRecord(BaseModel):
    """One authorized seller: `domain, account id, relationship[, cert id]`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["data"] = "data"
    ad_system_domain: str = Field(
        ...,
        min_length=1,
        description="Domain of the advertising system (case preserved).",
    )
    publisher_account_id: str = Field(
        ...,
        min_length=1,
        description="Publisher account identifier within the advertising system.",
    )
    relationship: Relationship = Field(
        ...,
        description="DIRECT or RESELLER.",
    )
    certification_authority_id: str | None = Field(
        default=None,
        description="Optional certification authority id (e.g. TAG-ID).",
    )
    extension: str | None = Field(
        default=None,
        description="Free-form extension data found after ';'.",
    )


class VariableRecord(BaseModel):
    """A `NAME=value` declaration such as `CONTACT=adops@example.com`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["variable"] = "variable"
    name: str = Field(
        ...,
        min_length=1,
        description="Variable name, uppercased.",
    )
    value: str = Field(
        ...,
        description="Variable value, trimmed.",
    )

    @property
    def known(self) -> KnownVariable | None:
        try:
            return KnownVariable(self.name)
        except ValueError:
            return None


Record = Annotated[Union[DataRecord, VariableRecord], Field(discriminator="kind")]


class AdsTxtResponse(BaseModel):
    """Result of a successful crawl.

    `records` keeps file order: callers resolving duplicates or priorities
    depend on it.
    """

    model_config = ConfigDict(frozen=True)

    request: AdsTxtRequest = Field(
        ...,
        description="Request that started the crawl (as given by the caller).",
    )
    records: list[Record] = Field(
        default_factory=list,
        description="Parsed records, in file order.",
    )
    expires: datetime = Field(
        ...,
        description="Moment (UTC) after which the file should be fetched again.",
    )
    final_url: str = Field(
        ...,
        description="URL the body was read from, after redirects.",
    )
    redirects: list[str] = Field(
        default_factory=list,
        description="Redirect targets followed, in order.",
    )

    @property
    def data_records(self) -> list[DataRecord]:
        return [r for r in self.records if isinstance(r, DataRecord)]

    @property
    def variables(self) -> list[VariableRecord]:
        return [r for r in self.records if isinstance(r, VariableRecord)]
