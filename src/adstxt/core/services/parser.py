"""ads.txt record parser (IAB Ads.txt Specification 1.0.x).

The file is third-party freeform text, so parsing is best-effort:
- Blank lines and comments (`#` up to the end of line) are skipped.
- `domain, account id, DIRECT|RESELLER[, cert id][;extension]` is a data record.
- `NAME=value` is a variable record.
- Every other line is dropped silently; parsing never raises.
"""

from __future__ import annotations

from typing import Iterable

from adstxt.core.domain.models import DataRecord, Record, Relationship, VariableRecord
from adstxt.core.services.lines import split_lines


def parse_body(data: bytes) -> list[Record]:
    """Parse a raw ads.txt body into records, keeping file order."""

    return parse_records(split_lines(data))


def parse_records(lines: Iterable[str]) -> list[Record]:
    records: list[Record] = []
    for raw_line in lines:
        record = parse_line(raw_line)
        if record is not None:
            records.append(record)
    return records


def parse_line(raw_line: str) -> Record | None:
    """Parse one line; `None` for blank, comment or malformed lines."""

    line = raw_line.split("#", 1)[0].strip()
    if not line:
        return None

    name, sep, value = line.partition("=")
    if not sep or "," in name:
        return _parse_data_record(line)
    return _parse_variable(name, value)


def _parse_data_record(line: str) -> DataRecord | None:
    body, sep, extension = line.partition(";")
    fields = [field.strip() for field in body.split(",")]
    if len(fields) < 3:
        return None

    domain, account_id, relationship_raw = fields[0], fields[1], fields[2]
    if not domain or not account_id:
        return None

    relationship = Relationship.parse(relationship_raw)
    if relationship is None:
        return None

    cert_id = fields[3] if len(fields) > 3 and fields[3] else None
    return DataRecord(
        ad_system_domain=domain,
        publisher_account_id=account_id,
        relationship=relationship,
        certification_authority_id=cert_id,
        extension=(extension.strip() or None) if sep else None,
    )


def _parse_variable(name: str, value: str) -> VariableRecord | None:
    name = name.strip()
    value = value.strip()
    # Bare token only: "CONTACT", not "some contact".
    if not name or not value or any(ch.isspace() for ch in name):
        return None
    return VariableRecord(name=name.upper(), value=value)
