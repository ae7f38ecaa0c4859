"""Domain models and entities.

Why:
- Pure, strict data structures live here (Pydantic v2).
- The domain knows nothing about HTTP: only ads.txt concepts.
"""

from adstxt.core.domain.models import (
    AdsTxtRequest,
    AdsTxtResponse,
    DataRecord,
    KnownVariable,
    Record,
    Relationship,
    VariableRecord,
)

__all__ = [
    "AdsTxtRequest",
    "AdsTxtResponse",
    "DataRecord",
    "KnownVariable",
    "Record",
    "Relationship",
    "VariableRecord",
]
