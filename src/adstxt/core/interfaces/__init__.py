"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) implemented by concrete adapters.
- Inverts dependencies: the core depends on abstractions.
"""

from adstxt.core.interfaces.handler import ResultHandler
from adstxt.core.interfaces.transport import AdsTxtTransport, TransportResponse

__all__ = [
    "AdsTxtTransport",
    "ResultHandler",
    "TransportResponse",
]
