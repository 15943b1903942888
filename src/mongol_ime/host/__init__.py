"""Host-facing contracts and the fail-safe connection wrapper."""

from .connection import HostConnection
from .errors import HostConnectionError
from .protocols import ContextOracle, DataSource, ExtractedText

__all__ = [
    "ContextOracle",
    "DataSource",
    "ExtractedText",
    "HostConnection",
    "HostConnectionError",
]
