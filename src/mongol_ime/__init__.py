"""Host-agnostic composition engine for traditional Mongolian script input."""

__all__ = [
    "adapters",
    "buffer",
    "engine",
    "host",
    "runtime",
    "script",
]

__version__ = "0.1.0"
