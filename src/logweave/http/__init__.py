"""HTTP message formatting for integration records."""

from .formatter import REDACTED, HttpPairFormatter

__all__ = [
    "HttpPairFormatter",
    "REDACTED",
]
