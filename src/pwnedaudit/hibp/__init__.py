"""
Pwned Passwords (HIBP) breach checking.

Checks passwords with the k-anonymity range API: only a short prefix
of each SHA-1 hash is sent, and matches are confirmed locally.

Copyright (c) 2025 The pwnedaudit authors.
Licensed under the MIT License.
"""

from pwnedaudit.hibp.errors import (
    BreachCheckError,
    ConfigurationError,
    ProtocolError,
    RetryLimitExceeded,
    TransportError,
)
from pwnedaudit.hibp.models import (
    AuditItem,
    AuditResult,
    CheckStatus,
    RangeEntry,
    RateLimited,
)
from pwnedaudit.hibp.client import HashRangeQuery
from pwnedaudit.hibp.checker import BreachChecker
from pwnedaudit.hibp.config import CheckerConfig

__all__ = [
    "HashRangeQuery",
    "BreachChecker",
    "CheckerConfig",
    "AuditItem",
    "AuditResult",
    "CheckStatus",
    "RangeEntry",
    "RateLimited",
    "BreachCheckError",
    "ConfigurationError",
    "ProtocolError",
    "RetryLimitExceeded",
    "TransportError",
]
