"""
Data models for Pwned Passwords range lookups and audit results.

Copyright (c) 2025 The pwnedaudit authors.
Licensed under the MIT License.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

# Prefix lengths in hex characters; the range API accepts at most half a SHA-1 digest
MIN_PREFIX_LENGTH = 1
MAX_PREFIX_LENGTH = 20
DEFAULT_PREFIX_LENGTH = 5


class CheckStatus(str, Enum):
    """Classification of one audited item."""

    SKIP = "skip"
    VULN = "vuln"
    SAFE = "safe"
    ERROR = "error"

    @property
    def label(self) -> str:
        return f"[{self.name}]"


@dataclass(frozen=True)
class RangeEntry:
    """One ``SUFFIX:COUNT`` record from a range response."""

    suffix: str
    count: int

    def matches(self, prefix: str, digest: str) -> bool:
        """True if prefix + suffix is exactly the full digest."""
        return (prefix + self.suffix).upper() == digest.upper()


@dataclass(frozen=True)
class RateLimited:
    """The range API asked us to slow down (HTTP 429).

    ``retry_after`` is the server-declared wait in seconds, or None
    when the response carried no Retry-After header.
    """

    retry_after: int | None = None


@dataclass
class AuditItem:
    """A named candidate secret handed to the checker.

    ``secret`` is None when the source rejected the item; ``skip_reason``
    then says why.
    """

    name: str
    secret: bytes | None = None
    skip_reason: str | None = None
    # Text shown next to the name in the final result line
    display: str | None = None

    @property
    def skipped(self) -> bool:
        return self.secret is None


@dataclass
class AuditResult:
    """Outcome of checking one AuditItem."""

    name: str
    index: int
    total: int
    status: CheckStatus
    display: str | None = None
    error: str | None = None
    checked_at: datetime = field(default_factory=datetime.now)

    @property
    def is_pwned(self) -> bool:
        return self.status == CheckStatus.VULN

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "index": self.index,
            "total": self.total,
            "status": self.status.value,
            "is_pwned": self.is_pwned,
            "error": self.error,
            "checked_at": self.checked_at.isoformat(),
        }
