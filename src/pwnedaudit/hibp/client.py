"""
Pwned Passwords range API client.

Implements the k-anonymity half of the breach check:
- SHA-1 digest of a candidate secret
- Range query for a short digest prefix
- Parsing of the SUFFIX:COUNT response
- Explicit RateLimited result on HTTP 429

Only the prefix handed to fetch_candidates() is ever sent over the wire.

Copyright (c) 2025 The pwnedaudit authors.
Licensed under the MIT License.
"""

import asyncio
import hashlib
import logging
import string

import aiohttp

from pwnedaudit.hibp.errors import ConfigurationError, ProtocolError, TransportError
from pwnedaudit.hibp.models import (
    MAX_PREFIX_LENGTH,
    MIN_PREFIX_LENGTH,
    RangeEntry,
    RateLimited,
)

logger = logging.getLogger(__name__)

_HEX_DIGITS = frozenset(string.hexdigits)


def parse_range_response(text: str) -> list[RangeEntry]:
    """Parse a range response body into RangeEntry records.

    Blank lines are ignored. Lines without a ``:`` separator or with a
    non-decimal count are skipped.
    """
    entries = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue

        suffix, sep, count = line.partition(":")
        count = count.strip()
        if not sep or not suffix or not count.isdecimal():
            logger.debug("Skipping malformed range record")
            continue

        entries.append(RangeEntry(suffix=suffix.strip().upper(), count=int(count)))

    return entries


def parse_retry_after(value: str | None) -> int | None:
    """Parse a Retry-After header holding a whole number of seconds.

    Returns None when the header is absent. Raises ProtocolError for
    anything that is not a non-negative decimal integer.
    """
    if value is None:
        return None

    value = value.strip()
    if not value.isdecimal():
        raise ProtocolError(f"Invalid Retry-After header in range response: {value!r}", status=429)
    return int(value)


class HashRangeQuery:
    """Client for the Pwned Passwords ``/range/{prefix}`` endpoint.

    One instance holds one HTTP session and is meant to be used for the
    lifetime of an audit run.
    """

    DEFAULT_BASE_URL = "https://api.pwnedpasswords.com"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = "pwnedaudit",
        add_padding: bool = False,
        session: aiohttp.ClientSession | None = None,
    ):
        """Initialize the range client.

        Args:
            base_url: Range API base address
            timeout: Total request timeout in seconds
            user_agent: User-Agent header for requests
            add_padding: Ask the API to pad responses with decoy records
            session: Existing session to use (left open on close)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self.add_padding = add_padding
        self._session = session
        self._owns_session = session is None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure HTTP session exists."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close HTTP session if we created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "HashRangeQuery":
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    @staticmethod
    def digest(secret: bytes) -> str:
        """Uppercase hex SHA-1 of the raw secret bytes.

        Nothing is trimmed or normalised; trailing whitespace changes
        the digest.
        """
        return hashlib.sha1(secret).hexdigest().upper()

    @staticmethod
    def validate_prefix(prefix: str) -> str:
        """Return the prefix uppercased, or raise ConfigurationError."""
        if not MIN_PREFIX_LENGTH <= len(prefix) <= MAX_PREFIX_LENGTH:
            raise ConfigurationError(
                f"Prefix must be {MIN_PREFIX_LENGTH} to {MAX_PREFIX_LENGTH} "
                f"hex characters, got {len(prefix)}"
            )
        if not _HEX_DIGITS.issuperset(prefix):
            raise ConfigurationError("Prefix must contain only hex characters")
        return prefix.upper()

    async def fetch_candidates(self, prefix: str) -> list[RangeEntry] | RateLimited:
        """Fetch the candidate suffixes for a digest prefix.

        Args:
            prefix: 1-20 hex characters of a SHA-1 digest

        Returns:
            Parsed records in response order, or RateLimited on HTTP 429

        Raises:
            ConfigurationError: prefix is not 1-20 hex characters
            TransportError: the API could not be reached
            ProtocolError: any other non-success response
        """
        prefix = self.validate_prefix(prefix)
        url = f"{self.base_url}/range/{prefix}"

        headers = {"User-Agent": self.user_agent}
        if self.add_padding:
            headers["Add-Padding"] = "true"

        session = await self._ensure_session()

        logger.debug(f"Querying range for prefix {prefix}")

        try:
            async with session.get(
                url,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                status = response.status

                if status == 200:
                    try:
                        text = await response.text(encoding="utf-8")
                    except UnicodeDecodeError as e:
                        raise ProtocolError("Range response is not valid UTF-8", status=status) from e
                    entries = parse_range_response(text)
                    logger.debug(f"Range {prefix} returned {len(entries)} records")
                    return entries

                if status == 429:
                    retry_after = parse_retry_after(response.headers.get("Retry-After"))
                    return RateLimited(retry_after=retry_after)

                body = await response.text(errors="replace")
                raise ProtocolError(
                    f"Unexpected range API response: HTTP {status}: {body[:200]}",
                    status=status,
                )

        except asyncio.TimeoutError as e:
            raise TransportError(f"Range request timed out after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Range request failed: {e}") from e
