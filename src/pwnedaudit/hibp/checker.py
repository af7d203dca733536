"""
Breach checker: pacing, exact-match confirmation and throttle recovery
on top of HashRangeQuery.

Each check moves through Idle -> Paced -> Querying and ends Matched,
NotMatched or Failed. A throttled query waits the server-declared
interval and queries again with the same prefix.

Copyright (c) 2025 The pwnedaudit authors.
Licensed under the MIT License.
"""

import asyncio
import logging
import time
from typing import AsyncIterator, Iterable

from pwnedaudit.hibp.client import HashRangeQuery
from pwnedaudit.hibp.errors import (
    BreachCheckError,
    ConfigurationError,
    ProtocolError,
    RetryLimitExceeded,
)
from pwnedaudit.hibp.models import (
    DEFAULT_PREFIX_LENGTH,
    MAX_PREFIX_LENGTH,
    MIN_PREFIX_LENGTH,
    AuditItem,
    AuditResult,
    CheckStatus,
    RateLimited,
)

logger = logging.getLogger(__name__)


class BreachChecker:
    """Check secrets one at a time against the range API."""

    DEFAULT_MIN_INTERVAL = 0.5  # seconds between checks
    DEFAULT_RETRY_MARGIN = 0.1  # seconds added to Retry-After

    def __init__(
        self,
        query: HashRangeQuery,
        min_interval: float = DEFAULT_MIN_INTERVAL,
        retry_margin: float = DEFAULT_RETRY_MARGIN,
        max_retries: int | None = None,
    ):
        """Initialize the checker.

        Args:
            query: Range client used for every lookup
            min_interval: Minimum seconds between consecutive checks
            retry_margin: Seconds added to each server-declared wait
            max_retries: Throttle retries allowed per check (None: no limit)
        """
        self.query = query
        self.min_interval = min_interval
        self.retry_margin = retry_margin
        self.max_retries = max_retries
        self._last_request_time: float | None = None

    async def __aenter__(self) -> "BreachChecker":
        await self.query.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.query.close()

    async def _pace(self) -> None:
        """Wait until min_interval has passed since the previous request."""
        if self._last_request_time is not None:
            elapsed = time.monotonic() - self._last_request_time
            if elapsed < self.min_interval:
                await asyncio.sleep(self.min_interval - elapsed)

    async def check(self, secret: bytes, prefix_length: int = DEFAULT_PREFIX_LENGTH) -> bool:
        """Check whether a secret appears in the breach corpus.

        Pacing only spaces requests apart: the first check of a run goes
        out at once, later checks wait until min_interval has passed since
        the previous request (a throttled retry counts as one). Retries
        themselves wait only the server-declared interval.

        Args:
            secret: Exact bytes of the candidate password (NOT logged)
            prefix_length: Digest hex characters disclosed to the API

        Returns:
            True if the full digest was found in the range response

        Raises:
            ConfigurationError: prefix_length outside 1-20
            TransportError: the API could not be reached
            ProtocolError: unexpected response, or a 429 the server gave
                no usable Retry-After for
            RetryLimitExceeded: throttled more than max_retries times
        """
        if not MIN_PREFIX_LENGTH <= prefix_length <= MAX_PREFIX_LENGTH:
            raise ConfigurationError(
                f"Prefix length must be between {MIN_PREFIX_LENGTH} and "
                f"{MAX_PREFIX_LENGTH}, the hex length of a full SHA-1 range key"
            )

        await self._pace()

        digest = self.query.digest(secret)
        prefix = digest[:prefix_length]
        retries = 0

        while True:
            self._last_request_time = time.monotonic()
            candidates = await self.query.fetch_candidates(prefix)

            if not isinstance(candidates, RateLimited):
                return any(entry.matches(prefix, digest) for entry in candidates)

            if candidates.retry_after is None:
                raise ProtocolError(
                    "Range API throttled the request without a Retry-After header",
                    status=429,
                )

            if self.max_retries is not None and retries >= self.max_retries:
                raise RetryLimitExceeded(
                    f"Still throttled after {retries} retries",
                    status=429,
                )

            delay = candidates.retry_after + self.retry_margin
            logger.warning(f"Rate limited. Retrying in {delay:.1f}s")
            await asyncio.sleep(delay)
            retries += 1

    async def check_items(
        self,
        items: Iterable[AuditItem],
        prefix_length: int = DEFAULT_PREFIX_LENGTH,
        stop_on_error: bool = True,
    ) -> AsyncIterator[AuditResult]:
        """Check a sequence of named secrets, strictly in order.

        Skipped items are reported without touching the network. With
        stop_on_error, the first failure is raised; otherwise it is
        reported as an ERROR result and the run continues.

        Yields:
            AuditResult for each item
        """
        items = list(items)
        total = len(items)

        for index, item in enumerate(items, start=1):
            if item.skipped:
                yield AuditResult(
                    name=item.name,
                    index=index,
                    total=total,
                    status=CheckStatus.SKIP,
                    display=item.display,
                    error=item.skip_reason,
                )
                continue

            try:
                pwned = await self.check(item.secret, prefix_length)
            except ConfigurationError:
                raise
            except BreachCheckError as e:
                if stop_on_error:
                    raise
                logger.error(f"Check failed for {item.name}: {e}")
                yield AuditResult(
                    name=item.name,
                    index=index,
                    total=total,
                    status=CheckStatus.ERROR,
                    display=item.display,
                    error=str(e),
                )
                continue

            yield AuditResult(
                name=item.name,
                index=index,
                total=total,
                status=CheckStatus.VULN if pwned else CheckStatus.SAFE,
                display=item.display,
            )
