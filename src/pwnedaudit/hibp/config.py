"""
Configuration for the breach checker.

Copyright (c) 2025 The pwnedaudit authors.
Licensed under the MIT License.
"""

import os
from dataclasses import dataclass
from typing import Any

import aiohttp

from pwnedaudit import __version__
from pwnedaudit.hibp.checker import BreachChecker
from pwnedaudit.hibp.client import HashRangeQuery
from pwnedaudit.hibp.errors import ConfigurationError
from pwnedaudit.hibp.models import (
    DEFAULT_PREFIX_LENGTH,
    MAX_PREFIX_LENGTH,
    MIN_PREFIX_LENGTH,
)


def _env_bool(name: str, default: str = "") -> bool:
    return os.environ.get(name, default).lower() in ("true", "yes", "1")


def _env_number(name: str, cast: Any, default: Any) -> Any:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    try:
        return cast(value)
    except ValueError as e:
        raise ConfigurationError(f"Invalid {name}: {value!r}") from e


@dataclass
class CheckerConfig:
    """Settings shared by every check in a process."""

    # Range API
    api_base: str = "https://api.pwnedpasswords.com"
    timeout: float = 30.0
    user_agent: str = f"pwnedaudit/{__version__}"
    add_padding: bool = False

    # Query shape
    prefix_length: int = DEFAULT_PREFIX_LENGTH

    # Pacing and throttling
    min_interval: float = 0.5  # seconds between checks
    retry_margin: float = 0.1  # added on top of Retry-After
    max_retries: int | None = None  # None keeps retrying while the server asks

    @classmethod
    def from_env(cls) -> "CheckerConfig":
        """Load configuration from environment variables.

        Raises ConfigurationError when a numeric variable does not parse.
        """
        return cls(
            api_base=os.environ.get("PWNEDAUDIT_API_BASE", cls.api_base),
            timeout=_env_number("PWNEDAUDIT_TIMEOUT", float, cls.timeout),
            user_agent=os.environ.get("PWNEDAUDIT_USER_AGENT", cls.user_agent),
            add_padding=_env_bool("PWNEDAUDIT_ADD_PADDING"),
            prefix_length=_env_number("PWNEDAUDIT_PREFIX_LENGTH", int, cls.prefix_length),
            min_interval=_env_number("PWNEDAUDIT_MIN_INTERVAL", float, cls.min_interval),
            retry_margin=_env_number("PWNEDAUDIT_RETRY_MARGIN", float, cls.retry_margin),
            max_retries=_env_number("PWNEDAUDIT_MAX_RETRIES", int, None),
        )

    def validate(self) -> list[str]:
        """Validate configuration. Returns list of errors."""
        errors = []

        if not self.api_base.startswith(("http://", "https://")):
            errors.append("API base must be an http(s) URL")
        if not MIN_PREFIX_LENGTH <= self.prefix_length <= MAX_PREFIX_LENGTH:
            errors.append(
                f"Prefix length must be between {MIN_PREFIX_LENGTH} and {MAX_PREFIX_LENGTH}"
            )
        if self.timeout <= 0:
            errors.append("Timeout must be positive")
        if self.min_interval < 0:
            errors.append("Minimum interval cannot be negative")
        if self.retry_margin < 0:
            errors.append("Retry margin cannot be negative")
        if self.max_retries is not None and self.max_retries < 0:
            errors.append("Max retries cannot be negative")

        return errors

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "api_base": self.api_base,
            "timeout": self.timeout,
            "user_agent": self.user_agent,
            "add_padding": self.add_padding,
            "prefix_length": self.prefix_length,
            "min_interval": self.min_interval,
            "retry_margin": self.retry_margin,
            "max_retries": self.max_retries,
        }

    def create_query(self, session: aiohttp.ClientSession | None = None) -> HashRangeQuery:
        """Build a HashRangeQuery for this configuration."""
        return HashRangeQuery(
            base_url=self.api_base,
            timeout=self.timeout,
            user_agent=self.user_agent,
            add_padding=self.add_padding,
            session=session,
        )

    def create_checker(self, session: aiohttp.ClientSession | None = None) -> BreachChecker:
        """Build a BreachChecker (and its HashRangeQuery) for this configuration."""
        errors = self.validate()
        if errors:
            raise ConfigurationError("; ".join(errors))

        return BreachChecker(
            self.create_query(session=session),
            min_interval=self.min_interval,
            retry_margin=self.retry_margin,
            max_retries=self.max_retries,
        )
