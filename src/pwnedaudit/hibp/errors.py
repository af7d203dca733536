"""
Error types raised by the breach check client.

Copyright (c) 2025 The pwnedaudit authors.
Licensed under the MIT License.
"""


class BreachCheckError(Exception):
    """Base class for all breach check errors."""

    pass


class ConfigurationError(BreachCheckError):
    """Invalid prefix length, prefix text or checker setting.

    Raised before any request is made; never retried.
    """

    pass


class TransportError(BreachCheckError):
    """The range API could not be reached (connection failure or timeout)."""

    pass


class ProtocolError(BreachCheckError):
    """The range API answered in a way that breaks its contract."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class RetryLimitExceeded(ProtocolError):
    """Throttling persisted past the configured retry ceiling."""

    pass
