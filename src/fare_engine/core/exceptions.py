"""Standardized exception hierarchy for the fare engine."""

from typing import Any


class FareEngineError(Exception):
    """Base exception for all fare engine errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TransientError(FareEngineError):
    """Errors that may succeed on retry."""

    pass


class NetworkError(TransientError):
    """Network-related transient errors (timeout, connection refused)."""

    pass


class ServiceUnavailableError(TransientError):
    """External service temporarily unavailable (5xx responses)."""

    pass


class PermanentError(FareEngineError):
    """Errors that will not succeed on retry."""

    pass


class InvalidInputError(PermanentError):
    """Negative distance/duration, bad multipliers or unusable documents."""

    pass


class InvalidGeometryError(PermanentError):
    """Zone polygon is malformed (unclosed ring, too few distinct points)."""

    pass


class ConfigurationError(PermanentError):
    """Missing or invalid configuration."""

    pass


class NoApplicableFareRuleError(ConfigurationError):
    """No fare rule matched any tier of the resolution cascade."""

    pass
