"""Core utilities for the fare engine."""

from .exceptions import (
    ConfigurationError,
    FareEngineError,
    InvalidGeometryError,
    InvalidInputError,
    NetworkError,
    NoApplicableFareRuleError,
    PermanentError,
    ServiceUnavailableError,
    TransientError,
)

__all__ = [
    "FareEngineError",
    "TransientError",
    "NetworkError",
    "ServiceUnavailableError",
    "PermanentError",
    "InvalidInputError",
    "InvalidGeometryError",
    "ConfigurationError",
    "NoApplicableFareRuleError",
]
