"""Error types shared by the writer, the aggregator and the API layer."""

from __future__ import annotations

from core.constants import NOT_CONFIGURED_MESSAGE


class SatRateError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(SatRateError):
    """The key-value store binding is missing or unusable."""

    def __init__(self, message: str = NOT_CONFIGURED_MESSAGE) -> None:
        super().__init__(message)


class BadRequestError(SatRateError):
    """The request body could not be decoded into a submission."""

    status_code = 400


class StoreError(SatRateError):
    """The key-value store rejected a read, write or list call."""


__all__ = ["SatRateError", "ConfigurationError", "BadRequestError", "StoreError"]
