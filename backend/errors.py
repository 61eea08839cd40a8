"""Service error taxonomy, each carrying the HTTP status it is surfaced with."""
from __future__ import annotations


class ServiceError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(ServiceError):
    """A required credential or setting is missing."""


class UpstreamError(ServiceError):
    """The text-generation call failed or returned a non-success status."""


class RateLimited(UpstreamError):
    status_code = 429


class QuotaExceeded(UpstreamError):
    status_code = 402


class MovieNotFound(ServiceError):
    status_code = 404
