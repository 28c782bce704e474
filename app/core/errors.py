"""
Domain errors raised by the event store and the analytics pipeline.

HTTP mapping lives in main.py:
- ValidationError -> 400
- TransientFetchError -> 503 (retryable)
"""


class EcoSortError(Exception):
    """Base class for all EcoSort domain errors."""


class ValidationError(EcoSortError):
    """Rejected input: a scan event or an analytics window. Nothing is stored."""

    def __init__(self, message: str, errors: list | None = None):
        super().__init__(message)
        self.errors = errors or []


class TransientFetchError(EcoSortError):
    """The event store could not be reached. Callers may retry."""
