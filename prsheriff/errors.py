"""Exceptions raised by pr-sheriff outside of title validation."""
from typing import Optional


class SheriffError(Exception):
    """Base class for pr-sheriff errors."""


class IgnoreSourceError(SheriffError):
    """The ignore-authors list could not be read or fetched."""

    def __init__(self, message: str, source: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.source = source
        self.status_code = status_code


class EventPayloadError(SheriffError):
    """The CI event payload is missing or is not a pull-request event."""
