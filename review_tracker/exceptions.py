"""Exception hierarchy for the review tracker."""

from typing import Any, Optional


class ReviewTrackerError(Exception):
    """Base class for all review tracker errors."""


class ConfigError(ReviewTrackerError):
    """Raised when required configuration (e.g. the API token) is missing or invalid."""


class FetchError(ReviewTrackerError):
    """Raised when a page could not be fetched from the API."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message
        self.url = url
        self.status_code = status_code
        super().__init__(self.message)

    def __str__(self) -> str:
        details = []
        if self.status_code is not None:
            details.append(f"status={self.status_code}")
        if self.url:
            details.append(f"url={self.url}")
        if details:
            return f"{self.message} ({', '.join(details)})"
        return self.message


class ParseError(ReviewTrackerError):
    """Raised when a raw API record cannot be turned into a typed record."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value
        super().__init__(self.message)
