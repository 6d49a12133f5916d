"""Custom exceptions for VRT journey search."""


class JourneySearchError(Exception):
    """Base exception for journey search errors."""

    pass


class ValidationError(JourneySearchError):
    """Raised when input validation fails."""

    pass


class NetworkError(JourneySearchError):
    """Raised when the trip planner cannot be reached or answers with an error status."""

    pass


class ScrapingError(JourneySearchError):
    """Raised when the returned document cannot be parsed at all."""

    pass


class ExportError(JourneySearchError):
    """Raised when an export file cannot be written or read back."""

    pass
