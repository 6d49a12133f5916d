"""Core journey search functionality."""

from .config import SearchSettings
from .exceptions import (
    ExportError,
    JourneySearchError,
    NetworkError,
    ScrapingError,
    ValidationError,
)
from .models import (
    DelayStatus,
    JourneyExport,
    JourneyQuery,
    JourneyRecord,
    JourneySearchResult,
    TripDirection,
)
from .parser import parse_journey_results
from .scraper import VRTJourneyScraper
from .startup import LaunchParameters

__all__ = [
    "DelayStatus",
    "JourneyExport",
    "JourneyQuery",
    "JourneyRecord",
    "JourneySearchResult",
    "LaunchParameters",
    "SearchSettings",
    "TripDirection",
    "VRTJourneyScraper",
    "parse_journey_results",
    "JourneySearchError",
    "ValidationError",
    "NetworkError",
    "ScrapingError",
    "ExportError",
]
