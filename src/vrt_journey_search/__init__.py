"""VRT Journey Search Package

A Python package for searching public-transport connections in the
Verkehrsverbund Region Trier with CLI and MCP client capabilities.
"""

__version__ = "0.1.0"

from .core.models import JourneyQuery, JourneyRecord
from .core.parser import parse_journey_results
from .core.scraper import VRTJourneyScraper

__all__ = ["JourneyQuery", "JourneyRecord", "VRTJourneyScraper", "parse_journey_results"]
