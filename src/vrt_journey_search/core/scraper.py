"""VRT trip planner client."""

import logging
from collections.abc import Callable
from datetime import date, datetime, time
from urllib.parse import quote

import requests
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .config import SearchSettings
from .exceptions import ExportError, NetworkError, ValidationError
from .models import JourneyQuery, JourneySearchResult, TripDirection
from .parser import parse_journey_results

logger = logging.getLogger(__name__)

SearchCallback = Callable[[JourneySearchResult], None]


class VRTJourneyScraper:
    """Scraper for VRT trip planner connections."""

    def __init__(self, settings: SearchSettings | None = None, timeout: int | None = None):
        """Initialize the scraper.

        Args:
            settings: Endpoint, relay and retry settings (defaults when omitted)
            timeout: Request timeout in seconds, overrides the settings value
        """
        self.settings = settings or SearchSettings()
        self.timeout = timeout if timeout is not None else self.settings.timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "User-Agent": self.settings.user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "de-DE,de;q=0.9,en;q=0.8",
            }
        )

    def build_request_url(self, query: JourneyQuery) -> str:
        """Build the URL to fetch, wrapped by the relay when one is configured."""
        url = query.to_url(self.settings.base_url)
        if self.settings.relay_url:
            return self.settings.relay_url + quote(url, safe="!~*'()")
        return url

    def search_journeys(
        self,
        origin: str,
        destination: str,
        travel_date: date | None = None,
        travel_time: time | None = None,
        direction: TripDirection = TripDirection.DEPARTURE,
        save_html_path: str | None = None,
        on_complete: SearchCallback | None = None,
    ) -> JourneySearchResult:
        """Search for connections between two stops.

        Args:
            origin: Origin stop name
            destination: Destination stop name
            travel_date: Travel date, today when omitted
            travel_time: Departure or arrival time, now when omitted
            direction: Whether travel_time is a departure or an arrival time
            save_html_path: Optional path to save the raw HTML response
            on_complete: Called with the result once the search succeeded

        Returns:
            Search result with the parsed journeys (possibly none)

        Raises:
            ValidationError: If a stop name is empty
            NetworkError: If the request fails
            ScrapingError: If the response cannot be parsed
            ExportError: If the raw HTML cannot be saved
        """
        if not origin or not origin.strip():
            raise ValidationError("Origin stop name cannot be empty")
        if not destination or not destination.strip():
            raise ValidationError("Destination stop name cannot be empty")

        now = datetime.now()
        query = JourneyQuery(
            origin=origin,
            destination=destination,
            travel_date=travel_date or now.date(),
            travel_time=travel_time or now.time(),
            direction=direction,
        )
        return self.search(query, save_html_path=save_html_path, on_complete=on_complete)

    def search(
        self,
        query: JourneyQuery,
        save_html_path: str | None = None,
        on_complete: SearchCallback | None = None,
    ) -> JourneySearchResult:
        """Run a search for an already built query."""
        logger.info("Searching journeys: %s", query)
        html_content = self._fetch_with_retry(self.build_request_url(query))

        if save_html_path:
            try:
                with open(save_html_path, "w", encoding="utf-8") as f:
                    f.write(html_content)
            except OSError as e:
                raise ExportError(
                    f"Failed to save HTML {save_html_path}: {str(e)}"
                ) from e

        journeys = parse_journey_results(html_content)
        logger.info("Parsed %d journeys", len(journeys))

        result = JourneySearchResult(
            query=query, journeys=journeys, raw_html=html_content
        )
        if on_complete is not None:
            on_complete(result)
        return result

    def _fetch_with_retry(self, url: str) -> str:
        retryer = Retrying(
            stop=stop_after_attempt(self.settings.max_attempts),
            wait=wait_exponential(multiplier=1, min=4, max=10),
            retry=retry_if_exception_type(NetworkError),
            reraise=True,
        )
        return retryer(self._fetch_journey_page, url)

    def _fetch_journey_page(self, url: str) -> str:
        """Fetch the trip planner result page.

        Args:
            url: Request URL

        Returns:
            HTML content as string

        Raises:
            NetworkError: If the request fails or returns a non-success status
        """
        try:
            logger.debug("GET %s", url)
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            # Without an explicit charset requests falls back to ISO-8859-1
            if "charset" not in response.headers.get("Content-Type", "").lower():
                response.encoding = "utf-8"
            return response.text

        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Failed to fetch journey data: {str(e)}") from e
