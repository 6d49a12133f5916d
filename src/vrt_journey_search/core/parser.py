"""Extraction of journey records from the trip planner result page."""

import logging
import re

from bs4 import BeautifulSoup, Tag

from .exceptions import ScrapingError
from .models import DelayStatus, JourneyRecord

logger = logging.getLogger(__name__)

RESULT_ROW_SELECTOR = "div.std3_row.std3_result-row.std3_open-explicit-details"
TIME_CONTAINER_SELECTOR = "span.std3_time-container"
DURATION_SELECTOR = "span.std3_duration"
DELAYED_ICON_SELECTOR = "span.std3_route-delayed-icon"
ONTIME_ICON_SELECTOR = "span.std3_route-ontime-icon"
FARE_BUTTON_SELECTOR = "button.std3_fare_button"
MOT_LABEL_SELECTOR = "span.std3_mot-label"

TIME_PATTERN = re.compile(r"(\d{2}:\d{2})[^0-9]*(\d{2}:\d{2})")
DURATION_PATTERN = re.compile(r"(\d+)\s*Min")
FARE_PATTERN = re.compile(r"([\d,]+\s*€)")


def parse_journey_results(html_content: str) -> list[JourneyRecord]:
    """Parse every result row of a trip planner page.

    Args:
        html_content: HTML text as returned by the trip request endpoint

    Returns:
        Journey records in document order, empty if the page has no result rows

    Raises:
        ScrapingError: If the input cannot be parsed as a document at all
    """
    if not isinstance(html_content, str):
        raise ScrapingError(
            f"Failed to parse journey data: expected text, got {type(html_content).__name__}"
        )

    soup = BeautifulSoup(html_content, "html.parser")
    rows = soup.select(RESULT_ROW_SELECTOR)
    logger.debug("Found %d result rows", len(rows))

    return [parse_journey_row(row) for row in rows]


def parse_journey_row(row: Tag) -> JourneyRecord:
    """Extract one journey record from a result row element."""
    departure, arrival = _extract_times(row)
    return JourneyRecord(
        departure=departure,
        arrival=arrival,
        duration=_extract_duration(row),
        delay_status=_extract_delay_status(row),
        fare=_extract_fare(row),
        transport_modes=_extract_transport_modes(row),
    )


def _extract_times(row: Tag) -> tuple[str | None, str | None]:
    time_container = row.select_one(TIME_CONTAINER_SELECTOR)
    if not time_container:
        return None, None

    # e.g. "10:04 - 10:46"
    match = TIME_PATTERN.search(time_container.get_text().strip())
    if not match:
        return None, None
    return match.group(1), match.group(2)


def _extract_duration(row: Tag) -> str | None:
    duration_span = row.select_one(DURATION_SELECTOR)
    if not duration_span:
        return None

    match = DURATION_PATTERN.search(duration_span.get_text().strip())
    return f"{match.group(1)} Min" if match else None


def _extract_delay_status(row: Tag) -> DelayStatus:
    # Delayed wins if a row ever carries both icons
    if row.select_one(DELAYED_ICON_SELECTOR):
        return DelayStatus.DELAYED
    if row.select_one(ONTIME_ICON_SELECTOR):
        return DelayStatus.ON_TIME
    return DelayStatus.UNKNOWN


def _extract_fare(row: Tag) -> str | None:
    fare_button = row.select_one(FARE_BUTTON_SELECTOR)
    if not fare_button:
        return None

    match = FARE_PATTERN.search(fare_button.get_text().strip())
    return match.group(1) if match else None


def _extract_transport_modes(row: Tag) -> tuple[str, ...] | None:
    modes = []
    for label in row.select(MOT_LABEL_SELECTOR):
        mode = label.get_text().strip()
        if mode:
            modes.append(mode)
    return tuple(modes) if modes else None
