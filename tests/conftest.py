"""Test configuration and fixtures."""

from datetime import date, time

import pytest

from vrt_journey_search.core.models import (
    DelayStatus,
    JourneyQuery,
    JourneyRecord,
    JourneySearchResult,
)


@pytest.fixture
def sample_vrt_response():
    """Sample VRT trip planner HTML response with three result rows."""
    return """
    <div class="std3_result-list">
        <div class="std3_row std3_result-row std3_open-explicit-details">
            <span class="std3_time-container">
                <span class="std3_dep-time">10:04</span> - <span class="std3_arr-time">10:46</span>
            </span>
            <span class="std3_duration">42 Min unterwegs</span>
            <span class="std3_route-ontime-icon"></span>
            <button class="std3_fare_button">Preis: 3,40 €</button>
            <div class="std3_mot-list">
                <span class="std3_mot-label">Zug</span>
                <span class="std3_mot-label"> </span>
                <span class="std3_mot-label">Bus</span>
            </div>
        </div>
        <div class="std3_row std3_result-row std3_open-explicit-details">
            <span class="std3_time-container">10:34 → 11:20</span>
            <span class="std3_duration">46 Min</span>
            <span class="std3_route-delayed-icon"></span>
            <span class="std3_route-ontime-icon"></span>
            <div class="std3_mot-list">
                <span class="std3_mot-label">Stadtbus</span>
            </div>
        </div>
        <div class="std3_row std3_result-row std3_open-explicit-details">
            <span class="std3_duration">unbekannt</span>
        </div>
        <div class="std3_row std3_result-row">
            <span class="std3_time-container">12:00 - 13:00</span>
        </div>
    </div>
    """


@pytest.fixture
def sample_query():
    """Sample journey query."""
    return JourneyQuery(
        origin="Ehrang (Trier), Lindenplatz",
        destination="Theater Trier, Trier",
        travel_date=date(2024, 3, 7),
        travel_time=time(10, 0),
    )


@pytest.fixture
def sample_journeys():
    """Sample journey records."""
    return [
        JourneyRecord(
            departure="10:04",
            arrival="10:46",
            duration="42 Min",
            delay_status=DelayStatus.ON_TIME,
            fare="3,40 €",
            transport_modes=("Zug", "Bus"),
        ),
        JourneyRecord(
            departure="10:34",
            arrival="11:20",
            duration="46 Min",
            delay_status=DelayStatus.DELAYED,
            transport_modes=("Stadtbus",),
        ),
        JourneyRecord(),
    ]


@pytest.fixture
def sample_result(sample_query, sample_journeys, sample_vrt_response):
    """Sample search result."""
    return JourneySearchResult(
        query=sample_query, journeys=sample_journeys, raw_html=sample_vrt_response
    )
