"""Unit tests for data models."""

from datetime import date, time
from urllib.parse import parse_qs, urlparse

import pytest
from pydantic import ValidationError as PydanticValidationError

from vrt_journey_search.core.exceptions import ValidationError
from vrt_journey_search.core.models import (
    DelayStatus,
    JourneyExport,
    JourneyQuery,
    JourneyRecord,
    TripDirection,
    format_api_date,
)


class TestFormatApiDate:
    """Test API date formatting."""

    def test_iso_string(self):
        assert format_api_date("2024-03-07") == "07.03.2024"

    def test_date_object(self):
        assert format_api_date(date(2024, 12, 31)) == "31.12.2024"

    def test_malformed_string(self):
        """Test that a malformed date is rejected instead of passed on."""
        with pytest.raises(ValidationError, match="Invalid date"):
            format_api_date("07/03/2024")


class TestJourneyQuery:
    """Test JourneyQuery model."""

    def test_params(self, sample_query):
        """Test the trip request parameters."""
        params = sample_query.to_params()

        assert params["language"] == "de"
        assert params["itdLPxx_contractor"] == "vrt"
        assert params["name_origin"] == "Ehrang (Trier), Lindenplatz"
        assert params["type_origin"] == "any"
        assert params["name_destination"] == "Theater Trier, Trier"
        assert params["type_destination"] == "any"
        assert params["itdDateDayMonthYear"] == "07.03.2024"
        assert params["itdTime"] == "10:00"
        assert params["itdTripDateTimeDepArr"] == "dep"
        assert params["useRealtime"] == "1"
        for mot in ("0", "5", "6", "10"):
            assert params[f"inclMOT_{mot}"] == "true"
        assert params["routeType"] == "LEASTTIME"
        assert params["trITMOTvalue100"] == "15"
        assert params["useProxFootSearch"] == "on"
        assert params["sessionID"] == "0"
        assert params["requestID"] == "0"
        assert params["includedMeans"] == "checkbox"
        assert params["computationType"] == "sequence"
        assert params["itdLPxx_template"] == "tripresults_pt_trip"

    def test_arrival_flag(self):
        query = JourneyQuery(
            origin="Trier Hbf",
            destination="Konz",
            travel_date=date(2024, 3, 7),
            travel_time=time(18, 0),
            direction=TripDirection.ARRIVAL,
        )
        assert query.to_params()["itdTripDateTimeDepArr"] == "arr"
        assert query.is_departure is False

    def test_to_url(self, sample_query):
        """Test URL building round-trips the parameters."""
        url = sample_query.to_url()
        parsed = urlparse(url)

        assert parsed.netloc == "www.vrt-info.de"
        assert parsed.path == "/fahrplanauskunft/XSLT_TRIP_REQUEST2"
        params = parse_qs(parsed.query)
        assert params["name_origin"] == ["Ehrang (Trier), Lindenplatz"]
        assert params["itdDateDayMonthYear"] == ["07.03.2024"]

    def test_seconds_are_dropped(self):
        query = JourneyQuery(
            origin="A",
            destination="B",
            travel_date=date(2024, 3, 7),
            travel_time=time(9, 5, 42),
        )
        assert query.travel_time == time(9, 5)

    def test_empty_stop_rejected(self):
        with pytest.raises(PydanticValidationError):
            JourneyQuery(
                origin="  ",
                destination="B",
                travel_date=date(2024, 3, 7),
                travel_time=time(9, 5),
            )

    def test_frozen(self, sample_query):
        with pytest.raises(PydanticValidationError):
            sample_query.origin = "Anderswo"

    def test_str(self, sample_query):
        assert str(sample_query) == (
            "Ehrang (Trier), Lindenplatz → Theater Trier, Trier (07.03.2024 10:00 ab)"
        )


class TestJourneyRecord:
    """Test JourneyRecord model."""

    def test_defaults(self):
        journey = JourneyRecord()
        assert journey.delay_status == DelayStatus.UNKNOWN
        assert journey.delayed is None
        assert journey.transport_display is None
        assert str(journey) == "N/A → N/A (N/A)"

    def test_dump_includes_derived_fields(self, sample_journeys):
        data = sample_journeys[0].model_dump(mode="json")
        assert data["delayed"] is False
        assert data["status"] == "Voraussichtlich pünktlich"
        assert data["transport_modes"] == ["Zug", "Bus"]
        assert data["transport_display"] == "Zug → Bus"

    def test_validate_from_dump(self, sample_journeys):
        """Test that a dump including derived fields validates back to an equal record."""
        for journey in sample_journeys:
            restored = JourneyRecord.model_validate(journey.model_dump(mode="json"))
            assert restored == journey

    def test_delay_status_from_flag(self):
        """Test that export dicts without delay_status rebuild it from "delayed"."""
        assert JourneyRecord.model_validate({"delayed": True}).delay_status == DelayStatus.DELAYED
        assert JourneyRecord.model_validate({"delayed": False}).delay_status == DelayStatus.ON_TIME
        assert JourneyRecord.model_validate({"delayed": None}).delay_status == DelayStatus.UNKNOWN

    def test_export_dict(self, sample_journeys):
        assert sample_journeys[1].to_export_dict() == {
            "departure": "10:34",
            "arrival": "11:20",
            "duration": "46 Min",
            "delayed": True,
            "status": "Voraussichtlich verspätet",
            "transport_modes": ["Stadtbus"],
            "transport_display": "Stadtbus",
        }

    def test_validate_from_export_dict(self, sample_journeys):
        for journey in sample_journeys:
            assert JourneyRecord.model_validate(journey.to_export_dict()) == journey


class TestJourneyExport:
    """Test JourneyExport model."""

    def test_from_result(self, sample_result):
        export = JourneyExport.from_result(sample_result)
        assert export.origin == "Ehrang (Trier), Lindenplatz"
        assert export.date == "2024-03-07"
        assert export.time == "10:00"
        assert export.departure is True
        assert len(export.journeys) == 3

    def test_to_query(self, sample_result):
        export = JourneyExport.from_result(sample_result)
        assert export.to_query() == sample_result.query
