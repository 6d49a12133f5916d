"""Data models for VRT journey search."""

from datetime import date, datetime, time
from enum import Enum
from typing import Any
from urllib.parse import urlencode

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

from .config import TRIP_REQUEST_URL
from .exceptions import ValidationError


class TripDirection(str, Enum):
    """Whether the query time is a departure or an arrival time."""

    DEPARTURE = "dep"
    ARRIVAL = "arr"


class DelayStatus(str, Enum):
    """Realtime status of a journey."""

    DELAYED = "delayed"
    ON_TIME = "on_time"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        """German status text as shown by the trip planner."""
        return _STATUS_LABELS[self]

    @property
    def flag(self) -> bool | None:
        """Boolean view: True when delayed, False when on time, None without realtime data."""
        if self is DelayStatus.DELAYED:
            return True
        if self is DelayStatus.ON_TIME:
            return False
        return None


_STATUS_LABELS = {
    DelayStatus.DELAYED: "Voraussichtlich verspätet",
    DelayStatus.ON_TIME: "Voraussichtlich pünktlich",
    DelayStatus.UNKNOWN: "Keine Echtzeitinformation",
}

_STATUS_BY_FLAG = {True: DelayStatus.DELAYED, False: DelayStatus.ON_TIME}

# inclMOT_* codes: 0 Zug, 5 Stadtbus, 6 Regionalbus, 10 Ruftaxi/-bus
INCLUDED_MEANS_OF_TRANSPORT = ("0", "5", "6", "10")


def format_api_date(value: date | str) -> str:
    """Format a date as DD.MM.YYYY for the trip planner.

    Args:
        value: A date or an ISO date string (YYYY-MM-DD)

    Returns:
        Date string like "07.03.2024"

    Raises:
        ValidationError: If a string is not a valid ISO date
    """
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value.strip())
        except ValueError as e:
            raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD") from e
    return value.strftime("%d.%m.%Y")


class JourneyQuery(BaseModel):
    """A single journey search."""

    model_config = ConfigDict(frozen=True)

    origin: str = Field(..., description="Origin stop, free text")
    destination: str = Field(..., description="Destination stop, free text")
    travel_date: date = Field(..., description="Travel date")
    travel_time: time = Field(..., description="Departure or arrival time")
    direction: TripDirection = Field(
        TripDirection.DEPARTURE, description="Departure after or arrival before"
    )

    @field_validator("origin", "destination")
    @classmethod
    def _require_stop_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("stop name cannot be empty")
        return value

    @field_validator("travel_time")
    @classmethod
    def _truncate_to_minutes(cls, value: time) -> time:
        return value.replace(second=0, microsecond=0)

    @property
    def is_departure(self) -> bool:
        return self.direction is TripDirection.DEPARTURE

    def to_params(self) -> dict[str, str]:
        """Build the trip request query parameters."""
        params = {
            "language": "de",
            "itdLPxx_contractor": "vrt",
            "name_origin": self.origin,
            "type_origin": "any",
            "name_destination": self.destination,
            "type_destination": "any",
            "itdDateDayMonthYear": format_api_date(self.travel_date),
            "itdTime": self.travel_time.strftime("%H:%M"),
            "itdTripDateTimeDepArr": self.direction.value,
            "useRealtime": "1",
        }
        for mot in INCLUDED_MEANS_OF_TRANSPORT:
            params[f"inclMOT_{mot}"] = "true"
        params.update(
            {
                "routeType": "LEASTTIME",
                "trITMOTvalue100": "15",
                "useProxFootSearch": "on",
                "sessionID": "0",
                "requestID": "0",
                "includedMeans": "checkbox",
                "computationType": "sequence",
                "itdLPxx_template": "tripresults_pt_trip",
            }
        )
        return params

    def to_url(self, base_url: str = TRIP_REQUEST_URL) -> str:
        """Convert to the trip planner request URL."""
        return f"{base_url}?{urlencode(self.to_params())}"

    def __str__(self) -> str:
        verb = "ab" if self.is_departure else "an"
        return (
            f"{self.origin} → {self.destination} "
            f"({format_api_date(self.travel_date)} {self.travel_time:%H:%M} {verb})"
        )


class JourneyRecord(BaseModel):
    """One connection from the result list."""

    model_config = ConfigDict(frozen=True)

    departure: str | None = Field(None, description="Departure time (HH:MM)")
    arrival: str | None = Field(None, description="Arrival time (HH:MM)")
    duration: str | None = Field(None, description="Duration, e.g. '42 Min'")
    delay_status: DelayStatus = Field(
        DelayStatus.UNKNOWN, description="Realtime delay status"
    )
    fare: str | None = Field(None, description="Fare, e.g. '3,40 €'")
    transport_modes: tuple[str, ...] | None = Field(
        None, description="Transport mode labels in travel order"
    )

    @model_validator(mode="before")
    @classmethod
    def _delay_status_from_flag(cls, data: Any) -> Any:
        # Export documents carry only the boolean "delayed"
        if isinstance(data, dict) and "delay_status" not in data and "delayed" in data:
            data = dict(data)
            data["delay_status"] = _STATUS_BY_FLAG.get(
                data["delayed"], DelayStatus.UNKNOWN
            )
        return data

    @computed_field  # type: ignore[prop-decorator]
    @property
    def delayed(self) -> bool | None:
        return self.delay_status.flag

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> str:
        return self.delay_status.label

    @computed_field  # type: ignore[prop-decorator]
    @property
    def transport_display(self) -> str | None:
        if not self.transport_modes:
            return None
        return " → ".join(self.transport_modes)

    def to_export_dict(self) -> dict[str, Any]:
        """Dump in the planner's export layout, leaving out absent fields.

        "delayed" is always present (null without realtime data).
        """
        data: dict[str, Any] = {
            "departure": self.departure,
            "arrival": self.arrival,
            "duration": self.duration,
            "delayed": self.delayed,
            "status": self.status,
            "fare": self.fare,
            "transport_modes": list(self.transport_modes) if self.transport_modes else None,
            "transport_display": self.transport_display,
        }
        return {
            key: value
            for key, value in data.items()
            if value is not None or key == "delayed"
        }

    def __str__(self) -> str:
        return (
            f"{self.departure or 'N/A'} → {self.arrival or 'N/A'} "
            f"({self.duration or 'N/A'})"
        )


class JourneySearchResult(BaseModel):
    """Outcome of one search: the query, its records and the raw document."""

    query: JourneyQuery
    journeys: list[JourneyRecord] = Field(default_factory=list)
    raw_html: str = Field("", description="Response body as received")
    retrieved_at: datetime = Field(default_factory=datetime.now)


class JourneyExport(BaseModel):
    """JSON export document: query fields plus all journeys."""

    origin: str
    destination: str
    date: str = Field(..., description="Travel date (YYYY-MM-DD)")
    time: str = Field(..., description="Travel time (HH:MM)")
    departure: bool = Field(True, description="True for departure, False for arrival")
    journeys: list[JourneyRecord] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: JourneySearchResult) -> "JourneyExport":
        query = result.query
        return cls(
            origin=query.origin,
            destination=query.destination,
            date=query.travel_date.isoformat(),
            time=query.travel_time.strftime("%H:%M"),
            departure=query.is_departure,
            journeys=list(result.journeys),
        )

    def to_query(self) -> JourneyQuery:
        """Rebuild the query this export was made from."""
        return JourneyQuery(
            origin=self.origin,
            destination=self.destination,
            travel_date=date.fromisoformat(self.date),
            travel_time=time.fromisoformat(self.time),
            direction=(
                TripDirection.DEPARTURE if self.departure else TripDirection.ARRIVAL
            ),
        )
