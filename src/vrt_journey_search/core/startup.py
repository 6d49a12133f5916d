"""Launch parameters (von, nach, reverse, json) read from a link's query string."""

from urllib.parse import parse_qs

from pydantic import BaseModel, Field

TRUE_VALUES = {"", "1", "true", "yes", "on"}


def _parse_flag(values: list[str] | None) -> bool:
    if not values:
        return False
    return values[0].strip().lower() in TRUE_VALUES


class LaunchParameters(BaseModel):
    """Overrides applied once when a search is started from a link."""

    von: str | None = Field(None, description="Origin override")
    nach: str | None = Field(None, description="Destination override")
    reverse: bool = Field(False, description="Swap origin and destination after overrides")
    auto_json: bool = Field(
        False, description="Search right away and export JSON when it succeeds"
    )

    @classmethod
    def from_query_string(cls, query_string: str) -> "LaunchParameters":
        """Parse e.g. "?von=Trier%20Hbf&nach=Konz&reverse=1&json=true"."""
        params = parse_qs(query_string.lstrip("?"), keep_blank_values=True)
        von = params.get("von", [None])[0]
        nach = params.get("nach", [None])[0]
        return cls(
            von=von or None,
            nach=nach or None,
            reverse=_parse_flag(params.get("reverse")),
            auto_json=_parse_flag(params.get("json")),
        )

    def apply(self, origin: str, destination: str) -> tuple[str, str]:
        """Apply the overrides and the optional swap to a stop pair."""
        if self.von:
            origin = self.von
        if self.nach:
            destination = self.nach
        if self.reverse:
            origin, destination = destination, origin
        return origin, destination

    def should_auto_search(self, origin: str, destination: str) -> bool:
        """True when json was requested and both stops are set."""
        return self.auto_json and bool(origin.strip()) and bool(destination.strip())
