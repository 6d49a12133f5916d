"""Search settings and fixed endpoint constants."""

import os

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError

TRIP_REQUEST_URL = "https://www.vrt-info.de/fahrplanauskunft/XSLT_TRIP_REQUEST2"

# Public relay the browser planner used to get around CORS
DEFAULT_RELAY_URL = "https://corsproxy.io/?"

DEFAULT_ORIGIN = "Ehrang (Trier), Lindenplatz"
DEFAULT_DESTINATION = "Theater Trier, Trier"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/140.0.0.0 Safari/537.36"
)


class SearchSettings(BaseModel):
    """Settings for talking to the trip planner."""

    base_url: str = Field(TRIP_REQUEST_URL, description="Trip request endpoint")
    relay_url: str | None = Field(
        None, description="Optional relay prefix, the target URL is appended encoded"
    )
    timeout: int = Field(30, ge=1, description="Request timeout in seconds")
    max_attempts: int = Field(
        1, ge=1, description="Fetch attempts per search (1 means no retry)"
    )
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header")

    @classmethod
    def from_env(cls) -> "SearchSettings":
        """Build settings from VRT_* environment variables, falling back to defaults.

        Raises:
            ValidationError: If an environment value is not valid for its setting
        """
        values: dict[str, str] = {}
        env_map = {
            "VRT_BASE_URL": "base_url",
            "VRT_RELAY_URL": "relay_url",
            "VRT_TIMEOUT": "timeout",
            "VRT_MAX_ATTEMPTS": "max_attempts",
            "VRT_USER_AGENT": "user_agent",
        }
        for env_name, field_name in env_map.items():
            value = os.environ.get(env_name)
            if value:
                values[field_name] = value
        try:
            return cls.model_validate(values)
        except PydanticValidationError as e:
            field_to_env = {field: env for env, field in env_map.items()}
            problems = []
            for error in e.errors():
                field_name = str(error["loc"][0]) if error["loc"] else ""
                env_name = field_to_env.get(field_name, field_name)
                problems.append(
                    f"Invalid {env_name}={values.get(field_name)!r}: {error['msg']}"
                )
            raise ValidationError("; ".join(problems)) from e
