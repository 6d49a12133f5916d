"""JSON and raw HTML exports of search results."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .exceptions import ExportError
from .models import JourneyExport, JourneySearchResult

logger = logging.getLogger(__name__)

EXPORT_PREFIX = "vrt_journey_results"


def export_timestamp(now: datetime | None = None) -> str:
    """Filename-safe UTC timestamp, e.g. "2024-03-07T12-30-05-123Z".

    Naive datetimes are taken as local time.
    """
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return f"{now:%Y-%m-%dT%H-%M-%S}-{now.microsecond // 1000:03d}Z"


def export_filename(kind: str, now: datetime | None = None) -> str:
    """Export file name for "json" or "html"."""
    if kind not in ("json", "html"):
        raise ValueError(f"Unknown export kind: {kind}")
    return f"{EXPORT_PREFIX}_{export_timestamp(now)}.{kind}"


def build_export(result: JourneySearchResult) -> JourneyExport:
    """Build the JSON export document for a search result."""
    return JourneyExport.from_result(result)


def export_document(result: JourneySearchResult) -> dict[str, Any]:
    """JSON-ready export document with journeys in the planner's export layout."""
    data = build_export(result).model_dump(mode="json", exclude={"journeys"})
    data["journeys"] = [journey.to_export_dict() for journey in result.journeys]
    return data


def format_export_json(result: JourneySearchResult) -> str:
    """Serialize a search result as the JSON export document."""
    return json.dumps(export_document(result), ensure_ascii=False, indent=2)


def write_json_export(
    result: JourneySearchResult, directory: str | Path = ".", now: datetime | None = None
) -> Path:
    """Write the JSON export into a directory and return the file path.

    The file name is stamped with the retrieval time unless now is given.
    """
    path = Path(directory) / export_filename("json", now or result.retrieved_at)
    _write_text(path, format_export_json(result))
    logger.info("Wrote %d journeys to %s", len(result.journeys), path)
    return path


def write_html_export(
    result: JourneySearchResult, directory: str | Path = ".", now: datetime | None = None
) -> Path:
    """Write the raw HTML response verbatim into a directory and return the file path."""
    path = Path(directory) / export_filename("html", now or result.retrieved_at)
    _write_text(path, result.raw_html)
    logger.info("Wrote raw HTML to %s", path)
    return path


def read_json_export(path: str | Path) -> JourneyExport:
    """Read a JSON export back.

    Raises:
        ExportError: If the file is missing or not a valid export document
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return JourneyExport.model_validate(data)
    except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
        raise ExportError(f"Failed to read export {path}: {str(e)}") from e


def _write_text(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise ExportError(f"Failed to write export {path}: {str(e)}") from e
