"""MCP Server for VRT Journey Search.

This module implements a Model Context Protocol (MCP) server that exposes
VRT connection search and trip request URL building.
"""

import asyncio
import json
import logging
from datetime import date, datetime, time
from typing import Any

from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.types import (
    TextContent,
    Tool,
)

from ..core.config import SearchSettings
from ..core.exceptions import (
    NetworkError,
    ScrapingError,
    ValidationError,
)
from ..core.export import export_document
from ..core.models import JourneyQuery, TripDirection
from ..core.scraper import VRTJourneyScraper

logger = logging.getLogger(__name__)

QUERY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "origin": {
            "type": "string",
            "description": "Origin stop name, e.g. 'Trier Hbf'",
        },
        "destination": {
            "type": "string",
            "description": "Destination stop name, e.g. 'Konz Bahnhof'",
        },
        "date": {
            "type": "string",
            "description": "Travel date as YYYY-MM-DD (default: today)",
        },
        "time": {
            "type": "string",
            "description": "Travel time as HH:MM (default: now)",
        },
        "direction": {
            "type": "string",
            "description": "'dep' to depart after the time, 'arr' to arrive before it",
            "enum": ["dep", "arr"],
            "default": "dep",
        },
    },
    "required": ["origin", "destination"],
}


class JourneyMCPServer:
    """MCP Server for VRT journey search functionality."""

    def __init__(self, settings: SearchSettings | None = None) -> None:
        """Initialize the Journey MCP Server."""
        self.server = Server("vrt-journey-search")
        self.scraper = VRTJourneyScraper(settings=settings or SearchSettings.from_env())

        self._register_handlers()

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[Tool]:
            """List available tools."""
            return [
                Tool(
                    name="search_journeys",
                    description="Search public-transport connections in the VRT (Trier region) network",
                    inputSchema=QUERY_SCHEMA,
                ),
                Tool(
                    name="build_journey_url",
                    description="Build the VRT trip planner request URL without fetching it",
                    inputSchema=QUERY_SCHEMA,
                ),
            ]

        @self.server.call_tool()
        async def handle_call_tool(
            name: str, arguments: dict[str, Any]
        ) -> list[TextContent]:
            """Handle tool calls."""
            try:
                if name == "search_journeys":
                    return await self._search_journeys(arguments)
                elif name == "build_journey_url":
                    return await self._build_journey_url(arguments)
                else:
                    return [TextContent(type="text", text=f"Unknown tool: {name}")]

            except Exception as e:
                logger.error(f"Error in tool {name}: {e}")
                return [TextContent(type="text", text=f"Error: {str(e)}")]

    def _query_from_arguments(self, arguments: dict[str, Any]) -> JourneyQuery:
        """Build a query from tool arguments.

        Raises:
            ValidationError: If a stop name is empty or date/time are malformed
        """
        origin = arguments.get("origin") or ""
        destination = arguments.get("destination") or ""
        if not origin.strip():
            raise ValidationError("Origin stop name cannot be empty")
        if not destination.strip():
            raise ValidationError("Destination stop name cannot be empty")

        now = datetime.now()
        try:
            travel_date = (
                date.fromisoformat(arguments["date"])
                if arguments.get("date")
                else now.date()
            )
            travel_time = (
                time.fromisoformat(arguments["time"])
                if arguments.get("time")
                else now.time()
            )
            direction = TripDirection(arguments.get("direction", "dep"))
        except ValueError as e:
            raise ValidationError(f"Invalid search parameters: {e}") from e

        return JourneyQuery(
            origin=origin,
            destination=destination,
            travel_date=travel_date,
            travel_time=travel_time,
            direction=direction,
        )

    async def _search_journeys(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Search for connections between two stops."""
        try:
            query = self._query_from_arguments(arguments)
            # requests is blocking, keep the event loop free
            result = await asyncio.to_thread(self.scraper.search, query)
        except (ValidationError, ScrapingError, NetworkError) as e:
            return [TextContent(type="text", text=f"Journey search failed: {str(e)}")]

        if not result.journeys:
            return [TextContent(type="text", text=f"No journeys found for {query}")]

        result_text = f"**Found {len(result.journeys)} journeys: {query}**\n\n"
        for idx, journey in enumerate(result.journeys, 1):
            result_text += (
                f"{idx}. **{journey.departure or 'N/A'} → {journey.arrival or 'N/A'}**\n"
            )
            result_text += f"   • Duration: {journey.duration or 'N/A'}\n"
            result_text += f"   • Status: {journey.status}\n"
            result_text += f"   • Transport: {journey.transport_display or 'N/A'}\n"
            if journey.fare:
                result_text += f"   • Fare: {journey.fare}\n"
            result_text += "\n"

        export_data = export_document(result)

        return [
            TextContent(type="text", text=result_text),
            TextContent(
                type="text",
                text=f"JSON Data:\n```json\n{json.dumps(export_data, indent=2, ensure_ascii=False)}\n```",
            ),
        ]

    async def _build_journey_url(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Return the request URL for a query."""
        try:
            query = self._query_from_arguments(arguments)
        except ValidationError as e:
            return [TextContent(type="text", text=f"Invalid query: {str(e)}")]

        return [TextContent(type="text", text=self.scraper.build_request_url(query))]


async def main() -> None:
    """Main entry point for the MCP server."""
    # Configure logging
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting VRT Journey Search MCP Server")

    try:
        server_instance = JourneyMCPServer()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        raise SystemExit(1) from e

    # Run the server with stdio transport
    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        logger.info("MCP Server running with stdio transport")
        await server_instance.server.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name="vrt-journey-search",
                server_version="0.1.0",
                capabilities=server_instance.server.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )


def main_sync() -> None:
    """Synchronous wrapper for the async main function - used as entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    main_sync()
