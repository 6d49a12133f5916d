"""CLI main entry point for VRT journey search."""

import logging
import sys
from datetime import date, datetime, time
from pathlib import Path

import click
from rich.console import Console

from .. import __version__
from ..core import (
    ExportError,
    JourneyQuery,
    JourneySearchResult,
    LaunchParameters,
    NetworkError,
    ScrapingError,
    SearchSettings,
    TripDirection,
    ValidationError,
    VRTJourneyScraper,
)
from ..core.config import DEFAULT_DESTINATION, DEFAULT_ORIGIN, DEFAULT_RELAY_URL
from ..core.export import write_html_export, write_json_export
from .formatters import format_journey_detailed, format_journey_json, format_journey_table

console = Console()
error_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_date(date_str: str | None) -> date:
    if not date_str:
        return datetime.now().date()
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError as e:
        raise ValidationError("Invalid date format. Use YYYY-MM-DD") from e


def _parse_time(time_str: str | None) -> time:
    if not time_str:
        return datetime.now().time().replace(second=0, microsecond=0)
    try:
        return datetime.strptime(time_str, "%H:%M").time()
    except ValueError as e:
        raise ValidationError("Invalid time format. Use HH:MM") from e


def _build_query(
    origin: str, destination: str, date_str: str | None, time_str: str | None, arrival: bool
) -> JourneyQuery:
    if not origin.strip():
        raise ValidationError("Origin stop name cannot be empty")
    if not destination.strip():
        raise ValidationError("Destination stop name cannot be empty")
    return JourneyQuery(
        origin=origin,
        destination=destination,
        travel_date=_parse_date(date_str),
        travel_time=_parse_time(time_str),
        direction=TripDirection.ARRIVAL if arrival else TripDirection.DEPARTURE,
    )


def _load_settings(timeout: int | None, relay: str | None) -> SearchSettings:
    settings = SearchSettings.from_env()
    updates: dict[str, object] = {}
    if timeout is not None:
        updates["timeout"] = timeout
    if relay:
        updates["relay_url"] = relay
    return settings.model_copy(update=updates)


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """VRT Journey Search - Search public-transport connections in the Trier region."""
    pass


@cli.command()
@click.argument("origin", required=False, default=DEFAULT_ORIGIN)
@click.argument("destination", required=False, default=DEFAULT_DESTINATION)
@click.option("--date", "-d", "date_str", help="Travel date (YYYY-MM-DD), default today")
@click.option("--time", "-T", "time_str", help="Travel time (HH:MM), default now")
@click.option("--arrival", "-a", is_flag=True, help="Treat the time as arrival time")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json", "detailed"]),
    default="table",
    help="Output format",
)
@click.option("--timeout", "-t", type=int, help="Request timeout in seconds")
@click.option(
    "--relay",
    is_flag=False,
    flag_value=DEFAULT_RELAY_URL,
    help=f"Route the request through a relay prefix (bare flag: {DEFAULT_RELAY_URL})",
)
@click.option(
    "--save-html",
    help="Save raw HTML response to file for debugging",
    type=click.Path(),
)
@click.option(
    "--export-json",
    "export_json_dir",
    type=click.Path(file_okay=False),
    help="Write a timestamped JSON export into this directory",
)
@click.option(
    "--export-html",
    "export_html_dir",
    type=click.Path(file_okay=False),
    help="Write the raw HTML response as a timestamped file into this directory",
)
@click.option(
    "--link",
    help="Launch parameters as a query string, e.g. 'von=Konz&nach=Trier&reverse=1&json=1'",
)
@click.option("--verbose", "-v", is_flag=True, help="Show detailed information")
def search(
    origin: str,
    destination: str,
    date_str: str | None,
    time_str: str | None,
    arrival: bool,
    output_format: str,
    timeout: int | None,
    relay: str | None,
    save_html: str | None,
    export_json_dir: str | None,
    export_html_dir: str | None,
    link: str | None,
    verbose: bool,
) -> None:
    """Search for connections between two stops.

    Examples:
        vrt-journey search "Trier Hbf" "Konz Bahnhof"
        vrt-journey search "Trier Hbf" "Bitburg" --date 2024-03-07 --time 08:15
        vrt-journey search --link "von=Trier%20Hbf&nach=Schweich&json=1"
    """
    _configure_logging(verbose)
    try:
        if link:
            launch = LaunchParameters.from_query_string(link)
            origin, destination = launch.apply(origin, destination)
            if launch.auto_json:
                if not launch.should_auto_search(origin, destination):
                    raise ValidationError(
                        "Launch link requests a JSON export but a stop name is empty"
                    )
                export_json_dir = export_json_dir or "."

        query = _build_query(origin, destination, date_str, time_str, arrival)
        scraper = VRTJourneyScraper(settings=_load_settings(timeout, relay))

        exported: list[Path] = []

        def export_result(result: JourneySearchResult) -> None:
            if export_json_dir:
                exported.append(write_json_export(result, export_json_dir))
            if export_html_dir:
                exported.append(write_html_export(result, export_html_dir))

        with console.status(
            f"[bold green]Suche läuft: {query.origin} → {query.destination}..."
        ):
            result = scraper.search(
                query, save_html_path=save_html, on_complete=export_result
            )

        for path in exported:
            error_console.print(f"[green]Exported:[/green] {path}")

        if not result.journeys:
            error_console.print("[yellow]No journeys found[/yellow]")
            return

        if output_format == "json":
            click.echo(format_journey_json(result))
        elif output_format == "detailed":
            format_journey_detailed(result)
        else:
            format_journey_table(result, verbose=verbose)

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    except NetworkError as e:
        error_console.print(f"[red]Fehler beim Abrufen der Daten:[/red] {e}")
        sys.exit(1)
    except ScrapingError as e:
        error_console.print(f"[red]Scraping error:[/red] {e}")
        sys.exit(1)
    except ExportError as e:
        error_console.print(f"[red]Export error:[/red] {e}")
        sys.exit(1)
    except Exception as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            error_console.print_exception()
        sys.exit(1)


@cli.command()
@click.argument("origin", required=False, default=DEFAULT_ORIGIN)
@click.argument("destination", required=False, default=DEFAULT_DESTINATION)
@click.option("--date", "-d", "date_str", help="Travel date (YYYY-MM-DD), default today")
@click.option("--time", "-T", "time_str", help="Travel time (HH:MM), default now")
@click.option("--arrival", "-a", is_flag=True, help="Treat the time as arrival time")
@click.option(
    "--relay",
    is_flag=False,
    flag_value=DEFAULT_RELAY_URL,
    help="Wrap the URL with a relay prefix",
)
def url(
    origin: str,
    destination: str,
    date_str: str | None,
    time_str: str | None,
    arrival: bool,
    relay: str | None,
) -> None:
    """Print the trip request URL without fetching it."""
    try:
        query = _build_query(origin, destination, date_str, time_str, arrival)
        scraper = VRTJourneyScraper(settings=_load_settings(None, relay))
    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    click.echo(scraper.build_request_url(query))


@cli.group()
def config() -> None:
    """Configuration management."""
    pass


@config.command("show")
def show_config() -> None:
    """Show current configuration (defaults overridden by VRT_* environment variables)."""
    try:
        settings = SearchSettings.from_env()
    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    console.print("[bold]Current Configuration:[/bold]")
    console.print(f"• Endpoint: {settings.base_url}")
    console.print(f"• Relay: {settings.relay_url or 'none'}")
    console.print(f"• Timeout: {settings.timeout} seconds")
    console.print(f"• Fetch attempts: {settings.max_attempts}")


if __name__ == "__main__":
    cli()
