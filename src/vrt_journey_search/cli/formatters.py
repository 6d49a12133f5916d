"""Output formatters for CLI display."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..core.export import format_export_json
from ..core.models import DelayStatus, JourneyRecord, JourneySearchResult

console = Console()

STATUS_STYLES = {
    DelayStatus.DELAYED: "yellow",
    DelayStatus.ON_TIME: "green",
    DelayStatus.UNKNOWN: "dim",
}


def _styled_status(journey: JourneyRecord) -> str:
    style = STATUS_STYLES[journey.delay_status]
    return f"[{style}]{journey.status}[/{style}]"


def format_journey_table(result: JourneySearchResult, verbose: bool = False) -> None:
    """Display the journeys of a search result as a rich table."""
    journeys = result.journeys
    if not journeys:
        console.print("No journeys found.")
        return

    query = result.query
    table = Table(
        title=f"{len(journeys)} Verbindungen: {query.origin} → {query.destination}",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Departure", style="cyan", no_wrap=True)
    table.add_column("Arrival", style="cyan", no_wrap=True)
    table.add_column("Duration", style="green")
    table.add_column("Status")
    table.add_column("Transport", style="yellow")
    if verbose:
        table.add_column("Fare", style="green")

    for idx, journey in enumerate(journeys, 1):
        row_data = [
            str(idx),
            journey.departure or "N/A",
            journey.arrival or "N/A",
            journey.duration or "N/A",
            _styled_status(journey),
            journey.transport_display or "N/A",
        ]
        if verbose:
            row_data.append(journey.fare or "-")
        table.add_row(*row_data)

    console.print(table)


def format_journey_detailed(result: JourneySearchResult) -> None:
    """Display each journey of a search result as a panel."""
    journeys = result.journeys
    if not journeys:
        console.print("No journeys found.")
        return

    query = result.query
    console.print(
        Panel(
            f"""[bold]Von:[/bold] {query.origin}
[bold]Nach:[/bold] {query.destination}
[bold]Datum:[/bold] {query.travel_date:%d.%m.%Y}
[bold]Zeit:[/bold] {query.travel_time:%H:%M} ({"Abfahrt" if query.is_departure else "Ankunft"})""",
            title="Journey Search",
            border_style="blue",
        )
    )

    for idx, journey in enumerate(journeys, 1):
        journey_text = f"""[bold]Time:[/bold] {journey.departure or 'N/A'} → {journey.arrival or 'N/A'}
[bold]Duration:[/bold] {journey.duration or 'N/A'}
[bold]Status:[/bold] {_styled_status(journey)}
[bold]Transport:[/bold] {journey.transport_display or 'N/A'}"""

        if journey.fare:
            journey_text += f"\n[bold]Fare:[/bold] {journey.fare}"

        console.print(Panel(journey_text, title=f"Journey {idx}", border_style="green"))


def format_journey_json(result: JourneySearchResult) -> str:
    """Format a search result as the JSON export document."""
    return format_export_json(result)
