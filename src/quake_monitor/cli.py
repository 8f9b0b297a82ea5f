"""CLI interface using Typer."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from quake_monitor import __version__
from quake_monitor.config import ExportFormat, QuakeMonitorConfig
from quake_monitor.exporters import export_geojson, export_json
from quake_monitor.fetchers.location import locate_point, resolve_location
from quake_monitor.fetchers.tmd import get_tmd_earthquakes
from quake_monitor.fetchers.usgs import (
    assess_location_risk,
    fetch_active_regions,
    fetch_earthquake_by_id,
    fetch_recent_earthquakes,
)
from quake_monitor.models import EarthquakeFilters, GeoPoint, RiskAssessment

app = typer.Typer(
    name="quake-monitor",
    help="Global and Thailand earthquake feeds with heuristic seismic risk.",
    add_completion=False,
)
console = Console()

ALERT_STYLES = {
    "red": "[red]red[/red]",
    "orange": "[dark_orange]orange[/dark_orange]",
    "yellow": "[yellow]yellow[/yellow]",
    "green": "[green]green[/green]",
}

VerboseOption = Annotated[
    bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")
]
StartOption = Annotated[
    datetime | None,
    typer.Option("--start", help="First day to include.", formats=["%Y-%m-%d"]),
]
EndOption = Annotated[
    datetime | None,
    typer.Option("--end", help="Last day to include.", formats=["%Y-%m-%d"]),
]
CountryOption = Annotated[
    str | None, typer.Option("--country", "-c", help="Country name, or 'all'.")
]
OutputOption = Annotated[
    Path | None, typer.Option("--output", "-o", help="Also write results to this file.")
]
FormatOption = Annotated[
    ExportFormat, typer.Option("--format", "-f", help="Output file format: json or geojson.")
]


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )


def _load_config() -> QuakeMonitorConfig:
    try:
        return QuakeMonitorConfig()
    except ValidationError as exc:
        console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(code=1) from None


def _filters(
    start: datetime | None, end: datetime | None, country: str | None
) -> EarthquakeFilters:
    return EarthquakeFilters(
        start_date=start.date() if start else None,
        end_date=end.date() if end else None,
        country=country,
    )


def _write(records: list, output: Path | None, output_format: str) -> None:
    if output is None:
        return
    if output_format == "geojson":
        export_geojson(records, output)
    else:
        export_json(records, output)
    console.print(f"\n{output_format.upper()} written to [bold]{output}[/bold]")


def _format_time(time_ms: int) -> str:
    return datetime.fromtimestamp(time_ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"quake-monitor {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Quake Monitor: earthquake feeds and seismic risk from the terminal."""


@app.command()
def feed(
    start: StartOption = None,
    end: EndOption = None,
    country: CountryOption = None,
    min_magnitude: Annotated[
        float | None, typer.Option("--min-magnitude", "-m", help="Minimum magnitude.")
    ] = None,
    days: Annotated[
        int | None, typer.Option("--days", "-d", help="Number of days to look back.")
    ] = None,
    limit: Annotated[int, typer.Option("--limit", "-n", help="Rows to display.")] = 25,
    output: OutputOption = None,
    output_format: FormatOption = "json",
    verbose: VerboseOption = False,
) -> None:
    """Show the global USGS earthquake feed, newest first."""
    _setup_logging(verbose)
    config = _load_config()
    records = fetch_recent_earthquakes(
        config,
        filters=_filters(start, end, country),
        min_magnitude=min_magnitude,
        days=days,
    )
    if not records:
        console.print("[yellow]No earthquakes found.[/yellow]")
        raise typer.Exit()

    table = Table(title="Recent Earthquakes")
    table.add_column("Time", style="dim")
    table.add_column("Mag", justify="right", style="red")
    table.add_column("Depth km", justify="right")
    table.add_column("Place", style="bold")
    table.add_column("Alert")
    for eq in records[:limit]:
        table.add_row(
            _format_time(eq.time_ms),
            f"{eq.magnitude:.1f}",
            f"{eq.depth_km:.1f}",
            eq.place,
            ALERT_STYLES.get(eq.alert or "", "-"),
        )
    console.print(table)
    console.print(f"Total earthquakes: {len(records)}")
    _write(records, output, output_format)


@app.command()
def quake(
    event_id: Annotated[str, typer.Argument(help="USGS event id, e.g. us7000abcd.")],
    verbose: VerboseOption = False,
) -> None:
    """Show details for one USGS event."""
    _setup_logging(verbose)
    eq = fetch_earthquake_by_id(event_id, _load_config())

    table = Table(title=f"Earthquake {eq.id}", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Place", eq.place)
    table.add_row("Time", _format_time(eq.time_ms))
    table.add_row("Magnitude", f"{eq.magnitude:.1f} {eq.magnitude_type}")
    table.add_row("Depth", f"{eq.depth_km:.1f} km")
    table.add_row("Coordinates", f"{eq.latitude:.4f}, {eq.longitude:.4f}")
    table.add_row("Status", eq.status)
    table.add_row("Tsunami", "yes" if eq.tsunami else "no")
    table.add_row("Alert", ALERT_STYLES.get(eq.alert or "", "-"))
    if eq.felt:
        table.add_row("Felt reports", str(eq.felt))
    if eq.url:
        table.add_row("URL", eq.url)
    console.print(table)


@app.command()
def regions(verbose: VerboseOption = False) -> None:
    """List regions with recent M4+ activity."""
    _setup_logging(verbose)
    names = fetch_active_regions(_load_config())
    if not names:
        console.print("[yellow]No active regions found.[/yellow]")
        raise typer.Exit()
    for name in names:
        console.print(name)


@app.command()
def thailand(
    start: StartOption = None,
    end: EndOption = None,
    country: CountryOption = None,
    output: OutputOption = None,
    output_format: FormatOption = "json",
    verbose: VerboseOption = False,
) -> None:
    """Show the Thai Meteorological Department regional feed."""
    _setup_logging(verbose)
    records = get_tmd_earthquakes(_load_config(), filters=_filters(start, end, country))
    if not records:
        console.print("[yellow]No seismic events found.[/yellow]")
        raise typer.Exit()

    table = Table(title="TMD Seismic Events")
    table.add_column("Time (Thai)", style="dim")
    table.add_column("Mag", justify="right", style="red")
    table.add_column("Depth km", justify="right")
    table.add_column("Origin", style="bold")
    for eq in records:
        table.add_row(
            eq.datetime_thai,
            f"{eq.magnitude:.1f}",
            f"{eq.depth_km:.1f}",
            eq.origin_thai,
        )
    console.print(table)
    console.print(f"{len(records)} seismic events found")
    _write(records, output, output_format)


def _print_assessment(assessment: RiskAssessment, title: str) -> None:
    table = Table(title=title)
    table.add_column("Factor", style="bold")
    table.add_column("Score", justify="right", style="red")
    table.add_row("Overall risk", str(assessment.overall_risk))
    table.add_row("Fault line proximity", str(assessment.fault_line_proximity))
    table.add_row("Historical activity", str(assessment.historical_activity))
    table.add_row("Building vulnerability", str(assessment.building_vulnerability))
    table.add_row("Population density", str(assessment.population_density))
    console.print(table)
    console.print(f"\n{assessment.historical_summary}")

    if assessment.significant_events:
        events = Table(title="Significant Events")
        events.add_column("Date")
        events.add_column("Mag", justify="right", style="red")
        events.add_column("Location", style="bold")
        events.add_column("Impact")
        for ev in assessment.significant_events:
            events.add_row(ev.date, f"{ev.magnitude:.1f}", ev.location, ev.impact)
        console.print(events)

    console.print("\n[bold]Recommendations[/bold]")
    for item in assessment.recommendations:
        console.print(f"  - {item}")
    console.print(f"\n[dim]{assessment.disclaimer}[/dim]")


@app.command()
def risk(
    lat: Annotated[
        float | None, typer.Option("--lat", min=-90.0, max=90.0, help="Latitude.")
    ] = None,
    lon: Annotated[
        float | None, typer.Option("--lon", min=-180.0, max=180.0, help="Longitude.")
    ] = None,
    output: OutputOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Assess seismic risk for a point, or for this machine's location."""
    _setup_logging(verbose)
    config = _load_config()
    if lat is None or lon is None:
        location = resolve_location(config)
    else:
        location = locate_point(GeoPoint(lat, lon))

    assessment = assess_location_risk(location.point, config)
    _print_assessment(
        assessment,
        f"Seismic Risk: {location.city}, {location.country} "
        f"({location.latitude:.4f}, {location.longitude:.4f})",
    )
    if output is not None:
        export_json(assessment, output)
        console.print(f"\nJSON written to [bold]{output}[/bold]")


@app.command()
def locate(verbose: VerboseOption = False) -> None:
    """Show the location used when no coordinates are given."""
    _setup_logging(verbose)
    location = resolve_location(_load_config())
    console.print(
        f"{location.city}, {location.region}, {location.country} "
        f"({location.latitude:.4f}, {location.longitude:.4f}) {location.timezone}"
    )
