"""Command-line interface for the selection core."""

import asyncio
import json
import sys

import click

from geoselect import __version__
from geoselect.core.config import settings
from geoselect.core.geocoding import GeocodingSearchClient, SearchOutcome
from geoselect.core.geocoding.constants import PRESET_LOCATIONS
from geoselect.core.logging import configure_logging
from geoselect.core.selection.resolver import centroid_location
from geoselect.models.geographic import Bounds, Coordinate


async def _run_search(query: str) -> SearchOutcome:
    client = GeocodingSearchClient(settings=settings)
    try:
        return await client.search(query)
    finally:
        await client.aclose()


@click.group()
@click.version_option(version=__version__, prog_name="geoselect")
@click.option(
    "--verbose", "-v", is_flag=True, help="Enable debug logging, overrides LOG_LEVEL"
)
def cli(verbose: bool) -> None:
    """Pick analysis locations by place name or map area."""
    configure_logging(
        level="debug" if verbose else settings.LOG_LEVEL,
        json_logs=settings.JSON_LOGS,
    )


@cli.command()
@click.argument("query")
def search(query: str) -> None:
    """Resolve a place name to coordinates."""
    outcome = asyncio.run(_run_search(query))
    if outcome.location is None:
        if outcome.message:
            click.echo(outcome.message, err=True)
        sys.exit(1)
    click.echo(outcome.location.model_dump_json(indent=2))


@cli.command()
@click.argument("lat1", type=float)
@click.argument("lng1", type=float)
@click.argument("lat2", type=float)
@click.argument("lng2", type=float)
def area(lat1: float, lng1: float, lat2: float, lng2: float) -> None:
    """Bounds and centroid of the rectangle between two corners."""
    bounds = Bounds.from_corners(
        Coordinate(lat=lat1, lng=lng1), Coordinate(lat=lat2, lng=lng2)
    )
    payload = {
        "bounds": bounds.model_dump(),
        "location": centroid_location(bounds).model_dump(),
        "area_km2": round(bounds.area_km2, 2),
    }
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@cli.command()
def presets() -> None:
    """List the quick locations."""
    for key, preset in PRESET_LOCATIONS.items():
        click.echo(
            f"{key}: {preset['name']} ({preset['latitude']}, {preset['longitude']})"
        )


if __name__ == "__main__":
    cli()
