"""Interactive geospatial selection core."""

from geoselect.core.geocoding import GeocodingSearchClient, SearchOutcome, SearchStatus
from geoselect.core.selection import SelectionSession
from geoselect.models import Bounds, Coordinate, Location, SelectionMode

__version__ = "0.1.0"

__all__ = [
    "Bounds",
    "Coordinate",
    "GeocodingSearchClient",
    "Location",
    "SearchOutcome",
    "SearchStatus",
    "SelectionMode",
    "SelectionSession",
]
