"""Place-name search for the selection core.

This package provides:
- The search client that enforces one lookup at a time
- Nominatim (httpx) and ArcGIS (geopy) providers
- User-facing messages and preset locations
"""

from geoselect.core.geocoding.client import (
    GeocodingSearchClient,
    SearchOutcome,
    SearchStatus,
)
from geoselect.core.geocoding.constants import (
    FAILURE_MESSAGE,
    NOT_FOUND_MESSAGE,
    PRESET_LOCATIONS,
)
from geoselect.core.geocoding.providers import (
    ArcGISProvider,
    Candidate,
    GeocodingProvider,
    NominatimProvider,
    create_provider,
)

__all__ = [
    "GeocodingSearchClient",
    "SearchOutcome",
    "SearchStatus",
    "FAILURE_MESSAGE",
    "NOT_FOUND_MESSAGE",
    "PRESET_LOCATIONS",
    "ArcGISProvider",
    "Candidate",
    "GeocodingProvider",
    "NominatimProvider",
    "create_provider",
]
