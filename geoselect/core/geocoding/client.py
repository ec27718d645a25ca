"""Free-text place search for the selection core.

The client resolves a query to a ``Location`` while guaranteeing that at
most one lookup is in flight. A second search started while the first is
pending is refused with ``SearchStatus.BUSY`` rather than queued.
"""

import logging
from enum import Enum

from pydantic import BaseModel

from geoselect.core.config import Settings
from geoselect.core.config import settings as default_settings
from geoselect.core.errors import GeocodingError
from geoselect.core.geocoding.constants import FAILURE_MESSAGE, NOT_FOUND_MESSAGE
from geoselect.core.geocoding.providers import GeocodingProvider, create_provider
from geoselect.core.viewport import MapViewportAdapter
from geoselect.models.geographic import Location

logger = logging.getLogger(__name__)


class SearchStatus(str, Enum):
    """Result categories of a search."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"
    BUSY = "busy"
    EMPTY_QUERY = "empty_query"


class SearchOutcome(BaseModel):
    """What a search produced."""

    status: SearchStatus
    location: Location | None = None
    message: str | None = None

    @property
    def found(self) -> bool:
        """Whether a location was resolved."""
        return self.status is SearchStatus.FOUND


class GeocodingSearchClient:
    """Resolve place names to locations, one lookup at a time."""

    def __init__(
        self,
        provider: GeocodingProvider | None = None,
        viewport: MapViewportAdapter | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            provider: Lookup backend, built from settings when omitted
            viewport: Map to recenter on successful searches
            settings: Configuration, defaults to the package settings
        """
        self.settings = settings or default_settings
        self.provider = provider or create_provider(self.settings)
        self.viewport = viewport
        self.zoom = self.settings.SEARCH_ZOOM
        self._in_flight = False

    @property
    def is_searching(self) -> bool:
        """True while a lookup is outstanding."""
        return self._in_flight

    async def search(self, query: str) -> SearchOutcome:
        """Resolve a free-text query.

        Args:
            query: Place name typed by the user

        Returns:
            SearchOutcome describing the found location or why there is none
        """
        if not query or not query.strip():
            return SearchOutcome(status=SearchStatus.EMPTY_QUERY)

        if self._in_flight:
            logger.info(f"Search already in progress, refusing: {query[:50]}")
            return SearchOutcome(status=SearchStatus.BUSY)

        self._in_flight = True
        try:
            candidates = await self.provider.lookup(query)
        except GeocodingError as e:
            logger.error(f"Search error for {query[:50]!r}: {e}", exc_info=True)
            return SearchOutcome(status=SearchStatus.FAILED, message=FAILURE_MESSAGE)
        finally:
            self._in_flight = False

        if not candidates:
            logger.info(f"No geocoding candidates for: {query[:50]}")
            return SearchOutcome(status=SearchStatus.NOT_FOUND, message=NOT_FOUND_MESSAGE)

        location = candidates[0].to_location()
        logger.info(
            f"Resolved {query[:50]!r} to ({location.latitude}, {location.longitude})"
        )

        if self.viewport is not None:
            self.viewport.recenter(location.latitude, location.longitude, self.zoom)

        return SearchOutcome(status=SearchStatus.FOUND, location=location)

    async def aclose(self) -> None:
        """Release the provider's resources."""
        await self.provider.aclose()
