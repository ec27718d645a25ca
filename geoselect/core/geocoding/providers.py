"""Geocoding providers used by the search client.

Each provider turns a free-text query into a list of candidates shaped like
a Nominatim search result (``lat``, ``lon``, ``display_name``):
- ``NominatimProvider`` calls the HTTP search endpoint through httpx
- ``ArcGISProvider`` goes through geopy's ArcGIS geocoder
"""

import asyncio
import logging
from typing import Any, Protocol

import httpx
from geopy.exc import GeopyError
from geopy.geocoders import ArcGIS
from pydantic import BaseModel, Field, ValidationError

from geoselect.core.config import Settings
from geoselect.core.config import settings as default_settings
from geoselect.core.errors import GeocodingError, GeocodingTransportError
from geoselect.core.geocoding.constants import RESULT_LIMIT
from geoselect.models.geographic import Location

logger = logging.getLogger(__name__)


class Candidate(BaseModel):
    """A single geocoding match.

    Nominatim returns ``lat``/``lon`` as strings; numbers are accepted too.
    """

    lat: float
    lon: float
    display_name: str = Field(..., min_length=1)

    def to_location(self) -> Location:
        """Convert the candidate into a resolved location."""
        return Location(latitude=self.lat, longitude=self.lon, name=self.display_name)


class GeocodingProvider(Protocol):
    """Backend that performs the actual lookup."""

    name: str

    async def lookup(self, query: str) -> list[Candidate]: ...

    async def aclose(self) -> None: ...


class NominatimProvider:
    """Look up places through a Nominatim compatible search endpoint."""

    name = "nominatim"

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            settings: Configuration, defaults to the package settings
            client: Optional shared HTTP client; one is created and owned
                by the provider when omitted
        """
        self.settings = settings or default_settings
        self.url = self.settings.GEOCODING_URL
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            kwargs: dict[str, Any] = {
                "headers": {"User-Agent": self.settings.GEOCODING_USER_AGENT}
            }
            if self.settings.GEOCODING_TIMEOUT is not None:
                kwargs["timeout"] = httpx.Timeout(self.settings.GEOCODING_TIMEOUT)
            self._client = httpx.AsyncClient(**kwargs)
        return self._client

    async def lookup(self, query: str) -> list[Candidate]:
        """Search for a place name.

        Args:
            query: Free-text place name

        Returns:
            Candidates in the order the service ranked them; at most one

        Raises:
            GeocodingTransportError: If the request fails or the body is not
                a JSON array of candidates
        """
        params = {"format": "json", "q": query, "limit": RESULT_LIMIT}
        logger.debug(f"Nominatim lookup for: {query[:50]}")

        try:
            response = await self._get_client().get(self.url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise GeocodingTransportError(f"Geocoding request failed: {e}") from e
        except ValueError as e:
            raise GeocodingTransportError(f"Invalid geocoding response: {e}") from e

        if not isinstance(data, list):
            raise GeocodingTransportError(
                f"Expected a list of candidates, got {type(data).__name__}"
            )
        if not data:
            return []

        try:
            return [Candidate.model_validate(data[0])]
        except ValidationError as e:
            raise GeocodingTransportError(f"Malformed geocoding candidate: {e}") from e

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


class ArcGISProvider:
    """Look up places through geopy's ArcGIS geocoder."""

    name = "arcgis"

    def __init__(self, settings: Settings | None = None, geocoder: Any = None) -> None:
        """Initialize the provider.

        Args:
            settings: Configuration, defaults to the package settings
            geocoder: Optional preconfigured geopy geocoder
        """
        self.settings = settings or default_settings
        if geocoder is None:
            kwargs: dict[str, Any] = {"user_agent": self.settings.GEOCODING_USER_AGENT}
            if self.settings.GEOCODING_TIMEOUT is not None:
                kwargs["timeout"] = self.settings.GEOCODING_TIMEOUT
            geocoder = ArcGIS(**kwargs)
        self.geocoder = geocoder

    async def lookup(self, query: str) -> list[Candidate]:
        """Search for a place name.

        geopy's geocoders block, so the call runs in a worker thread.

        Raises:
            GeocodingTransportError: If the ArcGIS service reports an error
            GeocodingError: If the match has no usable address
        """
        logger.debug(f"ArcGIS lookup for: {query[:50]}")
        try:
            match = await asyncio.to_thread(self.geocoder.geocode, query)
        except GeopyError as e:
            raise GeocodingTransportError(f"ArcGIS geocoding failed: {e}") from e

        if match is None:
            return []

        try:
            return [
                Candidate(
                    lat=match.latitude,
                    lon=match.longitude,
                    display_name=match.address or query,
                )
            ]
        except ValidationError as e:
            raise GeocodingError(f"Unusable ArcGIS match: {e}") from e

    async def aclose(self) -> None:
        """Nothing to release; geopy manages its own sessions."""


def create_provider(settings: Settings | None = None) -> GeocodingProvider:
    """Build the provider named by ``GEOCODING_PROVIDER``.

    Args:
        settings: Configuration, defaults to the package settings

    Returns:
        A ready to use provider
    """
    settings = settings or default_settings
    if settings.GEOCODING_PROVIDER == "arcgis":
        logger.info("Using ArcGIS geocoding provider")
        return ArcGISProvider(settings)
    logger.info(f"Using Nominatim geocoding provider at {settings.GEOCODING_URL}")
    return NominatimProvider(settings)
