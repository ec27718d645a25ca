"""Selection session: routes map events and searches to the selection core.

One ``SelectionSession`` owns all mutable selection state of a map: the
active mode, the rectangle drawing state and the in-flight search flag.
Map widgets feed raw events into ``on_click``/``on_pointer_move`` and the
host receives results through the callbacks it registered.
"""

import uuid
from collections.abc import Callable
from types import TracebackType

from geoselect.core.config import Settings
from geoselect.core.config import settings as default_settings
from geoselect.core.geocoding.client import GeocodingSearchClient, SearchOutcome
from geoselect.core.geocoding.constants import PRESET_LOCATIONS
from geoselect.core.logging import get_session_logger
from geoselect.core.selection.mode import SelectionModeController
from geoselect.core.selection.point import PointSelectionHandler
from geoselect.core.selection.rectangle import RectangleDrawingStateMachine
from geoselect.core.selection.resolver import (
    BoundsCallback,
    LocationCallback,
    LocationResolver,
)
from geoselect.core.viewport import MapViewportAdapter, Scheduler
from geoselect.models.geographic import (
    Coordinate,
    DrawingState,
    Location,
    RectanglePreview,
    SelectionMode,
)

MessageCallback = Callable[[str], None]
CoordinateInput = Coordinate | tuple[float, float]


class SelectionSession:
    """Interactive point/rectangle/search selection for one map."""

    def __init__(
        self,
        on_location_select: LocationCallback,
        viewport: MapViewportAdapter | None = None,
        on_bounds_select: BoundsCallback | None = None,
        on_message: MessageCallback | None = None,
        settings: Settings | None = None,
        scheduler: Scheduler | None = None,
        geocoder: GeocodingSearchClient | None = None,
        initial_location: Location | None = None,
        mode: SelectionMode | str | None = None,
    ) -> None:
        """Wire up a session.

        Args:
            on_location_select: Receives every resolved location
            viewport: Map widget receiving recenter commands
            on_bounds_select: Receives finished rectangles, optional
            on_message: Receives user-facing search messages, optional
            settings: Configuration, defaults to the package settings
            scheduler: Runs delayed rectangle cleanup, defaults to the
                running asyncio loop; without one the outline is cleared
                immediately
            geocoder: Search client, built from settings when omitted
            initial_location: Location the map opens on
            mode: Starting mode, defaults to ``DEFAULT_MODE``
        """
        self.settings = settings or default_settings
        self.session_id = uuid.uuid4().hex
        self.logger = get_session_logger(self.session_id)

        self.viewport = viewport
        self.on_message = on_message
        self.initial_location = initial_location

        self.resolver = LocationResolver(on_location_select, on_bounds_select)
        self.points = PointSelectionHandler(self.resolver)
        self.rectangle = RectangleDrawingStateMachine(
            self.resolver.resolve_bounds,
            scheduler=scheduler,
            reset_delay=self.settings.PREVIEW_RESET_DELAY,
        )
        self.modes = SelectionModeController(
            self.rectangle, mode or self.settings.DEFAULT_MODE
        )

        self._owns_geocoder = geocoder is None
        self.geocoder = geocoder or GeocodingSearchClient(
            viewport=viewport, settings=self.settings
        )

    # Mode

    @property
    def mode(self) -> SelectionMode:
        return self.modes.mode

    def get_mode(self) -> SelectionMode:
        return self.modes.get_mode()

    def set_mode(self, mode: SelectionMode | str) -> None:
        self.modes.set_mode(mode)

    # Viewport events

    def on_click(self, coordinate: CoordinateInput) -> None:
        """Route a map click to the handler of the active mode."""
        point = Coordinate.parse(coordinate)
        if self.modes.mode is SelectionMode.POINT:
            self.points.handle_click(point)
        else:
            self.rectangle.handle_click(point)

    def on_pointer_move(self, coordinate: CoordinateInput) -> None:
        """Track the pointer while a rectangle is being drawn."""
        if self.modes.mode is SelectionMode.RECTANGLE:
            self.rectangle.handle_move(Coordinate.parse(coordinate))

    @property
    def drawing_state(self) -> DrawingState:
        return self.rectangle.state

    @property
    def preview(self) -> RectanglePreview | None:
        """Rectangle outline the map should draw, if any."""
        return self.rectangle.preview

    # Search and presets

    @property
    def is_searching(self) -> bool:
        return self.geocoder.is_searching

    async def search(self, query: str) -> SearchOutcome:
        """Resolve a place name and select it.

        Not-found and failure messages go to ``on_message``; an empty query
        or a search refused because another is pending stays silent.
        """
        outcome = await self.geocoder.search(query)
        if outcome.location is not None:
            self.resolver.resolve_search(outcome.location)
        elif outcome.message and self.on_message is not None:
            self.on_message(outcome.message)
        return outcome

    def select_preset(self, key: str) -> Location:
        """Select one of the quick locations and move the map to it.

        Raises:
            KeyError: If ``key`` is not a known preset
        """
        location = Location.model_validate(PRESET_LOCATIONS[key])
        self.resolver.resolve_preset(location)
        self.set_initial_location(location)
        return location

    def default_location(self) -> Location:
        """Location offered before anything has been selected."""
        return Location(
            latitude=self.settings.DEFAULT_LOCATION_LATITUDE,
            longitude=self.settings.DEFAULT_LOCATION_LONGITUDE,
            name=self.settings.DEFAULT_LOCATION_NAME,
        )

    # Initial location and map view

    def set_initial_location(self, location: Location | None) -> None:
        """Update the location the map is anchored to.

        The viewport is recentered only when the location actually changes.
        """
        if location == self.initial_location:
            return
        self.initial_location = location
        if location is not None and self.viewport is not None:
            self.viewport.recenter(
                location.latitude,
                location.longitude,
                self.settings.INITIAL_LOCATION_ZOOM,
            )

    def map_view(self) -> tuple[tuple[float, float], int]:
        """Center and zoom the map should open with."""
        if self.initial_location is not None:
            return (
                (self.initial_location.latitude, self.initial_location.longitude),
                self.settings.INITIAL_LOCATION_ZOOM,
            )
        return self.settings.MAP_DEFAULT_CENTER, self.settings.MAP_DEFAULT_ZOOM

    # Teardown

    def close(self) -> None:
        """Cancel pending drawing cleanup.

        The search client stays open; use ``aclose`` to release it as well.
        """
        self.rectangle.close()
        self.logger.debug("selection_session_closed")

    async def aclose(self) -> None:
        """Close the session and the search client it created."""
        self.close()
        if self._owns_geocoder:
            await self.geocoder.aclose()

    async def __aenter__(self) -> "SelectionSession":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
