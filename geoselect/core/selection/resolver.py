"""Single funnel between selection producers and the host callbacks."""

from collections.abc import Callable

from geoselect.core.logging import get_logger
from geoselect.models.geographic import Bounds, Location

logger = get_logger(__name__)

LocationCallback = Callable[[Location], None]
BoundsCallback = Callable[[Bounds], None]


def centroid_location(bounds: Bounds) -> Location:
    """Representative location of a rectangle selection.

    Args:
        bounds: Completed rectangle

    Returns:
        Location: Midpoint of the box, named after its latitude span
    """
    center = bounds.centroid
    return Location(latitude=center.lat, longitude=center.lng, name=bounds.name)


class LocationResolver:
    """Normalizes every selection into a ``Location`` and notifies the host."""

    def __init__(
        self,
        on_location_select: LocationCallback,
        on_bounds_select: BoundsCallback | None = None,
    ) -> None:
        self.on_location_select = on_location_select
        self.on_bounds_select = on_bounds_select

    def _dispatch(self, location: Location, source: str) -> Location:
        logger.info(
            "location_selected",
            source=source,
            latitude=location.latitude,
            longitude=location.longitude,
            name=location.name,
        )
        self.on_location_select(location)
        return location

    def resolve_point(self, location: Location) -> Location:
        return self._dispatch(location, "point")

    def resolve_search(self, location: Location) -> Location:
        return self._dispatch(location, "search")

    def resolve_preset(self, location: Location) -> Location:
        return self._dispatch(location, "preset")

    def resolve_bounds(self, bounds: Bounds) -> Location:
        """Dispatch a finished rectangle.

        The bounds callback, when registered, always fires first and is
        immediately followed by the location callback with the centroid.

        Args:
            bounds: Completed rectangle

        Returns:
            Location: The centroid handed to the location callback
        """
        location = centroid_location(bounds)
        logger.info(
            "bounds_selected",
            north=bounds.north,
            south=bounds.south,
            east=bounds.east,
            west=bounds.west,
        )
        if self.on_bounds_select is not None:
            self.on_bounds_select(bounds)
        return self._dispatch(location, "rectangle")
