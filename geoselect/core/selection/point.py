"""Single-click point selection."""

from geoselect.core.selection.resolver import LocationResolver
from geoselect.models.geographic import Coordinate, Location


class PointSelectionHandler:
    """Turns one click into a location. Holds no state between clicks."""

    def __init__(self, resolver: LocationResolver) -> None:
        self.resolver = resolver

    def handle_click(self, coordinate: Coordinate) -> Location:
        """Resolve a clicked coordinate.

        Args:
            coordinate: Clicked map coordinate

        Returns:
            Location: ``Location (<lat>, <lng>)`` at the clicked point
        """
        return self.resolver.resolve_point(Location.from_coordinate(coordinate))
