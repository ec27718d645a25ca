"""Point and rectangle selection on an interactive map."""

from geoselect.core.selection.mode import SelectionModeController
from geoselect.core.selection.point import PointSelectionHandler
from geoselect.core.selection.rectangle import RectangleDrawingStateMachine
from geoselect.core.selection.resolver import LocationResolver, centroid_location
from geoselect.core.selection.session import SelectionSession

__all__ = [
    "LocationResolver",
    "PointSelectionHandler",
    "RectangleDrawingStateMachine",
    "SelectionModeController",
    "SelectionSession",
    "centroid_location",
]
