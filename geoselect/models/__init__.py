"""Data models for map selections."""

from geoselect.models.geographic import (
    IDLE,
    Anchored,
    Bounds,
    Coordinate,
    DrawingState,
    Idle,
    Location,
    RectanglePreview,
    SelectionMode,
)

__all__ = [
    "IDLE",
    "Anchored",
    "Bounds",
    "Coordinate",
    "DrawingState",
    "Idle",
    "Location",
    "RectanglePreview",
    "SelectionMode",
]
