"""Geographic models for map selections and coordinate handling."""

from enum import Enum
from typing import Literal, TypeAlias

from geopy.distance import geodesic
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def format_degrees(value: float) -> str:
    """Format a coordinate component with four decimal places.

    Args:
        value: Latitude or longitude in decimal degrees

    Returns:
        str: Value rounded to 4 decimal places, never rendered as ``-0.0000``
            for an exact negative zero
    """
    return f"{value + 0.0:.4f}"


class Coordinate(BaseModel):
    """Raw map-space point reported by the viewport."""

    lat: float = Field(..., description="Latitude in decimal degrees")
    lng: float = Field(..., description="Longitude in decimal degrees")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, value: "Coordinate | tuple[float, float]") -> "Coordinate":
        """Accept either a Coordinate or a ``(lat, lng)`` pair."""
        if isinstance(value, Coordinate):
            return value
        lat, lng = value
        return cls(lat=float(lat), lng=float(lng))


class Location(BaseModel):
    """A resolved location handed to the host."""

    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")
    name: str = Field(..., description="Human readable name, never empty")

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        """Reject empty or whitespace-only names."""
        if not value.strip():
            raise ValueError("Location name must not be empty")
        return value

    @classmethod
    def from_coordinate(cls, coordinate: Coordinate) -> "Location":
        """Create a location named after its own coordinates.

        Args:
            coordinate: Clicked map coordinate

        Returns:
            Location: Location named ``Location (<lat>, <lng>)``
        """
        return cls(
            latitude=coordinate.lat,
            longitude=coordinate.lng,
            name=(
                f"Location ({format_degrees(coordinate.lat)}, "
                f"{format_degrees(coordinate.lng)})"
            ),
        )


class Bounds(BaseModel):
    """Geographic bounding box of a rectangle selection."""

    north: float = Field(..., description="Northern latitude boundary")
    south: float = Field(..., description="Southern latitude boundary")
    east: float = Field(..., description="Eastern longitude boundary")
    west: float = Field(..., description="Western longitude boundary")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_ordering(self) -> "Bounds":
        """Ensure the box is not inverted."""
        if self.north < self.south:
            raise ValueError(
                f"north ({self.north}) must not be less than south ({self.south})"
            )
        if self.east < self.west:
            raise ValueError(
                f"east ({self.east}) must not be less than west ({self.west})"
            )
        return self

    @classmethod
    def from_corners(cls, first: Coordinate, second: Coordinate) -> "Bounds":
        """Create bounds spanning two opposite corners in any order.

        Args:
            first: One corner, typically the anchor click
            second: The opposite corner

        Returns:
            Bounds: Axis-aligned box covering both corners
        """
        return cls(
            north=max(first.lat, second.lat),
            south=min(first.lat, second.lat),
            east=max(first.lng, second.lng),
            west=min(first.lng, second.lng),
        )

    @property
    def centroid(self) -> Coordinate:
        """Midpoint of the box."""
        return Coordinate(
            lat=(self.north + self.south) / 2,
            lng=(self.east + self.west) / 2,
        )

    @property
    def name(self) -> str:
        """Get a descriptive name for this bounding box.

        Returns:
            str: Latitude span of the box
        """
        return f"Area ({format_degrees(self.south)} to {format_degrees(self.north)})"

    def contains(self, latitude: float, longitude: float) -> bool:
        """Check whether a point lies inside the box, edges included."""
        return (
            self.south <= latitude <= self.north
            and self.west <= longitude <= self.east
        )

    @property
    def width_km(self) -> float:
        """Geodesic east-west extent measured along the middle latitude."""
        middle = (self.north + self.south) / 2
        return geodesic((middle, self.west), (middle, self.east)).km

    @property
    def height_km(self) -> float:
        """Geodesic north-south extent measured along the middle longitude."""
        middle = (self.east + self.west) / 2
        return geodesic((self.south, middle), (self.north, middle)).km

    @property
    def area_km2(self) -> float:
        """Approximate covered area in square kilometres."""
        return self.width_km * self.height_km


class SelectionMode(str, Enum):
    """How map clicks are interpreted."""

    POINT = "point"
    RECTANGLE = "rectangle"

    @property
    def label(self) -> str:
        """Mode indicator text shown over the map."""
        if self is SelectionMode.POINT:
            return "📍 Point Selection"
        return "🟦 Rectangle Selection"


class Idle(BaseModel):
    """No rectangle is being drawn."""

    kind: Literal["idle"] = "idle"

    model_config = ConfigDict(frozen=True)


class Anchored(BaseModel):
    """First corner placed, live corner follows the pointer."""

    kind: Literal["anchored"] = "anchored"
    anchor: Coordinate
    live: Coordinate
    session_id: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)


DrawingState: TypeAlias = Idle | Anchored

IDLE = Idle()


class RectanglePreview(BaseModel):
    """Rectangle outline the host draws while a selection is in progress."""

    anchor: Coordinate
    live: Coordinate
    session_id: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def bounds(self) -> Bounds:
        """Box spanned by the anchor and the live corner."""
        return Bounds.from_corners(self.anchor, self.live)
