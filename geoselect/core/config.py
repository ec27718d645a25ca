"""Application configuration."""

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

GEOCODING_PROVIDERS = ("nominatim", "arcgis")


class Settings(BaseSettings):
    """
    Selection core settings.

    Environment variables will be loaded and validated using Pydantic.
    """

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    # Geocoding Settings
    GEOCODING_PROVIDER: str = "nominatim"
    GEOCODING_URL: str = "https://nominatim.openstreetmap.org/search"
    GEOCODING_USER_AGENT: str = "geoselect"
    GEOCODING_TIMEOUT: float | None = None  # None keeps the transport default

    # Viewport Settings
    SEARCH_ZOOM: int = Field(default=12, ge=0)
    INITIAL_LOCATION_ZOOM: int = Field(default=10, ge=0)
    MAP_DEFAULT_CENTER: tuple[float, float] = (20.5937, 78.9629)  # India
    MAP_DEFAULT_ZOOM: int = Field(default=5, ge=0)
    MAP_MAX_ZOOM: int = Field(default=18, ge=0)

    # Selection Settings
    PREVIEW_RESET_DELAY: float = Field(
        default=1.0, ge=0, description="Seconds a finished rectangle stays visible"
    )
    DEFAULT_MODE: str = "point"

    # Default location offered before the user picks anything
    DEFAULT_LOCATION_LATITUDE: float = Field(default=28.6139, ge=-90, le=90)
    DEFAULT_LOCATION_LONGITUDE: float = Field(default=77.2090, ge=-180, le=180)
    DEFAULT_LOCATION_NAME: str = Field(default="New Delhi, India", min_length=1)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",  # Allow extra fields in environment
    )

    @field_validator("GEOCODING_PROVIDER")
    @classmethod
    def validate_provider(cls, value: str) -> str:
        """Normalize and validate the geocoding provider name."""
        provider = value.strip().lower()
        if provider not in GEOCODING_PROVIDERS:
            raise ValueError(
                f"Unknown geocoding provider {value!r}, "
                f"expected one of {', '.join(GEOCODING_PROVIDERS)}"
            )
        return provider

    @field_validator("DEFAULT_MODE")
    @classmethod
    def validate_default_mode(cls, value: str) -> str:
        """Validate the mode a new session starts in."""
        mode = value.strip().lower()
        if mode not in ("point", "rectangle"):
            raise ValueError(f"Unknown selection mode {value!r}")
        return mode

    @model_validator(mode="after")
    def validate_zoom_levels(self) -> "Settings":
        """Keep every configured zoom within the map's maximum."""
        for field in ("SEARCH_ZOOM", "INITIAL_LOCATION_ZOOM", "MAP_DEFAULT_ZOOM"):
            zoom = getattr(self, field)
            if zoom > self.MAP_MAX_ZOOM:
                raise ValueError(
                    f"{field} {zoom} exceeds MAP_MAX_ZOOM {self.MAP_MAX_ZOOM}"
                )
        return self


# Create settings instance
settings = Settings()
