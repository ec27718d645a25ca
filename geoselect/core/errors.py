"""Exceptions raised inside the selection core."""


class GeocodingError(Exception):
    """Raised when a geocoding provider cannot produce candidates."""


class GeocodingTransportError(GeocodingError):
    """Raised when the lookup request fails or its response cannot be parsed."""


class SchedulerUnavailableError(RuntimeError):
    """Raised when a delayed callback is requested outside a running loop."""
