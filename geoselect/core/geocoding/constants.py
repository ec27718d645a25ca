"""Constants shared by the geocoding providers and search client."""

# Messages surfaced to the user when a search yields no location
NOT_FOUND_MESSAGE = "Location not found. Try a different search term."
FAILURE_MESSAGE = "Search failed. Please try again."

# Only the best candidate is ever used
RESULT_LIMIT = 1

# Quick locations offered next to the map
PRESET_LOCATIONS: dict[str, dict[str, float | str]] = {
    "new-delhi": {"latitude": 28.6139, "longitude": 77.2090, "name": "New Delhi, India"},
    "mumbai": {"latitude": 19.0760, "longitude": 72.8777, "name": "Mumbai, India"},
    "bengaluru": {
        "latitude": 12.9716,
        "longitude": 77.5946,
        "name": "Bengaluru, India",
    },
    "hyderabad": {
        "latitude": 17.3850,
        "longitude": 78.4867,
        "name": "Hyderabad, India",
    },
}
