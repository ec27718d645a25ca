"""Selection core internals: configuration, logging, geocoding, selection."""
