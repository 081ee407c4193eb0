"""Building blocks for reading artifacts and rebuilding compiler input."""
