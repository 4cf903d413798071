"""CityFood back-office REST API."""
