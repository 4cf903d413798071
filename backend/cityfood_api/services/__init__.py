"""Service layer for the back-office API."""
