"""Read-only reporting API for the ticketing platform."""

__version__ = "1.0.0"
