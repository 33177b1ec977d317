"""In-memory expense intake API."""

__version__ = "0.1.0"
