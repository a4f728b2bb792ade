"""Weather Dashboard API: authenticated weather proxy with per-user search history."""

__version__ = "1.0.0"
