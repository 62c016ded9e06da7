"""launchdeck - grouped application launcher with a SQLite state store."""

__version__ = "0.1.0"
