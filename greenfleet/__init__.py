"""Decision and production engine for a small renewable generation fleet."""

__version__ = "0.1.0"
