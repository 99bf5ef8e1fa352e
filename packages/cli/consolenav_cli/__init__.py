"""consolenav CLI: inspect and query the navigation catalog."""

__version__ = "0.1.0"
