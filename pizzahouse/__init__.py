"""Pizzeria locator with k-d tree spatial queries, neighborhoods and undo."""

__version__ = "0.1.0"
__all__ = ["__version__"]