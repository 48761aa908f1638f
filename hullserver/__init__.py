"""Convex hull geometry, a two-container point state, batch tools and TCP command servers."""

__version__ = "0.1.0"
__all__ = [
    "batch",
    "commands",
    "geometry",
    "monitor",
    "monitored",
    "proactor",
    "reactor",
    "servers",
    "state",
    "threaded",
]