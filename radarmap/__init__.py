"""Map projection, map file handling and radar display models."""

__version__ = "0.1.0"

__all__ = [
    "geodesy",
    "validators",
    "datmap",
    "sqlgen",
    "mapfile",
    "aircraft",
    "radar",
]