"""Nearby-driver lookup: geohash bucketing plus haversine ranking."""

__version__ = "0.1.0"

__all__ = ["__version__"]
