"""Shared utilities for distance and date handling."""

from .dates import OPEN_RANGE_END, days_since, parse_iso
from .geo import EARTH_RADIUS_KM, haversine_distance, round_half_up

__all__ = [
    "EARTH_RADIUS_KM",
    "OPEN_RANGE_END",
    "days_since",
    "haversine_distance",
    "parse_iso",
    "round_half_up",
]
