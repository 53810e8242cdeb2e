from __future__ import annotations

from dataclasses import replace
from typing import Sequence

import numpy as np

from .config import DEFAULT_SEARCH_CONFIG
from .models import Candidate

EARTH_RADIUS_MILES = DEFAULT_SEARCH_CONFIG.earth_radius_miles


def haversine_miles(lat1, lon1, lat2, lon2, radius: float = EARTH_RADIUS_MILES):
    """
    Great-circle distance in miles.

    Accepts scalars or numpy arrays (broadcast); scalars in, float out.
    """
    lat1, lon1, lat2, lon2 = (np.radians(np.asarray(v, dtype=float)) for v in (lat1, lon1, lat2, lon2))
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    # Rounding can push a a hair above 1 for antipodal points
    a = np.clip(a, 0.0, 1.0)
    distance = 2 * radius * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    if np.ndim(distance) == 0:
        return float(distance)
    return distance


def filter_by_radius(
    candidates: Sequence[Candidate],
    latitude: float,
    longitude: float,
    radius: float,
) -> list[Candidate]:
    """Keep candidates within ``radius`` miles of the origin, with distance attached."""
    if not candidates:
        return []

    lats = np.fromiter((c.business.latitude for c in candidates), dtype=float, count=len(candidates))
    lons = np.fromiter((c.business.longitude for c in candidates), dtype=float, count=len(candidates))
    distances = haversine_miles(latitude, longitude, lats, lons)

    return [
        replace(candidate, distance=float(distance))
        for candidate, distance in zip(candidates, distances)
        if distance <= radius
    ]
