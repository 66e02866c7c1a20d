"""Great-circle distance helpers (haversine, kilometers)."""
from typing import List, Optional, Sequence

import numpy as np

from healthvia.models import GeoCoordinate, Specialist

EARTH_RADIUS_KM = 6371.0


def _haversine(origin: GeoCoordinate, lat_arr: np.ndarray, lon_arr: np.ndarray) -> np.ndarray:
    """Distances in km from ``origin`` to each (lat, lon) pair, in degrees."""
    user_lat_rad = np.radians(origin.latitude)
    user_lon_rad = np.radians(origin.longitude)
    lat_rad = np.radians(lat_arr)
    dlat = lat_rad - user_lat_rad
    dlon = np.radians(lon_arr) - user_lon_rad
    a = np.sin(dlat / 2) ** 2 + np.cos(user_lat_rad) * np.cos(lat_rad) * np.sin(dlon / 2) ** 2
    # Rounding can push a a hair outside [0, 1] for antipodal points
    a = np.clip(a, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def haversine_km(a: GeoCoordinate, b: GeoCoordinate) -> float:
    distance = _haversine(a, np.array([b.latitude], dtype=float), np.array([b.longitude], dtype=float))
    return float(distance[0])


def calculate_distances(origin: GeoCoordinate, specialists: Sequence[Specialist]) -> List[Optional[float]]:
    """Distance in km from ``origin`` to every specialist, in input order.

    Records with a missing (NaN) coordinate get ``None`` instead of a distance.
    """
    if not specialists:
        return []

    lat_arr = np.array([s.latitude for s in specialists], dtype=float)
    lon_arr = np.array([s.longitude for s in specialists], dtype=float)

    valid = ~np.isnan(lat_arr) & ~np.isnan(lon_arr)
    distances = np.full(len(specialists), np.nan)
    distances[valid] = _haversine(origin, lat_arr[valid], lon_arr[valid])

    return [None if np.isnan(d) else float(d) for d in distances]
