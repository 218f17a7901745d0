"""
Great-circle distance on a spherical Earth.

Every clustering strategy measures proximity with the haversine formula.
The scalar and vectorised forms share one implementation so that a
neighbourhood query over an array gives exactly the same metres as a
pairwise call.
"""

from __future__ import annotations

import numpy as np

from .models import Coordinate, Point


EARTH_RADIUS_M = 6_371_000.0


def _haversine(lat1, lng1, lat2, lng2):
    lat1_r = np.radians(lat1)
    lat2_r = np.radians(lat2)
    d_lat = np.radians(np.subtract(lat2, lat1))
    d_lng = np.radians(np.subtract(lng2, lng1))

    a = (
        np.sin(d_lat / 2) ** 2
        + np.cos(lat1_r) * np.cos(lat2_r) * np.sin(d_lng / 2) ** 2
    )
    return 2 * EARTH_RADIUS_M * np.arctan2(np.sqrt(a), np.sqrt(1 - a))


def haversine_distance(a: Point | Coordinate, b: Point | Coordinate) -> float:
    """
    Distance in metres between two points.

    No validation is performed: NaN coordinates yield NaN, and coordinates
    outside the usual ranges still produce a (meaningless) number.

    Examples:
        >>> sf = Coordinate(37.7749, -122.4194)
        >>> la = Coordinate(34.0522, -118.2437)
        >>> round(haversine_distance(sf, la) / 1000)
        559
    """
    return float(_haversine(a.latitude, a.longitude, b.latitude, b.longitude))


def haversine_many(
    origin: Point | Coordinate,
    lats: np.ndarray,
    lngs: np.ndarray,
) -> np.ndarray:
    """Distances in metres from ``origin`` to every (lat, lng) pair."""
    return _haversine(origin.latitude, origin.longitude, lats, lngs)


def coordinate_arrays(points) -> tuple[np.ndarray, np.ndarray]:
    """Split points into float64 latitude and longitude arrays."""
    lats = np.fromiter((p.latitude for p in points), dtype=float, count=len(points))
    lngs = np.fromiter((p.longitude for p in points), dtype=float, count=len(points))
    return lats, lngs
