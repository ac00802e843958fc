"""
Great-circle geometry over route paths and stops.
Coordinates are (lat, lng) pairs in degrees; distances are meters.
"""
import math
from collections.abc import Sequence

from src.routing.models import NearestStop, Route

# Earth radius in meters (mean radius)
EARTH_RADIUS_M = 6371000.0


def haversine_distance_m(a: Sequence[float], b: Sequence[float]) -> float:
    """Return great-circle distance between two (lat, lng) points in meters."""
    d_lat = math.radians(b[0] - a[0])
    d_lng = math.radians(b[1] - a[1])
    lat1 = math.radians(a[0])
    lat2 = math.radians(b[0])
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(h))


def path_length_m(points: Sequence[Sequence[float]]) -> float:
    """Sum of distances between consecutive points. 0 for fewer than two points."""
    total = 0.0
    for i in range(len(points) - 1):
        total += haversine_distance_m(points[i], points[i + 1])
    return total


def nearest_point_index(points: Sequence[Sequence[float]], coord: Sequence[float]) -> tuple[int, float]:
    """
    Return (index, distance_m) of the path point closest to coord.
    Ties keep the earliest index. An empty path returns (0, inf).
    """
    best_idx = 0
    best_d = float("inf")
    for i, pt in enumerate(points):
        d = haversine_distance_m(coord, pt)
        if d < best_d:
            best_d = d
            best_idx = i
    return best_idx, best_d


def nearest_stop(route: Route, coord: Sequence[float]) -> NearestStop | None:
    """Closest stop of route to coord, earliest stop on ties. None when the route has no stops."""
    best: NearestStop | None = None
    for stop in route.stops:
        d = haversine_distance_m(coord, stop.coords)
        if best is None or d < best.distance_m:
            best = NearestStop(stop=stop, distance_m=d)
    return best
