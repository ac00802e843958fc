"""Pytest configuration and fixtures."""
import math
import sys
from pathlib import Path

import pytest

# Ensure backend root is on path when running pytest from repo root or backend
backend = Path(__file__).resolve().parent.parent
if str(backend) not in sys.path:
    sys.path.insert(0, str(backend))

from src.data.geo import EARTH_RADIUS_M, path_length_m  # noqa: E402
from src.routing.models import Route, Stop  # noqa: E402

# Meters per degree along a meridian (and along the equator)
M_PER_DEG = EARTH_RADIUS_M * math.pi / 180


def deg(meters: float) -> float:
    return meters / M_PER_DEG


def make_route(route_id: str, points, stop_indices, lat_offset: float = 0.0, label: str | None = None) -> Route:
    """Route whose stops sit exactly on the given path points."""
    pts = [(lat + lat_offset, lng) for lat, lng in points]
    stops = [Stop(index=i, name=f"{route_id}-stop-{i}", coords=pts[i]) for i in stop_indices]
    return Route(
        id=route_id,
        label=label or route_id.title(),
        color="#123456",
        points=pts,
        stops=stops,
        total_distance_m=path_length_m(pts),
    )


@pytest.fixture
def equator_route() -> Route:
    """11 points along the equator ~111 m apart, stops at 0, 5 and 10."""
    points = [(0.0, i * 0.001) for i in range(11)]
    return make_route("cafe", points, [0, 5, 10])
