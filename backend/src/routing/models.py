"""
Route catalog records and per-search evaluation results.
"""
from typing import NamedTuple

from src.routing.time_model import TimeBand


class Stop(NamedTuple):
    index: int  # position in the owning route's path, assigned at load time
    name: str
    coords: tuple[float, float]


class Route(NamedTuple):
    id: str
    label: str
    color: str
    points: list[tuple[float, float]]
    stops: list[Stop]
    total_distance_m: float = 0.0  # informational
    meta: dict | None = None


class NearestStop(NamedTuple):
    stop: Stop
    distance_m: float


class Evaluation(NamedTuple):
    """Cost breakdown of riding one route from the rider to the destination.

    When ``usable`` is False only ``route``, ``walk_from_bus_m`` and
    ``total_minutes`` (infinite) are meaningful.
    """

    route: Route
    usable: bool
    total_minutes: float
    walk_from_bus_m: float = float("inf")
    board_stop: Stop | None = None
    alight_stop: Stop | None = None
    walk_to_bus_m: float = 0.0
    walk_to_bus_minutes: int = 0
    walk_from_bus_minutes: int = 0
    bus_minutes: int = 0
    wait_minutes: int = 0
    stops_between: int = 0
    segment_start_idx: int = 0
    segment_end_idx: int = 0

    @property
    def segment_points(self) -> list[tuple[float, float]]:
        """Path points of the riding segment, both ends inclusive."""
        if not self.usable:
            return []
        return self.route.points[self.segment_start_idx : self.segment_end_idx + 1]


class Selection(NamedTuple):
    evaluation: Evaluation
    band: TimeBand
