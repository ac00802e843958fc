"""
Per-route cost model: walk to the nearest stop, wait, ride, walk from the stop
nearest the destination.
"""
import logging
from collections.abc import Sequence

from src.data.geo import nearest_point_index, nearest_stop, path_length_m
from src.routing.models import Evaluation, Route
from src.routing.params import RoutingParams
from src.routing.time_model import DEFAULT_PARAMS, TimeBand, average_wait_minutes, bus_speed_mps, walk_speed_mps

logger = logging.getLogger(__name__)


def _walk_minutes(distance_m: float, params: RoutingParams) -> int:
    return max(params.min_walk_minutes, round(distance_m / walk_speed_mps(params) / 60))


def _bus_minutes(distance_m: float, band: TimeBand, params: RoutingParams) -> int:
    return max(params.min_bus_minutes, round(distance_m / bus_speed_mps(band, params) / 60))


def count_stops_between(route: Route, index_a: int, index_b: int) -> int:
    """Stops whose stored index lies in [min, max] inclusive, minus one, never negative."""
    start, end = min(index_a, index_b), max(index_a, index_b)
    inside = sum(1 for s in route.stops if start <= s.index <= end)
    return max(0, inside - 1)


def _unusable(route: Route, walk_from_bus_m: float = float("inf")) -> Evaluation:
    return Evaluation(route=route, usable=False, total_minutes=float("inf"), walk_from_bus_m=walk_from_bus_m)


def evaluate_route(
    route: Route,
    rider: Sequence[float],
    destination: Sequence[float],
    band: TimeBand,
    params: RoutingParams = DEFAULT_PARAMS,
) -> Evaluation:
    """
    Cost breakdown for riding `route` from `rider` to `destination` during `band`.

    Returns an unusable evaluation when the route has no stops, no path
    points, or its stop closest to the destination is farther than params.max_walk_from_bus_m.
    """
    board = nearest_stop(route, rider)
    alight = nearest_stop(route, destination)
    if board is None or alight is None or not route.points:
        logger.debug("telemetry route_rejected id=%s reason=no_stops_or_path", route.id)
        return _unusable(route)

    if alight.distance_m > params.max_walk_from_bus_m:
        logger.debug(
            "telemetry route_rejected id=%s reason=too_far walk_from_bus_m=%.0f",
            route.id,
            alight.distance_m,
        )
        return _unusable(route, alight.distance_m)

    walk_to_min = _walk_minutes(board.distance_m, params)
    walk_from_min = _walk_minutes(alight.distance_m, params)

    # Segment window comes from the path geometry, not the stops' stored index.
    board_idx, _ = nearest_point_index(route.points, board.stop.coords)
    alight_idx, _ = nearest_point_index(route.points, alight.stop.coords)
    start, end = min(board_idx, alight_idx), max(board_idx, alight_idx)
    bus_dist_m = path_length_m(route.points[start : end + 1])

    bus_min = _bus_minutes(bus_dist_m, band, params)
    wait_min = average_wait_minutes(band, params)
    total = round(walk_to_min + bus_min + walk_from_min + wait_min)

    return Evaluation(
        route=route,
        usable=True,
        total_minutes=total,
        walk_from_bus_m=alight.distance_m,
        board_stop=board.stop,
        alight_stop=alight.stop,
        walk_to_bus_m=board.distance_m,
        walk_to_bus_minutes=walk_to_min,
        walk_from_bus_minutes=walk_from_min,
        bus_minutes=bus_min,
        wait_minutes=wait_min,
        stops_between=count_stops_between(route, board.stop.index, alight.stop.index),
        segment_start_idx=start,
        segment_end_idx=end,
    )
