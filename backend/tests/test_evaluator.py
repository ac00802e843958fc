"""Tests for the per-route cost model."""
import pytest

from conftest import deg, make_route
from src.routing.evaluator import _bus_minutes, _walk_minutes, count_stops_between, evaluate_route
from src.routing.models import Route, Stop
from src.routing.params import RoutingParams
from src.routing.time_model import TimeBand

PARAMS = RoutingParams()


def test_full_breakdown_midday(equator_route):
    rider = (0.0005, 0.0)  # ~56 m north of the first stop
    dest = (0.0005, 0.010)  # ~56 m north of the last stop
    e = evaluate_route(equator_route, rider, dest, TimeBand.MIDDAY)
    assert e.usable is True
    assert e.board_stop.index == 0
    assert e.alight_stop.index == 10
    assert e.walk_to_bus_m == pytest.approx(55.6, abs=0.5)
    assert e.walk_to_bus_minutes == 1
    assert e.walk_from_bus_minutes == 1
    # ~1112 m at 14 km/h -> 4.8 min
    assert e.bus_minutes == 5
    assert e.wait_minutes == 4
    assert e.total_minutes == 11
    assert (e.segment_start_idx, e.segment_end_idx) == (0, 10)
    assert len(e.segment_points) == 11
    assert e.stops_between == 2


def test_band_changes_bus_and_wait(equator_route):
    rider, dest = (0.0, 0.0), (0.0, 0.010)
    night = evaluate_route(equator_route, rider, dest, TimeBand.NIGHT)
    midday = evaluate_route(equator_route, rider, dest, TimeBand.MIDDAY)
    assert night.bus_minutes == 3  # ~1112 m at 25 km/h is 2.7 min, floored to 3
    assert night.wait_minutes == 3
    assert night.total_minutes < midday.total_minutes


def test_reversed_direction_uses_same_window(equator_route):
    e = evaluate_route(equator_route, (0.0, 0.010), (0.0, 0.0), TimeBand.MORNING)
    assert e.board_stop.index == 10
    assert e.alight_stop.index == 0
    assert (e.segment_start_idx, e.segment_end_idx) == (0, 10)


def test_destination_2500m_from_stop_is_unusable(equator_route):
    dest = (deg(2500), 0.010)
    e = evaluate_route(equator_route, (0.0, 0.0), dest, TimeBand.MIDDAY)
    assert e.usable is False
    assert e.total_minutes == float("inf")
    assert e.walk_from_bus_m == pytest.approx(2500, abs=0.01)
    assert e.segment_points == []


def test_destination_1000m_from_stop_is_usable(equator_route):
    dest = (deg(1000), 0.010)
    e = evaluate_route(equator_route, (0.0, 0.0), dest, TimeBand.MIDDAY)
    assert e.usable is True
    assert e.walk_from_bus_m == pytest.approx(1000, abs=0.01)
    # 1000 m at 1.25 m/s = 13.3 min
    assert e.walk_from_bus_minutes == 13


def test_threshold_is_overridable(equator_route):
    dest = (deg(1000), 0.010)
    e = evaluate_route(equator_route, (0.0, 0.0), dest, TimeBand.MIDDAY, RoutingParams(max_walk_from_bus_m=500))
    assert e.usable is False


def test_route_without_stops_is_unusable():
    route = Route(id="empty", label="Empty", color="", points=[(0.0, 0.0), (0.0, 0.001)], stops=[])
    e = evaluate_route(route, (0.0, 0.0), (0.0, 0.001), TimeBand.MIDDAY)
    assert e.usable is False
    assert e.total_minutes == float("inf")
    assert e.board_stop is None


def test_route_without_points_is_unusable():
    route = Route(id="nopath", label="No path", color="", points=[], stops=[Stop(0, "only", (0.0, 0.0))])
    e = evaluate_route(route, (0.0, 0.0), (0.0, 0.0), TimeBand.MIDDAY)
    assert e.usable is False


def test_single_point_route_rides_minimum():
    route = make_route("solo", [(0.0, 0.0)], [0])
    e = evaluate_route(route, (0.0, 0.0), (0.0, 0.0), TimeBand.MORNING)
    assert e.usable is True
    assert e.bus_minutes == 3
    assert e.segment_points == [(0.0, 0.0)]


def test_minimum_walk_floor():
    assert _walk_minutes(5, PARAMS) == 1
    assert _walk_minutes(0, PARAMS) == 1


def test_minimum_bus_floor():
    assert _bus_minutes(10, TimeBand.MIDDAY, PARAMS) == 3


def test_walk_minutes_rounds_to_nearest():
    # 75 m per minute at 4.5 km/h: 450 m = 6 min, 510 m = 6.8 -> 7
    assert _walk_minutes(450, PARAMS) == 6
    assert _walk_minutes(510, PARAMS) == 7


def test_stops_between_counts_stored_indices():
    route = make_route("r", [(0.0, i * 0.001) for i in range(5)], [0, 1, 2, 3, 4])
    assert count_stops_between(route, 1, 3) == 2
    assert count_stops_between(route, 3, 1) == 2
    assert count_stops_between(route, 2, 2) == 0


def test_stops_between_never_negative():
    route = make_route("r", [(0.0, 0.0), (0.0, 0.001)], [0])
    assert count_stops_between(route, 5, 9) == 0


def test_segment_uses_geometry_while_stop_count_uses_stored_index():
    points = [(0.0, i * 0.001) for i in range(11)]
    # Middle stop sits on point 5 but was stored as index 8
    stops = [
        Stop(0, "a", points[0]),
        Stop(8, "b", points[5]),
        Stop(9, "c", points[9]),
        Stop(10, "d", points[10]),
    ]
    route = Route(id="skew", label="Skew", color="", points=points, stops=stops)
    e = evaluate_route(route, (0.0, 0.005), (0.0, 0.010), TimeBand.MIDDAY)
    assert e.board_stop.name == "b"
    assert (e.segment_start_idx, e.segment_end_idx) == (5, 10)
    # Stored indices 8..10 hold three stops
    assert e.stops_between == 2
