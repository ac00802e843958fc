"""Tests for time bands and per-band speed / wait tables."""
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from src.routing.params import RoutingParams
from src.routing.time_model import (
    TimeBand,
    average_wait_minutes,
    band_for_hour,
    bus_speed_mps,
    classify_time_band,
    period_label,
    walk_speed_mps,
)


def test_every_hour_maps_to_one_band():
    bands = [band_for_hour(h) for h in range(24)]
    assert all(isinstance(b, TimeBand) for b in bands)
    assert bands.count(TimeBand.MORNING) == 6
    assert bands.count(TimeBand.MIDDAY) == 6
    assert bands.count(TimeBand.EVENING) == 4
    assert bands.count(TimeBand.NIGHT) == 8


@pytest.mark.parametrize(
    "hour,band",
    [
        (4, TimeBand.NIGHT),
        (5, TimeBand.MORNING),
        (10, TimeBand.MORNING),
        (11, TimeBand.MIDDAY),
        (16, TimeBand.MIDDAY),
        (17, TimeBand.EVENING),
        (20, TimeBand.EVENING),
        (21, TimeBand.NIGHT),
        (22, TimeBand.NIGHT),
        (0, TimeBand.NIGHT),
    ],
)
def test_band_boundaries(hour, band):
    assert band_for_hour(hour) == band


def test_classify_naive_datetime_uses_its_hour():
    assert classify_time_band(datetime(2025, 3, 1, 7, 30)) == TimeBand.MORNING


def test_classify_converts_aware_datetime_to_timezone():
    # 14:00 UTC is 08:00 in Mexico City (UTC-6, no DST since 2022)
    now = datetime(2025, 3, 1, 14, 0, tzinfo=timezone.utc)
    assert classify_time_band(now, "America/Mexico_City") == TimeBand.MORNING
    assert classify_time_band(now) == TimeBand.MIDDAY


def test_classify_defaults_to_current_time():
    assert classify_time_band(tz="UTC") in set(TimeBand)


def test_period_labels():
    assert period_label(TimeBand.MORNING) == "mañana"
    assert period_label(TimeBand.MIDDAY) == "tarde"
    assert period_label(TimeBand.EVENING) == "tarde"
    assert period_label(TimeBand.NIGHT) == "noche"


def test_bus_speed_table_in_mps():
    assert bus_speed_mps(TimeBand.MORNING) == pytest.approx(20 / 3.6)
    assert bus_speed_mps(TimeBand.MIDDAY) == pytest.approx(14 / 3.6)
    assert bus_speed_mps(TimeBand.EVENING) == pytest.approx(14 / 3.6)
    assert bus_speed_mps(TimeBand.NIGHT) == pytest.approx(25 / 3.6)


def test_bus_speed_unknown_band_falls_back_to_20_kmh():
    assert bus_speed_mps("rush") == pytest.approx(20 / 3.6)


def test_walk_speed():
    assert walk_speed_mps() == pytest.approx(1.25)


def test_wait_table():
    assert average_wait_minutes(TimeBand.MORNING) == 3
    assert average_wait_minutes(TimeBand.MIDDAY) == 4
    assert average_wait_minutes(TimeBand.EVENING) == 4
    assert average_wait_minutes(TimeBand.NIGHT) == 3


def test_params_override_tables():
    params = RoutingParams(walk_speed_kmh=3.6, bus_speed_kmh={"night": 36.0}, wait_minutes={"night": 10})
    assert walk_speed_mps(params) == pytest.approx(1.0)
    assert bus_speed_mps(TimeBand.NIGHT, params) == pytest.approx(10.0)
    assert average_wait_minutes(TimeBand.NIGHT, params) == 10


@pytest.mark.parametrize("speed", [0, -5.0])
def test_params_reject_non_positive_bus_speed(speed):
    with pytest.raises(ValidationError):
        RoutingParams(bus_speed_kmh={"night": speed})


def test_params_reject_negative_wait():
    with pytest.raises(ValidationError):
        RoutingParams(wait_minutes={"morning": -1})


def test_partial_speed_table_falls_back_for_missing_band():
    params = RoutingParams(bus_speed_kmh={"night": 30.0})
    assert bus_speed_mps(TimeBand.MORNING, params) == pytest.approx(20 / 3.6)
