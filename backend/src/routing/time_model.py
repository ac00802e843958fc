"""
Time-of-day bands and the per-band speed and wait assumptions.
"""
from datetime import datetime
from enum import Enum
from zoneinfo import ZoneInfo

from src.routing.params import RoutingParams

DEFAULT_PARAMS = RoutingParams()


class TimeBand(str, Enum):
    MORNING = "morning"
    MIDDAY = "midday"
    EVENING = "evening"
    NIGHT = "night"


_PERIOD_LABELS = {
    TimeBand.MORNING: "mañana",
    TimeBand.MIDDAY: "tarde",
    TimeBand.EVENING: "tarde",
    TimeBand.NIGHT: "noche",
}


def band_for_hour(hour: int) -> TimeBand:
    """Half-open partition of the clock: [5,11) morning, [11,17) midday, [17,21) evening, rest night."""
    if 5 <= hour < 11:
        return TimeBand.MORNING
    if 11 <= hour < 17:
        return TimeBand.MIDDAY
    if 17 <= hour < 21:
        return TimeBand.EVENING
    return TimeBand.NIGHT


def classify_time_band(now: datetime | None = None, tz: str | None = None) -> TimeBand:
    """Band for `now` (defaults to the current time, in `tz` when given)."""
    if now is None:
        now = datetime.now(ZoneInfo(tz)) if tz else datetime.now()
    elif tz and now.tzinfo is not None:
        now = now.astimezone(ZoneInfo(tz))
    return band_for_hour(now.hour)


def period_label(band: TimeBand) -> str:
    return _PERIOD_LABELS.get(band, "tarde")


def bus_speed_mps(band: TimeBand | str, params: RoutingParams = DEFAULT_PARAMS) -> float:
    kmh = params.bus_speed_kmh.get(str(getattr(band, "value", band)), params.default_bus_speed_kmh)
    return kmh * 1000 / 3600


def walk_speed_mps(params: RoutingParams = DEFAULT_PARAMS) -> float:
    return params.walk_speed_kmh * 1000 / 3600


def average_wait_minutes(band: TimeBand | str, params: RoutingParams = DEFAULT_PARAMS) -> int:
    return params.wait_minutes.get(str(getattr(band, "value", band)), 0)
