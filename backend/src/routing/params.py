"""Tunable constants of the route cost model. Defaults match the published timetable assumptions."""
from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, PositiveFloat


class RoutingParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    walk_speed_kmh: float = Field(default=4.5, gt=0)
    bus_speed_kmh: dict[str, PositiveFloat] = Field(
        default_factory=lambda: {"morning": 20.0, "midday": 14.0, "evening": 14.0, "night": 25.0}
    )
    default_bus_speed_kmh: float = Field(default=20.0, gt=0)
    wait_minutes: dict[str, NonNegativeInt] = Field(
        default_factory=lambda: {"morning": 3, "midday": 4, "evening": 4, "night": 3}
    )
    max_walk_from_bus_m: float = Field(default=2000.0, ge=0)  # alight stop farther than this -> unusable
    dest_priority_margin_m: float = Field(default=150.0, ge=0)
    min_bus_minutes: int = Field(default=3, ge=0)
    min_walk_minutes: int = Field(default=1, ge=0)

    @classmethod
    def from_settings(cls, settings) -> "RoutingParams":
        return cls(
            walk_speed_kmh=settings.walk_speed_kmh,
            max_walk_from_bus_m=settings.max_walk_from_bus_m,
            dest_priority_margin_m=settings.dest_priority_margin_m,
            min_bus_minutes=settings.min_bus_minutes,
            min_walk_minutes=settings.min_walk_minutes,
        )
