"""Pydantic models for POST /recommendation and the catalog endpoints."""
from pydantic import BaseModel, model_validator


class RecommendationRequest(BaseModel):
    lat: float
    lng: float
    destination_lat: float
    destination_lng: float
    destination_name: str | None = None
    depart_at_iso: str | None = None  # Band is taken from this time instead of now

    @model_validator(mode="after")
    def check_coordinates(self):
        if not (-90 <= self.lat <= 90):
            raise ValueError("lat must be between -90 and 90")
        if not (-180 <= self.lng <= 180):
            raise ValueError("lng must be between -180 and 180")
        if not (-90 <= self.destination_lat <= 90):
            raise ValueError("destination_lat must be between -90 and 90")
        if not (-180 <= self.destination_lng <= 180):
            raise ValueError("destination_lng must be between -180 and 180")
        return self


class StopInfo(BaseModel):
    index: int
    name: str
    lat: float
    lng: float


class RouteOption(BaseModel):
    route_id: str
    route_label: str
    route_color: str
    summary: str
    board_stop: StopInfo
    alight_stop: StopInfo
    walk_to_bus_m: int
    walk_from_bus_m: int
    walk_to_bus_minutes: int
    bus_minutes: int
    wait_minutes: int
    walk_from_bus_minutes: int
    total_minutes: int
    stops_between: int
    segment_start_idx: int
    segment_end_idx: int
    segment_points: list[list[float]]
    steps: list[dict]  # Step objects as dicts for stable JSON


class RecommendationResponse(BaseModel):
    found: bool
    band: str
    period_label: str
    destination_name: str
    message: str | None = None
    option: RouteOption | None = None


class RouteSummary(BaseModel):
    id: str
    label: str
    color: str
    stop_count: int
    point_count: int
    total_distance_m: int


class RouteDetail(RouteSummary):
    stops: list[StopInfo]


class RoutesListResponse(BaseModel):
    routes: list[RouteSummary]


class DestinationInfo(BaseModel):
    id: str
    label: str
    label_full: str
    lat: float
    lng: float
    route_id: str
    stop_index: int


class DestinationsListResponse(BaseModel):
    destinations: list[DestinationInfo]


class TimeBandResponse(BaseModel):
    band: str
    period_label: str
    bus_speed_kmh: float
    wait_minutes: int
