"""
Turn the selected route into an option the client can draw: board and alight
stops, rounded distances, minute breakdown and ordered itinerary steps.
"""
from datetime import datetime

from src.routing.models import Selection, Stop
from src.routing.time_model import period_label

NO_ROUTE_MESSAGE = (
    "No encontramos una ruta de camión que te deje razonablemente cerca del destino. "
    "Puedes considerar caminar o usar otro medio de transporte."
)


def parse_depart_at(depart_at_iso: str) -> datetime | None:
    try:
        return datetime.fromisoformat(depart_at_iso.replace("Z", "+00:00"))
    except ValueError:
        return None


def _stop_dict(stop: Stop) -> dict:
    return {"index": stop.index, "name": stop.name, "lat": stop.coords[0], "lng": stop.coords[1]}


def build_steps(selection: Selection) -> list[dict]:
    e = selection.evaluation
    return [
        {
            "type": "WALK_TO_STOP",
            "stop_name": e.board_stop.name,
            "distance_m": round(e.walk_to_bus_m),
            "duration_minutes": e.walk_to_bus_minutes,
            "stop_lat": e.board_stop.coords[0],
            "stop_lng": e.board_stop.coords[1],
        },
        {"type": "WAIT", "stop_name": e.board_stop.name, "duration_minutes": e.wait_minutes},
        {
            "type": "RIDE",
            "route": e.route.label,
            "stops_between": e.stops_between,
            "duration_minutes": e.bus_minutes,
            "alighting_stop_name": e.alight_stop.name,
            "alighting_stop_lat": e.alight_stop.coords[0],
            "alighting_stop_lng": e.alight_stop.coords[1],
        },
        {
            "type": "WALK_TO_DEST",
            "distance_m": round(e.walk_from_bus_m),
            "duration_minutes": e.walk_from_bus_minutes,
        },
    ]


def build_option(selection: Selection) -> dict:
    """Option dict for a usable selection (RouteOption schema)."""
    e = selection.evaluation
    route = e.route
    stops_note = f", {e.stops_between} paradas aproximadas" if e.stops_between > 0 else ""
    return {
        "route_id": route.id,
        "route_label": route.label,
        "route_color": route.color,
        "summary": (
            f"Ruta {route.label}: sube en {e.board_stop.name}, baja en {e.alight_stop.name}"
            f"{stops_note} ({e.total_minutes} min, {period_label(selection.band)})"
        ),
        "board_stop": _stop_dict(e.board_stop),
        "alight_stop": _stop_dict(e.alight_stop),
        "walk_to_bus_m": round(e.walk_to_bus_m),
        "walk_from_bus_m": round(e.walk_from_bus_m),
        "walk_to_bus_minutes": e.walk_to_bus_minutes,
        "bus_minutes": e.bus_minutes,
        "wait_minutes": e.wait_minutes,
        "walk_from_bus_minutes": e.walk_from_bus_minutes,
        "total_minutes": int(e.total_minutes),
        "stops_between": e.stops_between,
        "segment_start_idx": e.segment_start_idx,
        "segment_end_idx": e.segment_end_idx,
        "segment_points": [list(p) for p in e.segment_points],
        "steps": build_steps(selection),
    }
