"""
Route catalog: one JSON file per route.

Record schema:
  {"name": str, "label": str, "color": str, "meta": any,
   "points": [[lat, lng], ...],
   "paradas": [{"index": int, "nombre": str, "coords": [lat, lng]}, ...]}
"""
import json
import logging
from pathlib import Path
from typing import NamedTuple

from src.data.geo import path_length_m
from src.routing.models import Route, Stop

logger = logging.getLogger(__name__)

DEFAULT_ROUTE_FILES = ("cafe.json", "morada.json", "rosa.json")


class RouteDataError(ValueError):
    """A route record does not match the catalog schema."""


class DestinationEntry(NamedTuple):
    id: str  # "<route id>-<stop index>"
    label: str
    label_full: str
    coords: tuple[float, float]
    route_id: str
    stop_index: int


def _coords(value, where: str) -> tuple[float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise RouteDataError(f"{where}: expected [lat, lng], got {value!r}")
    try:
        lat, lng = float(value[0]), float(value[1])
    except (TypeError, ValueError) as e:
        raise RouteDataError(f"{where}: non-numeric coordinate {value!r}") from e
    if not (-90 <= lat <= 90) or not (-180 <= lng <= 180):
        raise RouteDataError(f"{where}: coordinate out of range {value!r}")
    return lat, lng


def parse_route(data: dict) -> Route:
    """Build a Route from one catalog record; total distance is computed here."""
    if not isinstance(data, dict):
        raise RouteDataError("route record must be an object")
    for key in ("name", "points", "paradas"):
        if key not in data:
            raise RouteDataError(f"route record missing '{key}'")
    for key in ("points", "paradas"):
        if not isinstance(data[key], list):
            raise RouteDataError(f"'{key}' must be a list, got {type(data[key]).__name__}")
    route_id = str(data["name"])
    points = [_coords(p, f"{route_id} points[{i}]") for i, p in enumerate(data["points"])]
    stops = []
    for i, p in enumerate(data["paradas"]):
        where = f"{route_id} paradas[{i}]"
        if not isinstance(p, dict) or "coords" not in p or "index" not in p:
            raise RouteDataError(f"{where}: expected object with index, nombre, coords")
        if isinstance(p["index"], bool) or not isinstance(p["index"], int):
            raise RouteDataError(f"{where}: index must be an integer")
        stops.append(Stop(index=p["index"], name=str(p.get("nombre", "")), coords=_coords(p["coords"], where)))
    return Route(
        id=route_id,
        label=str(data.get("label") or route_id),
        color=str(data.get("color") or ""),
        points=points,
        stops=stops,
        total_distance_m=path_length_m(points),
        meta=data.get("meta"),
    )


def load_route(path: str | Path) -> Route:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise RouteDataError(f"{path.name}: not UTF-8 ({e})") from e
    except json.JSONDecodeError as e:
        raise RouteDataError(f"{path.name}: invalid JSON ({e})") from e
    return parse_route(data)


def load_catalog(routes_dir: str | Path, files: list[str] | tuple[str, ...] | None = None) -> list[Route]:
    """
    Load routes from routes_dir in the given file order (every *.json, sorted, when files is empty).
    Broken files are logged and skipped; a missing directory yields an empty catalog.
    """
    routes_dir = Path(routes_dir)
    if not routes_dir.is_dir():
        logger.warning("telemetry catalog_missing dir=%s", routes_dir)
        return []
    paths = [routes_dir / f for f in files] if files else sorted(routes_dir.glob("*.json"))
    routes: list[Route] = []
    for path in paths:
        try:
            route = load_route(path)
        except (OSError, RouteDataError) as e:
            logger.warning("telemetry catalog_skip file=%s error=%s", path.name, str(e))
            continue
        logger.info(
            "telemetry catalog_loaded id=%s stops=%s points=%s total_m=%.0f",
            route.id,
            len(route.stops),
            len(route.points),
            route.total_distance_m,
        )
        routes.append(route)
    return routes


def list_destinations(routes: list[Route], route_id: str | None = None) -> list[DestinationEntry]:
    """Every stop of every route as a pickable destination."""
    entries = []
    for r in routes:
        if route_id and r.id != route_id:
            continue
        for s in r.stops:
            entries.append(
                DestinationEntry(
                    id=f"{r.id}-{s.index}",
                    label=s.name,
                    label_full=f"{s.name} · {r.label}",
                    coords=s.coords,
                    route_id=r.id,
                    stop_index=s.index,
                )
            )
    return entries
