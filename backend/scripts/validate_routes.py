#!/usr/bin/env python3
"""
Check a directory of route JSON files before deploying it.

Prints one line per route (stops, path points, total length) and flags stops
whose stored index disagrees with the nearest path point, since ride segments
use path geometry while the stop count uses the stored index.

  python scripts/validate_routes.py --dir data/rutas
"""
import argparse
import sys
from pathlib import Path

# Add backend root to path
backend = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(backend))

from src.data.geo import nearest_point_index
from src.data.routes_repo import RouteDataError, load_route


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate route catalog JSON files")
    parser.add_argument("--dir", default=backend / "data" / "rutas", type=Path, help="Directory of route JSON files")
    parser.add_argument(
        "--tolerance",
        default=0,
        type=int,
        help="Allowed difference between a stop's stored index and its nearest path point index",
    )
    args = parser.parse_args()

    if not args.dir.is_dir():
        print(f"Error: directory not found: {args.dir}", file=sys.stderr)
        return 1

    files = sorted(args.dir.glob("*.json"))
    if not files:
        print(f"Error: no *.json files in {args.dir}", file=sys.stderr)
        return 1

    errors = 0
    for path in files:
        try:
            route = load_route(path)
        except (OSError, RouteDataError) as e:
            print(f"{path.name}: ERROR {e}", file=sys.stderr)
            errors += 1
            continue
        print(
            f"{path.name}: id={route.id} stops={len(route.stops)} points={len(route.points)} "
            f"total_m={route.total_distance_m:.0f}"
        )
        if len(route.points) < 2:
            print(f"  warning: path has {len(route.points)} point(s)")
        if not route.stops:
            print("  warning: route has no stops and will never be suggested")
        for stop in route.stops:
            idx, dist = nearest_point_index(route.points, stop.coords)
            if abs(idx - stop.index) > args.tolerance:
                print(f"  index mismatch: {stop.name!r} stored={stop.index} nearest_point={idx} ({dist:.0f} m)")
    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
