"""In-memory request and search counters for the /metrics endpoint."""
import time
from collections.abc import MutableMapping
from threading import Lock

_start_time = time.monotonic()
_counts: MutableMapping[str, int] = {}
_lock = Lock()


def _bump(key: str) -> None:
    with _lock:
        _counts[key] = _counts.get(key, 0) + 1


def record_request(status_code: int) -> None:
    if 200 <= status_code < 300:
        bucket = "2xx"
    elif 400 <= status_code < 500:
        bucket = "4xx"
    elif status_code >= 500:
        bucket = "5xx"
    else:
        bucket = "other"
    _bump(bucket)


def record_search(found: bool) -> None:
    _bump("search_found" if found else "search_no_route")


def reset_metrics() -> None:
    with _lock:
        _counts.clear()


def get_metrics() -> dict:
    with _lock:
        counts = dict(_counts)
    uptime_seconds = time.monotonic() - _start_time
    requests_total = sum(counts.get(k, 0) for k in ("2xx", "4xx", "5xx", "other"))
    return {
        "requests_total": requests_total,
        "requests_2xx": counts.get("2xx", 0),
        "requests_4xx": counts.get("4xx", 0),
        "requests_5xx": counts.get("5xx", 0),
        "searches_found": counts.get("search_found", 0),
        "searches_no_route": counts.get("search_no_route", 0),
        "uptime_seconds": round(uptime_seconds, 1),
    }
