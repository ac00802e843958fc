"""
Pick one route out of the catalog: closer drop-off wins, otherwise the faster one.

The reduction is left to right against a single incumbent, so with three or
more routes the winner can depend on catalog order.
"""
import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

from src.routing.evaluator import evaluate_route
from src.routing.models import Evaluation, Route, Selection
from src.routing.params import RoutingParams
from src.routing.time_model import DEFAULT_PARAMS, TimeBand, classify_time_band

logger = logging.getLogger(__name__)


def beats(candidate: Evaluation, incumbent: Evaluation, margin_m: float) -> bool:
    """True when candidate should replace incumbent."""
    closer = candidate.walk_from_bus_m + margin_m < incumbent.walk_from_bus_m
    similar = abs(candidate.walk_from_bus_m - incumbent.walk_from_bus_m) <= margin_m
    faster = candidate.total_minutes < incumbent.total_minutes
    return closer or (similar and faster)


def reduce_evaluations(evaluations: Iterable[Evaluation], margin_m: float) -> Evaluation | None:
    """Fold usable evaluations into a winner; the first usable one starts as incumbent."""
    best: Evaluation | None = None
    for e in evaluations:
        if not e.usable:
            continue
        if best is None or beats(e, best, margin_m):
            best = e
    return best


def select_best_route(
    routes: Iterable[Route],
    rider: Sequence[float],
    destination: Sequence[float],
    *,
    band: TimeBand | None = None,
    now: datetime | None = None,
    tz: str | None = None,
    params: RoutingParams = DEFAULT_PARAMS,
) -> Selection | None:
    """
    Evaluate every route under one shared time band and return the winner,
    or None when no route is usable.
    """
    if band is None:
        band = classify_time_band(now, tz)
    evaluations = [evaluate_route(r, rider, destination, band, params) for r in routes]
    best = reduce_evaluations(evaluations, params.dest_priority_margin_m)
    usable = sum(1 for e in evaluations if e.usable)
    if best is None:
        logger.info("telemetry select_best routes=%s usable=0 band=%s", len(evaluations), band.value)
        return None
    logger.info(
        "telemetry select_best routes=%s usable=%s band=%s winner=%s total_min=%s",
        len(evaluations),
        usable,
        band.value,
        best.route.id,
        best.total_minutes,
    )
    return Selection(evaluation=best, band=band)
