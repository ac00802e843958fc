import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from settings import get_settings
from src.data.routes_repo import list_destinations, load_catalog
from src.middleware import OptionalAPIKeyMiddleware, RequestLoggingMiddleware, get_valid_api_keys
from src.monitoring import get_metrics, record_search
from src.recommendation.models import (
    DestinationInfo,
    DestinationsListResponse,
    RecommendationRequest,
    RecommendationResponse,
    RouteDetail,
    RouteOption,
    RoutesListResponse,
    RouteSummary,
    StopInfo,
    TimeBandResponse,
)
from src.recommendation.service import NO_ROUTE_MESSAGE, build_option, parse_depart_at
from src.routing.context import SearchContext
from src.routing.models import Route
from src.routing.params import RoutingParams
from src.routing.selector import select_best_route
from src.routing.time_model import average_wait_minutes, bus_speed_mps, classify_time_band, period_label

settings = get_settings()
BACKEND_ROOT = Path(__file__).resolve().parent
ROUTES_DIR = BACKEND_ROOT / settings.routes_dir
ROUTE_FILES = [f.strip() for f in settings.route_files.split(",") if f.strip()]

# Structured logging: include module and level; handlers can add JSON later
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=["100/minute"])


def build_search_context() -> SearchContext:
    routes = load_catalog(ROUTES_DIR, ROUTE_FILES)
    logger.info("telemetry catalog_ready routes=%s dir=%s", len(routes), ROUTES_DIR)
    return SearchContext(routes, params=RoutingParams.from_settings(settings), tz=settings.timezone)


def get_search_context() -> SearchContext:
    ctx: SearchContext | None = getattr(app.state, "search_context", None)
    if ctx is None:
        ctx = build_search_context()
        app.state.search_context = ctx
    return ctx


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.search_context = build_search_context()
    yield
    app.state.search_context = None


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
def unhandled_exception_handler(request: Request, exc: Exception):
    """Return consistent JSON error for unhandled exceptions (500)."""
    logger.exception("telemetry unhandled_exception path=%s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred. Please try again later."},
    )


# Order: last added = outermost. RequestLogging wraps Auth (so 401s are logged), Auth wraps CORS.
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    OptionalAPIKeyMiddleware,
    api_key_required=settings.api_key_required,
    api_keys=get_valid_api_keys(settings.api_keys),
)
app.add_middleware(RequestLoggingMiddleware)


@app.get("/favicon.ico", include_in_schema=False)
@limiter.exempt
def favicon(request: Request):
    return Response(status_code=204)


@app.get("/health")
@limiter.exempt
def health(request: Request):
    return {"status": "ok"}


@app.get("/metrics")
@limiter.exempt
def metrics(request: Request):
    return get_metrics()


# --- Route catalog ---


def _stop_infos(route: Route) -> list[StopInfo]:
    return [StopInfo(index=s.index, name=s.name, lat=s.coords[0], lng=s.coords[1]) for s in route.stops]


def _summary(route: Route) -> dict:
    return {
        "id": route.id,
        "label": route.label,
        "color": route.color,
        "stop_count": len(route.stops),
        "point_count": len(route.points),
        "total_distance_m": round(route.total_distance_m),
    }


@app.get("/routes", response_model=RoutesListResponse)
def get_routes(request: Request):
    """List loaded routes with stop count and path length."""
    ctx = get_search_context()
    return RoutesListResponse(routes=[RouteSummary(**_summary(r)) for r in ctx.routes])


@app.get("/routes/{route_id}", response_model=RouteDetail)
def get_route(request: Request, route_id: str):
    route = get_search_context().route(route_id)
    if route is None:
        raise HTTPException(status_code=404, detail=f"Route not found: {route_id}.")
    return RouteDetail(**_summary(route), stops=_stop_infos(route))


@app.get("/destinations", response_model=DestinationsListResponse)
def get_destinations(request: Request, route_id: str = ""):
    """Every stop as a pickable destination. Optional ?route_id= filter."""
    entries = list_destinations(get_search_context().routes, route_id or None)
    return DestinationsListResponse(
        destinations=[
            DestinationInfo(
                id=d.id,
                label=d.label,
                label_full=d.label_full,
                lat=d.coords[0],
                lng=d.coords[1],
                route_id=d.route_id,
                stop_index=d.stop_index,
            )
            for d in entries
        ]
    )


@app.get("/time-band", response_model=TimeBandResponse)
def get_time_band(request: Request):
    """Current band and the speed / wait assumptions it implies."""
    ctx = get_search_context()
    band = classify_time_band(tz=ctx.tz)
    return TimeBandResponse(
        band=band.value,
        period_label=period_label(band),
        bus_speed_kmh=round(bus_speed_mps(band, ctx.params) * 3.6, 1),
        wait_minutes=average_wait_minutes(band, ctx.params),
    )


# --- Recommendation (rider location -> destination) ---


@app.post("/recommendation", response_model=RecommendationResponse)
def post_recommendation(request: Request, body: RecommendationRequest):
    """Best single route from the rider to the destination, or found=false when none drops off close enough."""
    ctx = get_search_context()
    if not ctx.routes:
        raise HTTPException(status_code=503, detail="No routes loaded. Check ROUTES_DIR and ROUTE_FILES.")
    now = None
    if body.depart_at_iso:
        now = parse_depart_at(body.depart_at_iso)
        if now is None:
            raise HTTPException(
                status_code=400,
                detail="Invalid depart_at_iso. Use ISO 8601 (e.g. 2026-02-22T15:00:00Z).",
            )
    band = classify_time_band(now, ctx.tz)
    rider = (body.lat, body.lng)
    destination = (body.destination_lat, body.destination_lng)
    dest_name = body.destination_name or "Destino"
    logger.info("telemetry route=recommendation band=%s routes=%s", band.value, len(ctx.routes))

    selection = select_best_route(ctx.routes, rider, destination, band=band, params=ctx.params)
    record_search(selection is not None)
    if selection is None:
        return RecommendationResponse(
            found=False,
            band=band.value,
            period_label=period_label(band),
            destination_name=dest_name,
            message=NO_ROUTE_MESSAGE,
        )
    return RecommendationResponse(
        found=True,
        band=band.value,
        period_label=period_label(band),
        destination_name=dest_name,
        option=RouteOption(**build_option(selection)),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)
