"""
Optional API key auth for the routing API.

When API_KEY_REQUIRED=true, searches and catalog reads need X-API-Key or a
Bearer token. Liveness, metrics and the time band stay public, and CORS
preflights pass through so the map client can negotiate before sending a key.
"""
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

AUTH_EXEMPT_PATHS = frozenset({"/health", "/metrics", "/favicon.ico", "/time-band"})


def get_valid_api_keys(api_keys_str: str) -> frozenset[str]:
    return frozenset(k.strip() for k in api_keys_str.split(",") if k.strip())


def extract_api_key(request: Request) -> str | None:
    key = request.headers.get("X-API-Key")
    if key:
        return key.strip()
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return None


def is_exempt(request: Request) -> bool:
    if request.url.path in AUTH_EXEMPT_PATHS:
        return True
    return request.method == "OPTIONS" and "access-control-request-method" in request.headers


class OptionalAPIKeyMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, api_key_required: bool, api_keys: frozenset[str]):
        super().__init__(app)
        self.api_key_required = api_key_required
        self.valid_keys = api_keys

    async def dispatch(self, request: Request, call_next):
        if not self.api_key_required or is_exempt(request):
            return await call_next(request)
        key = extract_api_key(request)
        if key is None or key not in self.valid_keys:
            logger.warning(
                "telemetry auth_failed method=%s path=%s has_key=%s",
                request.method,
                request.url.path,
                key is not None,
            )
            return JSONResponse(
                status_code=401,
                content={"detail": "Invalid or missing API key. Provide X-API-Key or Authorization: Bearer <key>."},
            )
        return await call_next(request)
