from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Rutas Inteligentes API"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    # CORS: "*" for dev; in production set to comma-separated origins, e.g. "https://app.example.com"
    cors_origins: str = "*"

    # Optional API key auth. When enabled, requests must include X-API-Key or Authorization: Bearer <key>.
    api_key_required: bool = False
    api_keys: str = ""  # Comma-separated list of valid keys (no spaces). Example: API_KEYS=key1,key2

    # Route catalog
    routes_dir: str = "data/rutas"  # Path relative to backend root, or absolute
    route_files: str = "cafe.json,morada.json,rosa.json"  # Empty: every *.json in routes_dir
    timezone: str = "America/Mexico_City"  # Used to pick the time band for "now"

    # Cost model overrides (band tables stay at their defaults)
    walk_speed_kmh: float = 4.5
    max_walk_from_bus_m: float = 2000.0
    dest_priority_margin_m: float = 150.0
    min_bus_minutes: int = 3
    min_walk_minutes: int = 1

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone: {value!r}") from e
        return value


def get_settings() -> Settings:
    return Settings()
