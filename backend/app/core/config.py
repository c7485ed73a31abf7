from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, model_validator
from typing import Any
import json
from pathlib import Path
import os


def _default_env_file() -> str:
    return os.getenv("ENV_FILE", str(Path(__file__).resolve().parents[3] / ".env"))


class Settings(BaseSettings):
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Facility Quote API"

    # CORS origins
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    CORS_ALLOW_ALL: bool = False

    # Base frontend URL (the marketing site hosting the calculator)
    FRONTEND_URL: str = "http://localhost:3000"

    # Currency code the site formats quotes in
    DEFAULT_CURRENCY: str = "USD"

    # Root log level; LOG_LEVEL in the process env wins over .env
    LOG_LEVEL: str = "INFO"

    # Optional JSON file with rate table overrides (see app.quote_engine.rates)
    PRICING_RATES_FILE: str = ""

    # When false the API never returns the internal margin view, even if asked.
    INCLUDE_INTERNAL_BREAKDOWN: bool = False

    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=_default_env_file(),
        case_sensitive=True,
    )

    @field_validator("CORS_ORIGINS", mode="before")
    def split_origins(cls, v: Any) -> list[str]:
        """Parse comma-separated or JSON list of origins from environment."""
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return parsed
            except json.JSONDecodeError:
                pass
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("FRONTEND_URL", "PRICING_RATES_FILE", mode="before")
    def strip_whitespace(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @model_validator(mode="after")
    def allow_all_if_requested(cls, values: "Settings") -> "Settings":
        if values.CORS_ALLOW_ALL:
            values.CORS_ORIGINS = ["*"]
        return values


def load_settings() -> "Settings":
    return Settings(_env_file=_default_env_file())


settings = load_settings()


def _dedupe(seq: list[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for item in seq:
        key = item.strip().rstrip("/")
        if not key or key in seen:
            continue
        seen.add(key)
        ordered.append(key)
    return ordered


def collect_frontend_origins(cfg: "Settings") -> list[str]:
    origins: list[str] = list(cfg.CORS_ORIGINS or [])
    base = (cfg.FRONTEND_URL or "").strip()
    if base:
        origins.append(base)
    return _dedupe(origins)
