"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Nested BaseSettings don't inherit env_file, so populate os.environ first
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_classifier_settings() -> "ClassifierSettings":
    return ClassifierSettings()  # type: ignore[call-arg]


def _build_app_settings() -> "AppSettings":
    return AppSettings()  # type: ignore[call-arg]


def _build_log_settings() -> "LogSettings":
    return LogSettings()  # type: ignore[call-arg]


class ClassifierSettings(BaseSettings):
    """Dream classifier provider configuration.

    The ``keyword`` provider runs locally and needs nothing else. The
    ``openai`` provider needs an API key; without one the factory falls back
    to ``keyword``.
    """

    provider: str = Field(
        "keyword",
        description="Classifier provider name (keyword, openai)",
    )
    model: str = Field(
        "gpt-4o-mini",
        description="Model name used by remote providers",
    )
    api_key: str | None = Field(
        None,
        description="API key for cloud providers",
    )
    base_url: str | None = Field(
        None,
        description="Custom API endpoint for OpenAI-compatible servers",
    )
    timeout_seconds: float = Field(
        20.0,
        description="Request timeout in seconds",
    )

    model_config = SettingsConfigDict(
        env_prefix="CLASSIFIER_",
        case_sensitive=False,
    )


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    max_dream_chars: int = Field(
        2000,
        description="Maximum dream narrative length in characters",
        ge=1,
    )
    dream_list_limit: int = Field(
        500,
        description="Maximum number of dreams returned by the listing endpoint",
        ge=1,
    )
    seed_demo_dreams: bool = Field(
        True,
        description="Preload the in-memory store with demo dreams",
    )
    classification_cache_ttl_seconds: int = Field(
        3600,
        description="TTL for cached classification results",
        ge=1,
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable the rolling-window submission limit per owner id",
    )
    rate_limit_max_count: int = Field(
        2,
        description="Maximum number of dream submissions allowed per window",
        ge=1,
    )
    rate_limit_window_ms: int = Field(
        24 * 60 * 60 * 1000,
        description="Rolling window size in milliseconds",
        ge=1,
    )
    rate_limit_include_headers: bool = Field(
        True,
        description="Include Retry-After and X-RateLimit-* headers when throttling",
    )

    trending_symbols_limit: int = Field(
        4,
        description="Number of trending symbols returned per region",
        ge=1,
    )
    geo_honor_holes: bool = Field(
        False,
        description="Exclude points inside polygon holes from region containment",
    )
    boundaries_path: str | None = Field(
        None,
        description="Path to a GeoJSON FeatureCollection of country boundaries",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: json or plain")
    output: str = Field("stdout", description="Log destination: stdout or file")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(
        10 * 1024 * 1024,
        description="Rotate the log file at this size (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(5, description="Rotated files to keep", ge=0)
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to propagate the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if a setting is malformed.
    """

    app_env: str = APP_ENV
    classifier: ClassifierSettings = Field(default_factory=_build_classifier_settings)
    app: AppSettings = Field(default_factory=_build_app_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


settings = Settings()
