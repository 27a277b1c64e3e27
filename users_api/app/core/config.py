"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields, so the
API starts without any configuration; a deployment overrides them via
the environment (container env, Lambda function configuration, ...).
"""

import os
from dataclasses import dataclass
from typing import Optional

ENVIRONMENTS = ("development", "production", "test")


def _environment() -> str:
    value = os.getenv("APP_ENV", "development").strip().lower()
    return value if value in ENVIRONMENTS else "development"


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Users API Demo")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    environment: str = _environment()
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Log records are also appended to this file when set.
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Either "*" or a comma‑separated list of allowed origins.
    cors_origin: str = os.getenv("CORS_ORIGIN", "*")

    # Consumed by the rate limit middleware, which currently lets every
    # request through.  The window is expressed in milliseconds.
    rate_limit_window: int = int(os.getenv("RATE_LIMIT_WINDOW", "900000"))
    rate_limit_max: int = int(os.getenv("RATE_LIMIT_MAX", "100"))

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def cors_origins(self) -> list:
        if self.cors_origin.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables
# should be set before importing this module.
settings = Settings()
