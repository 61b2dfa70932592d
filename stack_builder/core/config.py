"""Shared configuration helpers for Stack Builder."""

import logging
import os
from typing import Dict, Optional

from dotenv import load_dotenv

from stack_builder.shared.errors import ConfigurationError

DEFAULT_SUBMISSION_DELAY_SECONDS = 1.0
DEFAULT_OTLP_ENDPOINT = "http://localhost:4317"


def load_environment() -> None:
    """Load environment variables from .env if present."""
    load_dotenv()


def get_log_level(default: int = logging.INFO) -> int:
    """Resolve APP_LOG_LEVEL to a logging level, defaulting to INFO."""
    level_name = os.getenv("APP_LOG_LEVEL", "").upper()
    level = getattr(logging, level_name, None) if level_name else None
    return level if isinstance(level, int) else default


def get_flask_secret() -> str:
    """Return the Flask secret key or raise if missing."""
    secret = os.getenv("FLASK_SECRET_KEY")
    if not secret:
        raise ConfigurationError(
            "FLASK_SECRET_KEY environment variable is not set. Set a strong value for production."
        )
    return secret


def get_port(default: int = 8000) -> int:
    """Return the desired port for local hosting."""
    try:
        return int(os.getenv("PORT", default))
    except ValueError:
        return default


def get_submission_delay(default: float = DEFAULT_SUBMISSION_DELAY_SECONDS) -> float:
    """
    Return the simulated contact submission delay in seconds.

    Invalid or negative values fall back to the default.
    """
    try:
        delay = float(os.getenv("SUBMISSION_DELAY_SECONDS", default))
    except ValueError:
        return default
    return delay if delay >= 0 else default


def is_otel_enabled() -> bool:
    """True when ENABLE_OTEL=true; gates trace and metric export."""
    return os.getenv("ENABLE_OTEL", "").lower() == "true"


def get_service_name(default: str) -> str:
    """Return OTEL_SERVICE_NAME when set, else the entry point's own name."""
    return os.getenv("OTEL_SERVICE_NAME") or default


def get_otlp_endpoint(default: Optional[str] = None) -> Optional[str]:
    """Return the OTLP collector endpoint, preferring OTLP_ENDPOINT over the OTel default var."""
    endpoint = os.getenv("OTLP_ENDPOINT") or os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    return endpoint.rstrip("/") if endpoint else default


def parse_otlp_headers(raw_headers: Optional[str]) -> Dict[str, str]:
    """
    Parse ``key=value`` pairs separated by commas.

    Pairs without ``=`` are skipped; keys and values are stripped.
    """
    headers: Dict[str, str] = {}
    for pair in (raw_headers or "").split(","):
        if "=" not in pair:
            continue
        key, value = pair.split("=", 1)
        if key.strip():
            headers[key.strip()] = value.strip()
    return headers


def get_otlp_headers() -> Dict[str, str]:
    """Return exporter headers from OTLP_HEADERS or OTEL_EXPORTER_OTLP_HEADERS."""
    return parse_otlp_headers(
        os.getenv("OTLP_HEADERS") or os.getenv("OTEL_EXPORTER_OTLP_HEADERS")
    )
