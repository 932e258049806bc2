"""Utility for logging outbound requests when CATALOG_LOG_REQUESTS is enabled."""

import json
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

REDACTED = "***REDACTED***"
SENSITIVE_PARAMS = frozenset({"apikey", "api_key", "token"})
SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})


def should_log_requests() -> bool:
    """Check if request logging is enabled via the CATALOG_LOG_REQUESTS environment variable."""
    return os.getenv("CATALOG_LOG_REQUESTS", "").lower() == "true"


def redact_params(params: dict[str, Any] | None) -> dict[str, Any]:
    """Return a copy of query parameters with credentials masked."""
    if not params:
        return {}
    return {k: REDACTED if k.lower() in SENSITIVE_PARAMS else v for k, v in params.items()}


def _redact_headers(headers: dict[str, str]) -> dict[str, str]:
    return {k: REDACTED if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()}


def build_url_with_params(url: str, params: dict[str, Any] | None) -> str:
    """Build a display URL with (already redacted) query parameters."""
    if not params:
        return url
    param_str = "&".join(f"{k}={v}" for k, v in sorted(params.items()))
    return f"{url}&{param_str}" if "?" in url else f"{url}?{param_str}"


def log_api_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> None:
    """Log an outbound request if CATALOG_LOG_REQUESTS is enabled.

    Credentials in query parameters and headers are never written to the log.

    Args:
        method: HTTP method (GET, POST, etc.).
        url: Request URL without query string.
        params: Query parameters (optional).
        headers: Request headers (optional).
    """
    if not should_log_requests():
        return

    log_parts = [f"{method} {build_url_with_params(url, redact_params(params))}"]
    if headers:
        log_parts.append(f"Headers: {json.dumps(_redact_headers(headers), indent=2)}")

    logger.info("API Request:\n" + "\n".join(log_parts))
