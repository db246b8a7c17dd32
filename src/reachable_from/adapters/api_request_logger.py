"""Logging of outgoing timetable requests when RF_LOG_REQUESTS is enabled."""

import json
import logging
import os
from typing import Any
from urllib.parse import urlencode

logger = logging.getLogger(__name__)

LOG_REQUESTS_ENV = "RF_LOG_REQUESTS"
_SENSITIVE_HEADERS = {"authorization", "cookie", "x-api-key"}


def should_log_requests() -> bool:
    """Check if request logging is enabled via the RF_LOG_REQUESTS environment variable."""
    return os.getenv(LOG_REQUESTS_ENV, "").lower() == "true"


def build_request_url(url: str, params: dict[str, Any] | None) -> str:
    """Render ``url`` with its query parameters in a stable (sorted) order."""
    if not params:
        return url
    query = urlencode(sorted(params.items()))
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Hide credentials from logged headers."""
    return {
        k: "***REDACTED***" if k.lower() in _SENSITIVE_HEADERS else v for k, v in headers.items()
    }


def log_api_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> None:
    """Log an outgoing request if RF_LOG_REQUESTS is enabled."""
    if not should_log_requests():
        return

    log_parts = [f"{method} {build_request_url(url, params)}"]
    if headers:
        log_parts.append(f"Headers: {json.dumps(redact_headers(headers), indent=2)}")

    logger.info("API Request:\n" + "\n".join(log_parts))
