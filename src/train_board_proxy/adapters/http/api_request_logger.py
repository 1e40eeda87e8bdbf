"""Utility for logging outbound requests when TBP_LOG_REQUESTS is enabled."""

import json
import logging
import os
from collections.abc import Mapping

logger = logging.getLogger(__name__)

_SENSITIVE_HEADERS = {"authorization", "cookie", "x-api-key"}


def should_log_requests() -> bool:
    """Check if request logging is enabled via TBP_LOG_REQUESTS environment variable."""
    return os.getenv("TBP_LOG_REQUESTS", "").lower() == "true"


def _redact_sensitive_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        k: "***REDACTED***" if k.lower() in _SENSITIVE_HEADERS else v for k, v in headers.items()
    }


def log_outbound_request(
    method: str,
    url: str,
    attempt: int,
    headers: Mapping[str, str] | None = None,
) -> None:
    """Log outbound request details if TBP_LOG_REQUESTS is enabled.

    Args:
        method: HTTP method.
        url: Request URL.
        attempt: 1-based attempt number.
        headers: Request headers (sensitive ones are redacted).
    """
    if not should_log_requests():
        return

    log_parts = [f"{method} {url} (attempt {attempt})"]
    if headers:
        safe_headers = _redact_sensitive_headers(headers)
        log_parts.append(f"Headers: {json.dumps(safe_headers, indent=2)}")

    logger.info("Upstream Request:\n" + "\n".join(log_parts))
