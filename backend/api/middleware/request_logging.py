"""
Request logging middleware - sampled access log for the search API.

One line per logged request on the "api.request" logger:

    api_request path=/api/rooms method=GET status=200 duration_ms=12.4
        params=city,lat,lng,minRent request_id=...

Search traffic (REQUEST_LOG_ENDPOINTS, default /api/rooms) is always logged
so filter usage and slow geo searches can be read off the log. Other /api
paths are sampled at REQUEST_LOG_SAMPLE_RATE.

Only the names of the query parameters are logged. Their values are free
text (search terms, coordinates) and stay out of the access log.
"""

import logging
import random
import time
from typing import List

from flask import Flask, g, request


logger = logging.getLogger("api.request")


def _parse_watchlist(raw: str) -> List[str]:
    if not raw:
        return []
    return [p.strip() for p in raw.split(",") if p.strip()]


def _should_log(path: str, watchlist: List[str], sample_rate: float) -> bool:
    if watchlist and any(path.startswith(prefix) for prefix in watchlist):
        return True
    if sample_rate <= 0:
        return False
    if sample_rate >= 1:
        return True
    return random.random() <= sample_rate


def _param_names() -> str:
    names = sorted(set(request.args.keys()))
    return ",".join(names) if names else "-"


def setup_request_logging_middleware(app: Flask) -> None:
    """
    Register the timer and access-log hooks on the app.

    Config keys (see config.Config, overridable by env):
      - REQUEST_LOG_ENABLED (default: true)
      - REQUEST_LOG_SAMPLE_RATE (default: 0.0)
      - REQUEST_LOG_ENDPOINTS (comma-separated path prefixes to always log)
    """
    enabled = bool(app.config.get("REQUEST_LOG_ENABLED", True))
    try:
        sample_rate = float(app.config.get("REQUEST_LOG_SAMPLE_RATE", 0.0))
    except (TypeError, ValueError):
        sample_rate = 0.0
    watchlist = _parse_watchlist(app.config.get("REQUEST_LOG_ENDPOINTS", ""))

    if not enabled:
        return

    @app.before_request
    def _start_timer():
        g.request_start = time.perf_counter()

    @app.after_request
    def _log_request(response):
        path = request.path
        if not path.startswith("/api"):
            return response

        if not _should_log(path, watchlist, sample_rate):
            return response

        duration_ms = None
        if hasattr(g, "request_start"):
            duration_ms = round((time.perf_counter() - g.request_start) * 1000, 2)

        logger.info(
            "api_request path=%s method=%s status=%s duration_ms=%s params=%s request_id=%s",
            path,
            request.method,
            response.status_code,
            duration_ms,
            _param_names(),
            getattr(g, "request_id", None),
        )
        return response
