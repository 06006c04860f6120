"""
Shared route utilities for room endpoints.

Keeps handlers small: namespaced loggers plus one structured line per
completed or failed request.
"""

import time
import logging
from typing import Any, Dict, Optional


def route_logger(name: str) -> logging.Logger:
    """Return namespaced logger for room routes."""
    return logging.getLogger(f"rooms.{name}")


def elapsed_ms(start_time: float) -> int:
    """Return elapsed milliseconds since a perf_counter() start value."""
    return int((time.perf_counter() - start_time) * 1000)


def log_success(
    logger: logging.Logger,
    route: str,
    start_time: float,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    payload = {"route": route, "elapsed_ms": elapsed_ms(start_time)}
    if details:
        payload.update(details)
    logger.info("route_success %s", payload)


def log_rejected(
    logger: logging.Logger,
    route: str,
    start_time: float,
    err: Exception,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    """Client-side failure (bad params, not found, store down): no traceback."""
    payload = {"route": route, "elapsed_ms": elapsed_ms(start_time)}
    if details:
        payload.update(details)
    logger.warning("route_rejected %s code=%s err=%s", payload, getattr(err, 'code', None), err)
