"""
Rate Limiter Configuration

Throttles per caller so one client cannot monopolize the search store.
Uses Redis in production (RATELIMIT_STORAGE_URI), memory storage for dev.

Key decisions:
- User-based key when authenticated (avoids punishing shared IPs)
- IP-based key for anonymous requests
- Tiered limits by endpoint cost
"""

import logging

from flask import g, request
from flask_limiter import Limiter

from api.serializers.response import error_envelope

logger = logging.getLogger(__name__)


def get_rate_limit_key():
    """
    Get rate limit key - user_id if authenticated, else remote_addr.
    """
    user = getattr(g, 'current_user', None)
    if user is not None:
        return f"user:{user.id}"
    return f"ip:{request.remote_addr}"


# Per-endpoint rate limits (tune by computational cost)
# Format: "X per period" where period is minute, hour, day
RATE_LIMITS = {
    # Single-row lookups and static lookup tables
    "cached": "200 per minute",

    # Filtered, paginated search
    "search": "60 per minute",

    # Geo-radius search (Python-side distance pass)
    "heavy": "30 per minute",
}

# Default limits for unannotated endpoints
DEFAULT_LIMITS = ["1000 per day", "300 per hour"]

# Storage and enabled flag come from app.config (RATELIMIT_*)
limiter = Limiter(
    key_func=get_rate_limit_key,
    default_limits=DEFAULT_LIMITS,
    key_prefix="rate_limit",
    headers_enabled=True,
)


def init_limiter(app):
    """
    Initialize Flask-Limiter with the app.

    Returns the limiter instance for decorator use.
    """
    limiter.init_app(app)

    @app.errorhandler(429)
    def ratelimit_handler(e):
        body = error_envelope("RATE_LIMITED", "Rate limit exceeded. Please slow down.")
        body["error"]["retryAfter"] = getattr(e, 'retry_after', None) or 60
        return body, 429

    storage = app.config.get('RATELIMIT_STORAGE_URI', 'memory://')
    if storage.startswith('memory://'):
        logger.warning("Rate limiter using in-memory storage (dev only)")
    logger.info(
        "Rate limiter initialized enabled=%s storage=%s",
        app.config.get('RATELIMIT_ENABLED', True), storage.split('://', 1)[0],
    )
    return limiter
