"""
Utility modules for the backend.
"""
from .auth import (
    generate_token,
    verify_token,
    get_user_from_request,
    require_auth,
)
from .rate_limiter import (
    init_limiter,
    limiter,
    get_rate_limit_key,
    RATE_LIMITS,
)

__all__ = [
    'generate_token',
    'verify_token',
    'get_user_from_request',
    'require_auth',
    'init_limiter',
    'limiter',
    'get_rate_limit_key',
    'RATE_LIMITS',
]
