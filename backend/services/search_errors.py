"""
Room search error taxonomy.

Every failure the search pipeline can surface carries an error code and the
HTTP status the route should answer with. Malformed OPTIONAL filters are not
errors at all: they are dropped during normalization (see utils.normalize).

    INVALID_ENUM         400  unknown roomType / sortBy
    RANGE_CONFLICT       400  minRent >= maxRent
    INVALID_COORDINATES  400  lat/lng outside the valid ranges
    STORE_UNAVAILABLE    503  backing store unreachable / timed out
"""

from typing import Any, Dict, Optional


class SearchError(Exception):
    """Base class for errors scoped to a single search request."""

    code = "SEARCH_ERROR"
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details


class InvalidEnum(SearchError):
    code = "INVALID_ENUM"
    status_code = 400


class RangeConflict(SearchError):
    code = "RANGE_CONFLICT"
    status_code = 400


class InvalidCoordinates(SearchError):
    code = "INVALID_COORDINATES"
    status_code = 400


class StoreUnavailable(SearchError):
    code = "STORE_UNAVAILABLE"
    status_code = 503

    # Never leak driver/connection details to callers
    PUBLIC_MESSAGE = "Search is temporarily unavailable. Please try again shortly."

    def __init__(self, message: str = PUBLIC_MESSAGE, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
