"""
Response envelope helpers.

Provides the standardized success and error response builders used by every
route:

    success: {"success": true, "data": {...}}
    error:   {"success": false, "error": {"code": "...", "message": "...", ...}}
"""

from typing import Any, Dict, Iterable, Optional

from flask import g, has_request_context


def _request_id() -> Optional[str]:
    if has_request_context():
        return getattr(g, 'request_id', None)
    return None


def _serialize_item(item: Any) -> Any:
    if hasattr(item, 'to_dict'):
        return item.to_dict()
    return item


def success_envelope(data: Any) -> Dict[str, Any]:
    """Build a standardized success response envelope."""
    return {"success": True, "data": data}


def assemble(
    items: Iterable[Any],
    pagination: Any,
    filters: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build the room search response envelope.

    Args:
        items: Page of rooms (models with to_dict(), or plain dicts)
        pagination: PaginationInfo (or an equivalent dict)
        filters: Optional applied filters echoed back to the client

    Returns:
        {
            "success": true,
            "data": {
                "rooms": [...],
                "pagination": {"page", "limit", "total", "totalPages"},
                "filters": {...}  # if given
            }
        }

    Serialization never alters item order.
    """
    if hasattr(pagination, 'to_dict'):
        pagination = pagination.to_dict()

    data = {
        "rooms": [_serialize_item(item) for item in items],
        "pagination": pagination,
    }
    if filters is not None:
        data["filters"] = filters

    return success_envelope(data)


def error_envelope(
    code: str,
    message: str,
    field: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build a standardized error response envelope.

    Args:
        code: Error code (e.g., "INVALID_ENUM")
        message: Human-readable error message
        field: Optional field that caused the error
        details: Optional additional details

    Returns:
        {
            "success": false,
            "error": {"code": "...", "message": "...", "requestId": "...", ...}
        }
    """
    error = {
        "code": code,
        "message": message,
    }

    request_id = _request_id()
    if request_id:
        error['requestId'] = request_id

    if field:
        error['field'] = field
    if details:
        error['details'] = details

    return {"success": False, "error": error}


def search_error_envelope(exc) -> Dict[str, Any]:
    """Error envelope for a services.search_errors.SearchError."""
    return error_envelope(exc.code, exc.message, field=exc.field, details=exc.details)
