"""
Error envelope middleware - Standardize all error responses.

Every error leaves the API in the same shape:
{
    "success": false,
    "error": {
        "code": "ROOM_NOT_FOUND",
        "message": "Room not found",
        "requestId": "uuid"
    }
}
"""

import logging
from flask import Flask, jsonify, g
from werkzeug.exceptions import HTTPException

from api.serializers.response import error_envelope, search_error_envelope
from services.search_errors import SearchError, StoreUnavailable


logger = logging.getLogger('api.middleware.error')


def _respond(body: dict, status_code: int):
    response = jsonify(body)
    request_id = getattr(g, 'request_id', None)
    if request_id:
        response.headers['X-Request-ID'] = request_id
    return response, status_code


def setup_error_handlers(app: Flask) -> None:
    """
    Set up standardized error handlers on Flask app.

    Handles:
    - SearchError subclasses raised by the search pipeline
    - HTTP exceptions (400, 404, 405, etc.)
    - Unhandled Python exceptions
    """

    @app.errorhandler(SearchError)
    def handle_search_error(error):
        if isinstance(error, StoreUnavailable):
            logger.warning(
                "store_unavailable request_id=%s cause=%s",
                getattr(g, 'request_id', None),
                type(error.cause).__name__ if error.cause else None,
            )
        return _respond(search_error_envelope(error), error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        """Handle Flask/Werkzeug HTTP exceptions."""
        # "Not Found" -> "NOT_FOUND"
        code = error.name.upper().replace(' ', '_')
        return _respond(error_envelope(code, error.description), error.code)

    @app.errorhandler(Exception)
    def handle_generic_error(error):
        """Handle unhandled Python exceptions."""
        logger.exception(
            "unhandled_error request_id=%s error_type=%s",
            getattr(g, 'request_id', None),
            type(error).__name__,
        )
        return _respond(
            error_envelope("INTERNAL_ERROR", "An unexpected error occurred"), 500
        )
