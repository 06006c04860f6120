"""
Request ID middleware - Inject X-Request-ID for request correlation.

Every request gets an id (client-supplied when sane, generated otherwise)
stored on g.request_id, echoed in the X-Request-ID response header, and
copied into error envelopes.
"""

import re
import uuid
from flask import Flask, request, g

# Client ids are echoed into headers and logs; keep them short and plain
_REQUEST_ID_PATTERN = re.compile(r'^[A-Za-z0-9._-]{1,128}$')


def setup_request_id_middleware(app: Flask) -> None:
    """
    Set up request ID middleware on Flask app.

    Args:
        app: Flask application instance
    """

    @app.before_request
    def inject_request_id():
        g.request_id = _accept_or_generate(request.headers.get('X-Request-ID'))

    @app.after_request
    def add_request_id_header(response):
        if hasattr(g, 'request_id'):
            response.headers['X-Request-ID'] = g.request_id
        return response


def _accept_or_generate(candidate) -> str:
    if candidate and _REQUEST_ID_PATTERN.match(candidate):
        return candidate
    return str(uuid.uuid4())
