"""
Room API Routes

Endpoints:
- GET /api/rooms                   - public filtered, paginated search
- GET /api/rooms/<id>              - single listing
- GET /api/rooms/owner/<user_id>   - "my listings" (bearer token, owner or admin)
- GET /api/rooms/filter-options    - lookup tables for the search form

Every search goes through the same pipeline:
    request.args → parse_room_filters / parse_search_options
                 → build_room_query → paginate → assemble
"""
import time

from flask import Blueprint, current_app, g, jsonify, request

from api.serializers.response import (
    assemble,
    error_envelope,
    search_error_envelope,
    success_envelope,
)
from constants import (
    DEFAULT_PAGE_LIMIT,
    DEFAULT_RADIUS_KM,
    MAX_PAGE_LIMIT,
    MAX_RADIUS_KM,
    ROOM_TYPE_LABELS,
    SortField,
    SortOrder,
)
from routes._route_utils import log_rejected, log_success, route_logger
from services.room_filters import parse_room_filters, parse_search_options
from services.room_paginator import get_room, search_rooms
from services.search_errors import SearchError
from utils.auth import require_auth
from utils.rate_limiter import RATE_LIMITS, limiter

rooms_bp = Blueprint('rooms', __name__)

logger = route_logger("search")


def _is_geo_search() -> bool:
    return bool(request.args.get('lat')) and bool(request.args.get('lng'))


def _run_search(route: str, owner_id=None, include_sample_data=False):
    start = time.perf_counter()
    try:
        filters = parse_room_filters(request.args, owner_id=owner_id)
        if include_sample_data and not filters.include_sample_data:
            filters = filters.model_copy(update={'include_sample_data': True})
        options = parse_search_options(
            request.args,
            default_limit=current_app.config.get('SEARCH_DEFAULT_LIMIT', DEFAULT_PAGE_LIMIT),
        )
        items, pagination = search_rooms(filters, options)
    except SearchError as e:
        log_rejected(logger, route, start, e)
        return jsonify(search_error_envelope(e)), e.status_code

    log_success(logger, route, start, {
        "page": pagination.page,
        "limit": pagination.limit,
        "total": pagination.total,
        "geo": filters.coordinates is not None,
    })
    return jsonify(assemble(items, pagination, filters=filters.to_wire())), 200


@rooms_bp.route('', methods=['GET'])
@limiter.limit(RATE_LIMITS["search"])
@limiter.limit(RATE_LIMITS["heavy"], exempt_when=lambda: not _is_geo_search())
def search():
    """
    Search available listings.

    Query params: search, minRent, maxRent, city, state, roomType, amenities
    (comma-separated, ALL must match), lat, lng, radius (km), availability,
    includeSampleData, page, limit, sortBy, sortOrder.

    Geo searches (lat + lng) also count against the heavy tier.
    """
    return _run_search("/api/rooms")


@rooms_bp.route('/filter-options', methods=['GET'])
@limiter.limit(RATE_LIMITS["cached"])
def filter_options():
    """Static vocabularies for building the search form."""
    lookups = current_app.extensions['lookup_tables']
    data = lookups.to_dict()
    data.update({
        'roomTypes': [
            {'value': value, 'label': label} for value, label in ROOM_TYPE_LABELS.items()
        ],
        'sortFields': [f.value for f in SortField],
        'sortOrders': [o.value for o in SortOrder],
        'limits': {
            'default': current_app.config.get('SEARCH_DEFAULT_LIMIT', DEFAULT_PAGE_LIMIT),
            'max': MAX_PAGE_LIMIT,
        },
        'radiusKm': {'default': DEFAULT_RADIUS_KM, 'max': MAX_RADIUS_KM},
    })
    return jsonify(success_envelope(data))


@rooms_bp.route('/owner/<int:user_id>', methods=['GET'])
@require_auth
@limiter.limit(RATE_LIMITS["search"])
def owner_rooms(user_id):
    """
    Listings owned by user_id, sample data included.

    Same filters and pagination as /api/rooms. The caller must be that user
    or an admin.
    """
    user = g.current_user
    if not user.can_view_listings_of(user_id):
        logger.warning(
            "owner_rooms_forbidden caller=%s target=%s", user.id, user_id
        )
        return jsonify(error_envelope(
            "UNAUTHORIZED_ACCESS", "You can only view your own listings"
        )), 403

    return _run_search("/api/rooms/owner", owner_id=user_id, include_sample_data=True)


@rooms_bp.route('/<room_id>', methods=['GET'])
@limiter.limit(RATE_LIMITS["cached"])
def get_room_by_id(room_id):
    start = time.perf_counter()
    room = None
    if room_id.isdigit():
        try:
            room = get_room(int(room_id))
        except SearchError as e:
            log_rejected(logger, "/api/rooms/<id>", start, e)
            return jsonify(search_error_envelope(e)), e.status_code

    if room is None:
        return jsonify(error_envelope("ROOM_NOT_FOUND", "Room not found")), 404

    log_success(logger, "/api/rooms/<id>", start, {"room_id": room.id})
    return jsonify(success_envelope({"room": room.to_dict()}))
