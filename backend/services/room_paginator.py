"""
Room search Paginator.

Executes a RoomQuery against the store and returns one page of rooms plus
pagination metadata.

Two execution paths:
- No geo filter: COUNT(*) and ORDER BY/OFFSET/LIMIT run in SQL.
- Geo filter: the bounding-box-filtered, ordered (id, lat, lng) rows are
  fetched, exact haversine membership is applied in Python, and the page is
  sliced from the surviving ids. total reflects the exact circle.

Store connectivity failures surface as StoreUnavailable. There is no retry;
callers may retry the whole request.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import DisconnectionError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from constants import MAX_PAGE_LIMIT
from models.database import db
from models.room import Room
from services.room_filters import RoomFilter, SearchOptions
from services.room_query import RoomQuery, build_room_query
from services.search_errors import StoreUnavailable

logger = logging.getLogger('services.room_paginator')

STORE_ERRORS = (OperationalError, InterfaceError, DisconnectionError, PoolTimeoutError)


@dataclass(frozen=True)
class PaginationInfo:
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def compute(cls, page: int, limit: int, total: int) -> "PaginationInfo":
        total_pages = (total + limit - 1) // limit if limit > 0 else 0
        return cls(page=page, limit=limit, total=total, total_pages=total_pages)

    @property
    def has_more(self) -> bool:
        return self.page < self.total_pages

    def to_dict(self):
        return {
            'page': self.page,
            'limit': self.limit,
            'total': self.total,
            'totalPages': self.total_pages,
        }


def paginate(query: RoomQuery, page: int, limit: int,
             session=None) -> Tuple[List[Room], PaginationInfo]:
    """
    Run the query and return (items, pagination).

    A page past the last one returns no items with the true total.

    Raises:
        StoreUnavailable: the backing store could not be reached
    """
    session = session or db.session
    limit = min(limit, MAX_PAGE_LIMIT)
    offset = (page - 1) * limit

    try:
        if query.geo is None:
            total = session.execute(query.count()).scalar_one()
            # Past the last page: no slice query, so OFFSET never leaves the row range
            if offset >= total:
                items = []
            else:
                items = list(
                    session.execute(query.select().offset(offset).limit(limit)).scalars().all()
                )
        else:
            items, total = _paginate_within_radius(session, query, offset, limit)
    except STORE_ERRORS as e:
        logger.error("search_store_unavailable error=%s detail=%s", type(e).__name__, e)
        raise StoreUnavailable(cause=e) from e

    info = PaginationInfo.compute(page, limit, total)
    logger.debug(
        "search_paginated page=%s limit=%s total=%s returned=%s geo=%s",
        page, limit, total, len(items), query.geo is not None,
    )
    return items, info


def _paginate_within_radius(session, query: RoomQuery, offset: int, limit: int):
    candidates = session.execute(query.select(Room.id, Room.latitude, Room.longitude)).all()
    matching_ids = [
        row.id for row in candidates
        if query.geo.contains(row.latitude, row.longitude)
    ]

    page_ids = matching_ids[offset:offset + limit]
    if not page_ids:
        return [], len(matching_ids)

    rooms = session.execute(select(Room).where(Room.id.in_(page_ids))).scalars().all()
    by_id = {room.id: room for room in rooms}
    # Restore the query ordering lost by the IN (...) fetch
    items = [by_id[room_id] for room_id in page_ids if room_id in by_id]
    return items, len(matching_ids)


def search_rooms(filters: RoomFilter, options: SearchOptions,
                 session=None) -> Tuple[List[Room], PaginationInfo]:
    """Build and execute a room search in one call."""
    query = build_room_query(filters, options)
    return paginate(query, options.page, options.limit, session=session)


def get_room(room_id: int, session=None) -> Optional[Room]:
    session = session or db.session
    try:
        return session.get(Room, room_id)
    except STORE_ERRORS as e:
        logger.error("room_lookup_store_unavailable room_id=%s error=%s", room_id, type(e).__name__)
        raise StoreUnavailable(cause=e) from e
