"""
Room search Query Builder.

Translates a RoomFilter + SearchOptions into store-level query pieces:

    conditions  - SQLAlchemy boolean clauses, combined with and_()
    geo         - exact radius membership, evaluated by the paginator
    order_by    - primary sort column plus a Room.id tie-break in the same direction

Every present filter contributes exactly one clause; absent filters contribute
none. The geo filter contributes a bounding-box clause here (a superset of
the circle) and a GeoRadius for the exact haversine check.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from sqlalchemy import and_, func, or_, select

from constants import SortField, SortOrder
from models.room import Room, RoomAmenity
from services.room_filters import Coordinates, RoomFilter, SearchOptions
from utils.geo import bounding_box, within_radius

SORT_COLUMNS = {
    SortField.CREATED_AT: Room.created_at,
    SortField.MONTHLY_RENT: Room.monthly_rent,
    SortField.TITLE: Room.title,
}


@dataclass(frozen=True)
class GeoRadius:
    lat: float
    lng: float
    radius_km: float

    @classmethod
    def from_coordinates(cls, coords: Coordinates) -> "GeoRadius":
        return cls(lat=coords.lat, lng=coords.lng, radius_km=coords.radius)

    def contains(self, lat: Optional[float], lng: Optional[float]) -> bool:
        if lat is None or lng is None:
            return False
        return within_radius(self.lat, self.lng, lat, lng, self.radius_km)


@dataclass
class RoomQuery:
    conditions: List[Any] = field(default_factory=list)
    geo: Optional[GeoRadius] = None
    order_by: List[Any] = field(default_factory=list)

    def where(self):
        """Single combined clause, or None when nothing is filtered."""
        if not self.conditions:
            return None
        return and_(*self.conditions)

    def select(self, *columns):
        """SELECT over rooms with filters and ordering applied."""
        stmt = select(*columns) if columns else select(Room)
        where = self.where()
        if where is not None:
            stmt = stmt.where(where)
        return stmt.order_by(*self.order_by)

    def count(self):
        """SELECT COUNT(*) over the filtered rooms (no ordering)."""
        stmt = select(func.count(Room.id))
        where = self.where()
        if where is not None:
            stmt = stmt.where(where)
        return stmt


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user text matches literally."""
    return value.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


def build_room_conditions(filters: RoomFilter) -> List[Any]:
    """
    Build SQLAlchemy filter conditions from a RoomFilter.

    Returns:
        List of SQLAlchemy conditions to be combined with and_().
    """
    conditions: List[Any] = []

    # Sample/demo listings are hidden unless asked for
    if not filters.include_sample_data:
        conditions.append(Room.is_sample_data.is_(False))

    if filters.owner_id is not None:
        conditions.append(Room.owner_id == filters.owner_id)

    # Free text over title OR description (case-insensitive substring)
    if filters.search_text:
        pattern = f"%{escape_like(filters.search_text)}%"
        conditions.append(or_(
            Room.title.ilike(pattern, escape='\\'),
            Room.description.ilike(pattern, escape='\\'),
        ))

    # Rent range (inclusive)
    if filters.min_rent is not None:
        conditions.append(Room.monthly_rent >= filters.min_rent)
    if filters.max_rent is not None:
        conditions.append(Room.monthly_rent <= filters.max_rent)

    # City / state (case-insensitive exact)
    if filters.city:
        conditions.append(func.lower(Room.city) == filters.city.lower())
    if filters.state:
        conditions.append(func.lower(Room.state) == filters.state.lower())

    if filters.room_type is not None:
        conditions.append(Room.room_type == filters.room_type.value)

    # Amenities: room must carry EVERY requested tag
    for tag in filters.amenities:
        conditions.append(Room.amenity_rows.any(func.lower(RoomAmenity.name) == tag.lower()))

    if filters.availability is not None:
        conditions.append(Room.availability.is_(filters.availability))

    # Geo pre-filter: box contains the circle, exact check happens later
    if filters.coordinates is not None:
        box = bounding_box(filters.coordinates.lat, filters.coordinates.lng, filters.coordinates.radius)
        conditions.append(Room.latitude.between(box.min_lat, box.max_lat))
        if box.min_lng is not None:
            conditions.append(Room.longitude.between(box.min_lng, box.max_lng))

    return conditions


def build_order_by(options: SearchOptions) -> List[Any]:
    column = SORT_COLUMNS[options.sort_by]
    if options.sort_order == SortOrder.ASC:
        return [column.asc(), Room.id.asc()]
    return [column.desc(), Room.id.desc()]


def build_room_query(filters: RoomFilter, options: SearchOptions) -> RoomQuery:
    """Pure translation: no I/O, same inputs always give the same query."""
    geo = None
    if filters.coordinates is not None:
        geo = GeoRadius.from_coordinates(filters.coordinates)

    return RoomQuery(
        conditions=build_room_conditions(filters),
        geo=geo,
        order_by=build_order_by(options),
    )
