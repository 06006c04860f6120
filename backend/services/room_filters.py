"""
Room search Filter Model.

Raw query parameters (request.args, CLI key=value pairs, plain dicts) are
normalized here into two frozen pydantic models:

    RoomFilter     - WHAT to match (text, rent range, location, type, amenities, geo)
    SearchOptions  - HOW to page and order the matches

Policy at this boundary:
- Optional numeric filters that are malformed or negative are DROPPED, not
  rejected. "minRent=abc" searches as if no lower bound was given.
- Strings are trimmed; blank means absent.
- Closed-set values (roomType, sortBy) are REJECTED when unknown (InvalidEnum).
- minRent >= maxRent is REJECTED (RangeConflict), never silently swapped.

Both models are immutable after construction and are passed by value to the
query builder. Nothing here touches the database.
"""

import logging
from typing import Any, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_LIMIT,
    DEFAULT_RADIUS_KM,
    DEFAULT_SORT_FIELD,
    DEFAULT_SORT_ORDER,
    MAX_PAGE,
    MAX_PAGE_LIMIT,
    MAX_RADIUS_KM,
    RoomType,
    SortField,
    SortOrder,
)
from services.search_errors import InvalidCoordinates, InvalidEnum, RangeConflict
from utils.normalize import (
    ValidationError,
    float_or_none,
    int_or_default,
    to_bool,
    to_enum,
    to_list,
    to_str,
)

logger = logging.getLogger('services.room_filters')


class BaseParamsModel(BaseModel):
    """
    Base model for search param schemas.

    - Frozen after creation (immutable)
    - Whitespace stripped from strings
    - Both alias (wire name) and field name accepted
    - Unknown fields ignored
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        populate_by_name=True,
        extra='ignore',
    )


class Coordinates(BaseParamsModel):
    """Geo-radius center; radius in kilometers."""
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    radius: float = Field(default=DEFAULT_RADIUS_KM, gt=0, le=MAX_RADIUS_KM)


class RoomFilter(BaseParamsModel):
    search_text: Optional[str] = Field(default=None, alias='search')
    min_rent: Optional[float] = Field(default=None, ge=0, alias='minRent')
    max_rent: Optional[float] = Field(default=None, ge=0, alias='maxRent')
    city: Optional[str] = None
    state: Optional[str] = None
    room_type: Optional[RoomType] = Field(default=None, alias='roomType')
    amenities: Tuple[str, ...] = ()
    coordinates: Optional[Coordinates] = None
    availability: Optional[bool] = None
    include_sample_data: bool = Field(default=False, alias='includeSampleData')
    owner_id: Optional[int] = Field(default=None, alias='ownerId')

    @model_validator(mode='after')
    def _rent_range_ordered(self):
        if self.min_rent is not None and self.max_rent is not None:
            if self.min_rent >= self.max_rent:
                raise ValueError("maxRent must be greater than minRent")
        return self

    def to_wire(self) -> dict:
        """Applied filters as echoed back to the client (camelCase, no empties)."""
        data = self.model_dump(mode='json', by_alias=True, exclude_none=True)
        if not data.get('amenities'):
            data.pop('amenities', None)
        if not data.get('includeSampleData'):
            data.pop('includeSampleData', None)
        return data


class SearchOptions(BaseParamsModel):
    page: int = Field(default=DEFAULT_PAGE, ge=1, le=MAX_PAGE)
    limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT)
    sort_by: SortField = Field(default=DEFAULT_SORT_FIELD, alias='sortBy')
    sort_order: SortOrder = Field(default=DEFAULT_SORT_ORDER, alias='sortOrder')

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def parse_room_filters(args: Mapping[str, Any], *, owner_id: Optional[int] = None) -> RoomFilter:
    """
    Normalize raw search params into a RoomFilter.

    Args:
        args: Raw key/value params (wire names: search, minRent, roomType, ...)
        owner_id: Scope to one owner's listings. Comes from the authenticated
            identity, never from args.

    Raises:
        InvalidEnum: unknown roomType
        RangeConflict: minRent >= maxRent
        InvalidCoordinates: lat/lng outside valid ranges
    """
    min_rent = float_or_none(args.get('minRent'), field='minRent', min_value=0)
    max_rent = float_or_none(args.get('maxRent'), field='maxRent', min_value=0)
    if min_rent is not None and max_rent is not None and min_rent >= max_rent:
        raise RangeConflict(
            "Maximum rent must be greater than minimum rent",
            field='maxRent',
            details={'minRent': min_rent, 'maxRent': max_rent},
        )

    try:
        room_type = to_enum(args.get('roomType'), RoomType, field='roomType')
    except ValidationError as e:
        raise InvalidEnum(str(e), field='roomType')

    return RoomFilter(
        search_text=to_str(args.get('search')),
        min_rent=min_rent,
        max_rent=max_rent,
        city=to_str(args.get('city')),
        state=to_str(args.get('state')),
        room_type=room_type,
        amenities=tuple(to_list(args.get('amenities'), unique=True)),
        coordinates=_parse_coordinates(args),
        availability=_optional_bool(args.get('availability'), 'availability'),
        include_sample_data=bool(_optional_bool(args.get('includeSampleData'), 'includeSampleData')),
        owner_id=owner_id,
    )


def parse_search_options(args: Mapping[str, Any], *, default_limit: int = DEFAULT_PAGE_LIMIT) -> SearchOptions:
    """
    Normalize page/limit/sortBy/sortOrder.

    page < 1 or malformed → 1; page is clamped to MAX_PAGE. limit malformed →
    default_limit; limit is clamped to MAX_PAGE_LIMIT. Unknown sortBy raises
    InvalidEnum; unknown sortOrder falls back to the default order.
    """
    page = int_or_default(args.get('page'), DEFAULT_PAGE, field='page', min_value=1, max_value=MAX_PAGE)
    limit = int_or_default(args.get('limit'), default_limit, field='limit', min_value=1)
    limit = min(limit, MAX_PAGE_LIMIT)

    try:
        sort_by = to_enum(args.get('sortBy'), SortField, default=DEFAULT_SORT_FIELD, field='sortBy')
    except ValidationError as e:
        raise InvalidEnum(str(e), field='sortBy')

    try:
        sort_order = to_enum(args.get('sortOrder'), SortOrder, default=DEFAULT_SORT_ORDER, field='sortOrder')
    except ValidationError:
        logger.debug("input_degraded field=sortOrder value=%r", args.get('sortOrder'))
        sort_order = DEFAULT_SORT_ORDER

    return SearchOptions(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)


def _parse_coordinates(args: Mapping[str, Any]) -> Optional[Coordinates]:
    lat = float_or_none(args.get('lat'), field='lat')
    lng = float_or_none(args.get('lng'), field='lng')
    if lat is None or lng is None:
        return None

    if not -90 <= lat <= 90:
        raise InvalidCoordinates("Latitude must be between -90 and 90", field='lat')
    if not -180 <= lng <= 180:
        raise InvalidCoordinates("Longitude must be between -180 and 180", field='lng')

    radius = float_or_none(args.get('radius'), field='radius', min_value=0)
    if not radius:
        radius = DEFAULT_RADIUS_KM
    radius = min(radius, MAX_RADIUS_KM)

    return Coordinates(lat=lat, lng=lng, radius=radius)


def _optional_bool(value: Any, field: str) -> Optional[bool]:
    try:
        return to_bool(value, default=None, field=field)
    except ValidationError:
        logger.debug("input_degraded field=%s value=%r", field, value)
        return None
