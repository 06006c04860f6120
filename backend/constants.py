"""
Centralized Constants - SINGLE SOURCE OF TRUTH

Room types, sort fields, search bounds and the lookup-table loader used by
the room search pipeline. Import these instead of re-declaring them.

The large presentation-facing vocabularies (city names, amenity tags) are NOT
hardcoded here. They live in data/lookups.json and are loaded once at startup
via load_lookup_tables().
"""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Tuple, Union


# =============================================================================
# ROOM TYPES - closed set, validated at the request boundary
# =============================================================================

class RoomType(str, Enum):
    SINGLE = 'single'
    DOUBLE = 'double'
    SHARED = 'shared'
    STUDIO = 'studio'
    ONE_BHK = '1bhk'
    TWO_BHK = '2bhk'
    THREE_BHK = '3bhk'
    PG = 'pg'
    HOSTEL = 'hostel'


ROOM_TYPES = [t.value for t in RoomType]

ROOM_TYPE_LABELS = {
    RoomType.SINGLE.value: 'Single Room',
    RoomType.DOUBLE.value: 'Double Room',
    RoomType.SHARED.value: 'Shared Room',
    RoomType.STUDIO.value: 'Studio',
    RoomType.ONE_BHK.value: '1 BHK',
    RoomType.TWO_BHK.value: '2 BHK',
    RoomType.THREE_BHK.value: '3 BHK',
    RoomType.PG.value: 'PG',
    RoomType.HOSTEL.value: 'Hostel',
}


# =============================================================================
# SORTING
# =============================================================================

class SortField(str, Enum):
    CREATED_AT = 'createdAt'
    MONTHLY_RENT = 'monthlyRent'
    TITLE = 'title'


class SortOrder(str, Enum):
    ASC = 'asc'
    DESC = 'desc'


DEFAULT_SORT_FIELD = SortField.CREATED_AT
DEFAULT_SORT_ORDER = SortOrder.DESC


# =============================================================================
# SEARCH BOUNDS
# =============================================================================

DEFAULT_PAGE = 1
MAX_PAGE = 100_000             # (page - 1) * limit stays inside the store integer range
DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100           # Hard cap, protects the store from unbounded scans

DEFAULT_RADIUS_KM = 10.0
MAX_RADIUS_KM = 100.0

EARTH_RADIUS_KM = 6371.0


# =============================================================================
# USER ROLES
# =============================================================================

ROLE_SEEKER = 'seeker'
ROLE_OWNER = 'owner'
ROLE_ADMIN = 'admin'

USER_ROLES = [ROLE_SEEKER, ROLE_OWNER, ROLE_ADMIN]


# =============================================================================
# LOOKUP TABLES (configuration data)
# =============================================================================

@dataclass(frozen=True)
class LookupTables:
    """Immutable presentation vocabularies, loaded once per process."""
    cities: Tuple[str, ...]
    amenities: Tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            'cities': list(self.cities),
            'amenities': list(self.amenities),
        }


def load_lookup_tables(path: Union[str, Path]) -> LookupTables:
    """
    Load lookup tables from a JSON file.

    Expected shape:
        {"cities": ["Mumbai", ...], "amenities": ["WiFi", ...]}

    Duplicates are dropped (first occurrence wins), blank entries ignored.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not the expected shape
    """
    with open(path, encoding='utf-8') as f:
        raw = json.load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"Lookup data must be a JSON object: {path}")

    def _clean(key: str) -> Tuple[str, ...]:
        values = raw.get(key, [])
        if not isinstance(values, list):
            raise ValueError(f"Lookup key '{key}' must be a list: {path}")
        seen = set()
        cleaned = []
        for value in values:
            item = str(value).strip()
            if item and item.lower() not in seen:
                seen.add(item.lower())
                cleaned.append(item)
        return tuple(cleaned)

    return LookupTables(cities=_clean('cities'), amenities=_clean('amenities'))
