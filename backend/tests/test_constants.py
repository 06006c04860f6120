"""
Tests for constants.py - closed sets and lookup table loading.
"""

import json

import pytest

from config import Config
from constants import (
    ROOM_TYPE_LABELS,
    ROOM_TYPES,
    LookupTables,
    RoomType,
    load_lookup_tables,
)


def test_room_types_closed_set():
    assert ROOM_TYPES == ['single', 'double', 'shared', 'studio', '1bhk', '2bhk', '3bhk', 'pg', 'hostel']
    assert set(ROOM_TYPE_LABELS) == set(ROOM_TYPES)
    assert RoomType('1bhk') is RoomType.ONE_BHK


def test_bundled_lookup_tables_load():
    tables = load_lookup_tables(Config.LOOKUP_DATA_PATH)
    assert isinstance(tables.cities, tuple)
    assert 'Mumbai' in tables.cities
    assert 'WiFi' in tables.amenities
    assert len(tables.cities) == len({c.lower() for c in tables.cities})


def test_lookup_tables_dedupe_and_trim(tmp_path):
    path = tmp_path / 'lookups.json'
    path.write_text(json.dumps({
        'cities': ['Pune', ' pune ', '', 'Goa'],
        'amenities': ['WiFi', 'wifi', 'AC'],
    }))
    tables = load_lookup_tables(path)
    assert tables == LookupTables(cities=('Pune', 'Goa'), amenities=('WiFi', 'AC'))
    assert tables.to_dict() == {'cities': ['Pune', 'Goa'], 'amenities': ['WiFi', 'AC']}


@pytest.mark.parametrize("payload", [[], {'cities': 'Pune'}])
def test_lookup_tables_bad_shape(tmp_path, payload):
    path = tmp_path / 'lookups.json'
    path.write_text(json.dumps(payload))
    with pytest.raises(ValueError):
        load_lookup_tables(path)


def test_lookup_tables_are_immutable():
    tables = LookupTables(cities=('Pune',), amenities=())
    with pytest.raises(AttributeError):
        tables.cities = ('Goa',)
