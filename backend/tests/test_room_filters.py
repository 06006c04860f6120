"""
Tests for services/room_filters.py - raw params → RoomFilter / SearchOptions.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from constants import (
    DEFAULT_RADIUS_KM,
    MAX_PAGE,
    MAX_PAGE_LIMIT,
    MAX_RADIUS_KM,
    RoomType,
    SortField,
    SortOrder,
)
from services.room_filters import (
    Coordinates,
    RoomFilter,
    SearchOptions,
    parse_room_filters,
    parse_search_options,
)
from services.search_errors import InvalidCoordinates, InvalidEnum, RangeConflict


class TestParseRoomFilters:

    def test_empty_args_means_no_filters(self):
        filters = parse_room_filters({})
        assert filters.search_text is None
        assert filters.min_rent is None
        assert filters.max_rent is None
        assert filters.city is None
        assert filters.room_type is None
        assert filters.amenities == ()
        assert filters.coordinates is None
        assert filters.availability is None
        assert filters.include_sample_data is False
        assert filters.owner_id is None

    def test_full_param_set(self):
        filters = parse_room_filters({
            'search': '  sea view ',
            'minRent': '5000',
            'maxRent': '20000',
            'city': ' Mumbai ',
            'state': 'Maharashtra',
            'roomType': '1BHK',
            'amenities': 'WiFi, AC',
            'availability': 'true',
        })
        assert filters.search_text == 'sea view'
        assert filters.min_rent == 5000.0
        assert filters.max_rent == 20000.0
        assert filters.city == 'Mumbai'
        assert filters.state == 'Maharashtra'
        assert filters.room_type == RoomType.ONE_BHK
        assert filters.amenities == ('WiFi', 'AC')
        assert filters.availability is True

    def test_malformed_min_rent_is_treated_as_absent(self):
        filters = parse_room_filters({'minRent': 'abc', 'maxRent': '20000'})
        assert filters.min_rent is None
        assert filters.max_rent == 20000.0

    def test_negative_rent_is_dropped(self):
        filters = parse_room_filters({'minRent': '-1', 'maxRent': '-5'})
        assert filters.min_rent is None
        assert filters.max_rent is None

    def test_blank_strings_are_absent(self):
        filters = parse_room_filters({'search': '   ', 'city': '', 'roomType': ' '})
        assert filters.search_text is None
        assert filters.city is None
        assert filters.room_type is None

    def test_unknown_room_type_rejected(self):
        with pytest.raises(InvalidEnum) as exc:
            parse_room_filters({'roomType': 'penthouse'})
        assert exc.value.field == 'roomType'
        assert exc.value.status_code == 400
        assert exc.value.code == 'INVALID_ENUM'

    @pytest.mark.parametrize("room_type", ["ONE_BHK", "one-bhk", "THREE_BHK"])
    def test_enum_member_names_rejected(self, room_type):
        with pytest.raises(InvalidEnum):
            parse_room_filters({'roomType': room_type})

    @pytest.mark.parametrize("min_rent,max_rent", [("20000", "5000"), ("5000", "5000")])
    def test_range_conflict_rejected(self, min_rent, max_rent):
        with pytest.raises(RangeConflict) as exc:
            parse_room_filters({'minRent': min_rent, 'maxRent': max_rent})
        assert exc.value.code == 'RANGE_CONFLICT'
        assert exc.value.field == 'maxRent'

    def test_amenities_deduplicated_case_insensitively(self):
        filters = parse_room_filters({'amenities': 'WiFi,AC,wifi,,AC '})
        assert filters.amenities == ('WiFi', 'AC')

    def test_coordinates_default_radius(self):
        filters = parse_room_filters({'lat': '19.076', 'lng': '72.8777'})
        assert filters.coordinates == Coordinates(lat=19.076, lng=72.8777, radius=DEFAULT_RADIUS_KM)

    def test_coordinates_need_both_lat_and_lng(self):
        assert parse_room_filters({'lat': '19.076'}).coordinates is None
        assert parse_room_filters({'lat': '19.076', 'lng': 'east'}).coordinates is None

    @pytest.mark.parametrize("radius", ["0", "-3", "far"])
    def test_unusable_radius_falls_back_to_default(self, radius):
        filters = parse_room_filters({'lat': '10', 'lng': '10', 'radius': radius})
        assert filters.coordinates.radius == DEFAULT_RADIUS_KM

    def test_radius_clamped_to_max(self):
        filters = parse_room_filters({'lat': '10', 'lng': '10', 'radius': '5000'})
        assert filters.coordinates.radius == MAX_RADIUS_KM

    @pytest.mark.parametrize("lat,lng,field", [("91", "0", "lat"), ("0", "-181", "lng")])
    def test_out_of_range_coordinates_rejected(self, lat, lng, field):
        with pytest.raises(InvalidCoordinates) as exc:
            parse_room_filters({'lat': lat, 'lng': lng})
        assert exc.value.field == field

    def test_malformed_availability_is_ignored(self):
        assert parse_room_filters({'availability': 'sometimes'}).availability is None
        assert parse_room_filters({'availability': 'false'}).availability is False

    def test_include_sample_data(self):
        assert parse_room_filters({'includeSampleData': 'true'}).include_sample_data is True
        assert parse_room_filters({'includeSampleData': 'bogus'}).include_sample_data is False

    def test_owner_id_never_read_from_args(self):
        assert parse_room_filters({'ownerId': '7'}).owner_id is None
        assert parse_room_filters({}, owner_id=7).owner_id == 7


class TestRoomFilterModel:

    def test_frozen(self):
        filters = RoomFilter(city='Pune')
        with pytest.raises(PydanticValidationError):
            filters.city = 'Mumbai'

    def test_model_rejects_inverted_rent_range(self):
        with pytest.raises(PydanticValidationError):
            RoomFilter(min_rent=10, max_rent=5)

    def test_accepts_wire_aliases(self):
        filters = RoomFilter(minRent=100, roomType='pg')
        assert filters.min_rent == 100
        assert filters.room_type == RoomType.PG

    def test_to_wire_omits_empty_values(self):
        filters = parse_room_filters({'city': 'Mumbai', 'minRent': '5000', 'roomType': 'studio'})
        assert filters.to_wire() == {'city': 'Mumbai', 'minRent': 5000.0, 'roomType': 'studio'}

    def test_to_wire_includes_coordinates_and_amenities(self):
        filters = parse_room_filters({
            'lat': '12.97', 'lng': '77.59', 'radius': '3', 'amenities': 'WiFi',
        })
        wire = filters.to_wire()
        assert wire['coordinates'] == {'lat': 12.97, 'lng': 77.59, 'radius': 3.0}
        assert wire['amenities'] == ['WiFi']


class TestParseSearchOptions:

    def test_defaults(self):
        options = parse_search_options({})
        assert options == SearchOptions(page=1, limit=10, sort_by=SortField.CREATED_AT,
                                        sort_order=SortOrder.DESC)
        assert options.offset == 0

    def test_explicit_values(self):
        options = parse_search_options({
            'page': '3', 'limit': '20', 'sortBy': 'monthlyRent', 'sortOrder': 'asc',
        })
        assert options.page == 3
        assert options.limit == 20
        assert options.sort_by == SortField.MONTHLY_RENT
        assert options.sort_order == SortOrder.ASC
        assert options.offset == 40

    @pytest.mark.parametrize("page", ["0", "-2", "abc", ""])
    def test_bad_page_falls_back_to_first(self, page):
        assert parse_search_options({'page': page}).page == 1

    @pytest.mark.parametrize("limit", ["0", "-1", "lots"])
    def test_bad_limit_falls_back_to_default(self, limit):
        assert parse_search_options({'limit': limit}).limit == 10

    def test_custom_default_limit(self):
        assert parse_search_options({}, default_limit=25).limit == 25

    def test_limit_clamped(self):
        assert parse_search_options({'limit': '1000'}).limit == MAX_PAGE_LIMIT

    @pytest.mark.parametrize("page", [str(10 ** 20), str(10 ** 18), str(MAX_PAGE + 1)])
    def test_huge_page_clamped(self, page):
        options = parse_search_options({'page': page, 'limit': '100'})
        assert options.page == MAX_PAGE
        assert options.offset == (MAX_PAGE - 1) * 100

    @pytest.mark.parametrize("sort_by", ["created_at", "MONTHLY_RENT"])
    def test_sort_field_member_names_rejected(self, sort_by):
        with pytest.raises(InvalidEnum):
            parse_search_options({'sortBy': sort_by})

    def test_unknown_sort_field_rejected(self):
        with pytest.raises(InvalidEnum) as exc:
            parse_search_options({'sortBy': 'popularity'})
        assert exc.value.field == 'sortBy'

    def test_unknown_sort_order_falls_back_to_desc(self):
        assert parse_search_options({'sortOrder': 'sideways'}).sort_order == SortOrder.DESC
