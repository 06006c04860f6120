"""
Sample listing generator.

Produces deterministic demo rooms scattered around real city centers so a
fresh database has something to search. Every generated row is flagged
is_sample_data=True, which hides it from public search unless
includeSampleData=true is passed.
"""

import logging
import random
from typing import Iterable, List, NamedTuple, Optional

from constants import ROLE_OWNER, RoomType
from models.database import db
from models.room import Room
from models.user import User
from utils.geo import destination_point

logger = logging.getLogger('services.sample_data')

SAMPLE_OWNER_EMAIL = 'sample-owner@example.com'


class CityCenter(NamedTuple):
    city: str
    state: str
    lat: float
    lng: float
    pincode_prefix: str


CITY_CENTERS = (
    CityCenter('Mumbai', 'Maharashtra', 19.0760, 72.8777, '400'),
    CityCenter('Delhi', 'Delhi', 28.6139, 77.2090, '110'),
    CityCenter('Bangalore', 'Karnataka', 12.9716, 77.5946, '560'),
    CityCenter('Hyderabad', 'Telangana', 17.3850, 78.4867, '500'),
    CityCenter('Chennai', 'Tamil Nadu', 13.0827, 80.2707, '600'),
    CityCenter('Kolkata', 'West Bengal', 22.5726, 88.3639, '700'),
    CityCenter('Pune', 'Maharashtra', 18.5204, 73.8567, '411'),
    CityCenter('Ahmedabad', 'Gujarat', 23.0225, 72.5714, '380'),
    CityCenter('Jaipur', 'Rajasthan', 26.9124, 75.7873, '302'),
    CityCenter('Lucknow', 'Uttar Pradesh', 26.8467, 80.9462, '226'),
    CityCenter('Chandigarh', 'Chandigarh', 30.7333, 76.7794, '160'),
    CityCenter('Kochi', 'Kerala', 9.9312, 76.2673, '682'),
)

# Monthly rent bands (INR) per room type
RENT_RANGES = {
    RoomType.SINGLE: (4000, 15000),
    RoomType.DOUBLE: (6000, 22000),
    RoomType.SHARED: (3000, 9000),
    RoomType.STUDIO: (10000, 35000),
    RoomType.ONE_BHK: (12000, 40000),
    RoomType.TWO_BHK: (18000, 60000),
    RoomType.THREE_BHK: (25000, 90000),
    RoomType.PG: (5000, 16000),
    RoomType.HOSTEL: (2500, 8000),
}

NEIGHBOURHOOD_WORDS = ('Green', 'Lake', 'Park', 'Hill', 'Garden', 'Metro', 'Central', 'Royal')
TITLE_ADJECTIVES = ('Cozy', 'Spacious', 'Bright', 'Modern', 'Quiet', 'Affordable', 'Furnished')

# Listings fall within this distance of the city center
MAX_SPREAD_KM = 15.0


def generate_sample_rooms(count: int, owner_id: int, amenities: Iterable[str],
                          seed: Optional[int] = None,
                          cities: Iterable[CityCenter] = CITY_CENTERS) -> List[Room]:
    """
    Build (but do not persist) count sample rooms.

    The same seed always yields the same listings.
    """
    rng = random.Random(seed)
    amenity_pool = list(amenities)
    city_pool = list(cities)
    room_types = list(RoomType)

    rooms = []
    for i in range(count):
        center = city_pool[i % len(city_pool)]
        room_type = rng.choice(room_types)
        low, high = RENT_RANGES[room_type]
        lat, lng = destination_point(
            center.lat, center.lng,
            bearing_deg=rng.uniform(0, 360),
            distance_km=rng.uniform(0, MAX_SPREAD_KM),
        )
        area = f"{rng.choice(NEIGHBOURHOOD_WORDS)} {rng.choice(('Nagar', 'Colony', 'Enclave', 'Vihar'))}"

        room = Room(
            owner_id=owner_id,
            title=f"{rng.choice(TITLE_ADJECTIVES)} {room_type.value} room in {area}",
            description=(
                f"{room_type.value.upper()} accommodation in {area}, {center.city}. "
                f"Close to public transport and daily essentials."
            ),
            monthly_rent=float(rng.randrange(low, high, 500)),
            room_type=room_type.value,
            images=[],
            address=f"{rng.randint(1, 250)}, {area}",
            city=center.city,
            state=center.state,
            pincode=f"{center.pincode_prefix}{rng.randint(1, 99):03d}",
            latitude=round(lat, 6),
            longitude=round(lng, 6),
            availability=rng.random() < 0.85,
            is_sample_data=True,
        )
        if amenity_pool:
            room.amenities = rng.sample(amenity_pool, rng.randint(1, min(6, len(amenity_pool))))
        rooms.append(room)

    return rooms


def get_or_create_sample_owner(session=None) -> User:
    session = session or db.session
    owner = session.query(User).filter_by(email=SAMPLE_OWNER_EMAIL).first()
    if owner is None:
        owner = User(email=SAMPLE_OWNER_EMAIL, display_name='Sample Owner', role=ROLE_OWNER)
        session.add(owner)
        session.flush()
    return owner


def clear_sample_rooms(session=None) -> int:
    """Delete every sample listing. Returns the number removed."""
    session = session or db.session
    rooms = session.query(Room).filter(Room.is_sample_data.is_(True)).all()
    for room in rooms:
        session.delete(room)
    session.flush()
    logger.info("sample_rooms_cleared count=%s", len(rooms))
    return len(rooms)


def seed_sample_rooms(count: int, amenities: Iterable[str], seed: Optional[int] = None,
                      clear: bool = False, session=None) -> int:
    """Generate and commit sample rooms. Returns the number inserted."""
    session = session or db.session
    if clear:
        clear_sample_rooms(session)

    owner = get_or_create_sample_owner(session)
    rooms = generate_sample_rooms(count, owner.id, amenities, seed=seed)
    session.add_all(rooms)
    session.commit()
    logger.info("sample_rooms_seeded count=%s seed=%s", len(rooms), seed)
    return len(rooms)
