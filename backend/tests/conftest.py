"""
Root pytest configuration for backend tests.

Provides:
- Shared fixtures (app, client, db_session) on in-memory SQLite
- Factories for users, rooms and bearer tokens
"""

import itertools
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add backend directory to Python path so imports like
# `from services.room_query import ...` and `from utils.normalize import ...` work
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

import pytest


@pytest.fixture
def app():
    """Create test Flask application with a fresh in-memory database."""
    from app import create_app
    from config import TestConfig
    from models.database import db

    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def db_session(app):
    from models.database import db
    return db.session


@pytest.fixture
def make_user(db_session):
    """Factory: make_user(role='owner', email=None) -> User (committed)."""
    from constants import ROLE_OWNER
    from models.user import User

    counter = itertools.count(1)

    def _make(role=ROLE_OWNER, email=None, display_name=None):
        n = next(counter)
        user = User(
            email=email or f"user{n}@example.com",
            display_name=display_name or f"User {n}",
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make


@pytest.fixture
def make_room(db_session, make_user):
    """
    Factory: make_room(**overrides) -> Room (committed).

    Rooms default to a Mumbai single room at 10000/month owned by one shared
    owner. created_at increases by one minute per room unless overridden.
    """
    from models.room import Room

    owner_holder = {}
    clock = itertools.count(0)
    base_time = datetime(2024, 1, 1, 12, 0, 0)

    def _make(amenities=None, **overrides):
        if 'owner_id' not in overrides:
            if 'owner' not in owner_holder:
                owner_holder['owner'] = make_user()
            overrides['owner_id'] = owner_holder['owner'].id

        fields = {
            'title': 'Room for rent',
            'description': 'A clean room close to the station.',
            'monthly_rent': 10000.0,
            'room_type': 'single',
            'images': [],
            'address': '12 Station Road',
            'city': 'Mumbai',
            'state': 'Maharashtra',
            'pincode': '400001',
            'latitude': 19.0760,
            'longitude': 72.8777,
            'availability': True,
            'is_sample_data': False,
            'created_at': base_time + timedelta(minutes=next(clock)),
        }
        fields.update(overrides)

        room = Room(**fields)
        room.amenities = list(amenities or [])
        db_session.add(room)
        db_session.commit()
        return room

    return _make


@pytest.fixture
def auth_header(app):
    """Factory: auth_header(user) -> {'Authorization': 'Bearer ...'}."""
    from utils.auth import generate_token

    def _make(user):
        return {'Authorization': f"Bearer {generate_token(user.id, user.email)}"}

    return _make
