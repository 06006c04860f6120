"""
Models package - SQLAlchemy models
"""
from models.database import db
from models.room import Room, RoomAmenity
from models.user import User

__all__ = [
    'db',
    'Room',
    'RoomAmenity',
    'User',
]
