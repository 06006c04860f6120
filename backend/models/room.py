"""
Room Model - Rental listings served by the search API

Location is stored flat (address/city/state/pincode + latitude/longitude)
so the search pipeline can filter on plain columns. JSON output nests it
back under "location" with {lat, lng} coordinates, matching what the
frontend consumes.

Amenities are child rows (one tag per row) so "has ALL of these tags"
can be expressed as one EXISTS per tag on any backing database.

Images are opaque object-storage URLs; this service never dereferences them.
"""
from models.database import db
from datetime import datetime
from typing import Any, Dict, List


class Room(db.Model):
    __tablename__ = 'rooms'

    id = db.Column(db.Integer, primary_key=True)
    owner_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    # ==========================================================================
    # LISTING
    # ==========================================================================
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    monthly_rent = db.Column(db.Float, nullable=False, index=True)
    room_type = db.Column(db.String(20), nullable=False, index=True)  # constants.ROOM_TYPES
    images = db.Column(db.JSON, nullable=False, default=list)

    # ==========================================================================
    # LOCATION
    # ==========================================================================
    address = db.Column(db.Text, nullable=False)
    city = db.Column(db.String(100), nullable=False, index=True)
    state = db.Column(db.String(100), nullable=False, index=True)
    pincode = db.Column(db.String(10), nullable=False)
    latitude = db.Column(db.Float, nullable=False)
    longitude = db.Column(db.Float, nullable=False)

    # ==========================================================================
    # STATUS
    # ==========================================================================
    availability = db.Column(db.Boolean, nullable=False, default=True, index=True)
    is_sample_data = db.Column(db.Boolean, nullable=False, default=False, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    amenity_rows = db.relationship(
        'RoomAmenity',
        backref='room',
        cascade='all, delete-orphan',
        order_by='RoomAmenity.id',
        lazy='selectin',
    )

    __table_args__ = (
        db.CheckConstraint('monthly_rent > 0', name='ck_rooms_monthly_rent_positive'),
        db.CheckConstraint('latitude BETWEEN -90 AND 90', name='ck_rooms_latitude_range'),
        db.CheckConstraint('longitude BETWEEN -180 AND 180', name='ck_rooms_longitude_range'),
        db.Index('ix_rooms_city_availability', 'city', 'availability'),
        db.Index('ix_rooms_lat_lng', 'latitude', 'longitude'),
    )

    @property
    def amenities(self) -> List[str]:
        return [row.name for row in self.amenity_rows]

    @amenities.setter
    def amenities(self, tags: List[str]) -> None:
        self.amenity_rows = [RoomAmenity(name=tag) for tag in tags]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'ownerId': self.owner_id,
            'title': self.title,
            'description': self.description,
            'monthlyRent': self.monthly_rent,
            'roomType': self.room_type,
            'location': {
                'address': self.address,
                'city': self.city,
                'state': self.state,
                'pincode': self.pincode,
                'coordinates': {
                    'lat': self.latitude,
                    'lng': self.longitude,
                },
            },
            'images': list(self.images or []),
            'amenities': self.amenities,
            'availability': self.availability,
            'isSampleData': self.is_sample_data,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Room {self.id} {self.title!r} ({self.city}) {self.monthly_rent}>"


class RoomAmenity(db.Model):
    __tablename__ = 'room_amenities'

    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(
        db.Integer, db.ForeignKey('rooms.id', ondelete='CASCADE'), nullable=False, index=True
    )
    name = db.Column(db.String(50), nullable=False)

    __table_args__ = (
        db.UniqueConstraint('room_id', 'name', name='uq_room_amenities_room_name'),
        db.Index('ix_room_amenities_name', 'name'),
    )

    def __repr__(self):
        return f"<RoomAmenity {self.room_id}:{self.name}>"
