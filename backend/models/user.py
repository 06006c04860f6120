"""
User Model - Identity collaborator for owner-scoped searches

Sign-up, OTP and OAuth flows live outside this service. What the search API
needs is an identity it can trust (resolved from a bearer token) and a role:
- 'seeker' → browses listings
- 'owner'  → may view their own listings via /api/rooms/owner/<id>
- 'admin'  → may view any owner's listings
"""
from models.database import db
from datetime import datetime

from constants import ROLE_ADMIN, ROLE_SEEKER


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    display_name = db.Column(db.String(255), nullable=True)
    role = db.Column(db.String(20), nullable=False, default=ROLE_SEEKER)  # constants.USER_ROLES
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    rooms = db.relationship('Room', backref='owner', lazy='dynamic')

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def can_view_listings_of(self, owner_id: int) -> bool:
        """Owners see their own listings; admins see everyone's."""
        return self.is_admin or self.id == owner_id

    def to_dict(self):
        """Convert to dictionary for JSON serialization"""
        return {
            'id': self.id,
            'email': self.email,
            'display_name': self.display_name,
            'role': self.role,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
