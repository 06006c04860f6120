"""
Bearer-token identity helpers.

Token issuance belongs to the external identity provider; this module only
needs to verify tokens and resolve them to a User. generate_token() exists
for the CLI and tests, and mirrors the payload the provider issues.
"""
from datetime import datetime, timedelta
from functools import wraps

import jwt
from flask import current_app, g, request

from models.database import db
from models.user import User


def generate_token(user_id, email):
    """Generate JWT token for user"""
    payload = {
        'user_id': user_id,
        'email': email,
        'exp': datetime.utcnow() + timedelta(hours=current_app.config['JWT_EXPIRATION_HOURS']),
        'iat': datetime.utcnow()
    }
    return jwt.encode(
        payload,
        current_app.config['JWT_SECRET'],
        algorithm=current_app.config['JWT_ALGORITHM'],
    )


def verify_token(token):
    """Verify JWT token and return user_id"""
    try:
        payload = jwt.decode(
            token,
            current_app.config['JWT_SECRET'],
            algorithms=[current_app.config['JWT_ALGORITHM']],
        )
        return payload.get('user_id')
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def get_user_from_request():
    """
    Extract and verify user from Authorization header.

    Returns:
        User object if valid token, None otherwise
    """
    auth_header = request.headers.get('Authorization')
    if not auth_header or not auth_header.startswith('Bearer '):
        return None

    token = auth_header.split(' ', 1)[1].strip()
    user_id = verify_token(token)

    if not user_id:
        return None

    return db.session.get(User, user_id)


def require_auth(f):
    """
    Decorator to require an authenticated caller.

    Sets g.current_user (also used by the rate limiter key).
    Returns 401 if the caller is not authenticated.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = get_user_from_request()
        if not user:
            from api.serializers.response import error_envelope
            return error_envelope("UNAUTHORIZED", "Authentication required"), 401
        g.current_user = user
        return f(*args, **kwargs)
    return decorated_function
