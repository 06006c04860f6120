"""
Flask Application Factory - Room Listing Search API

Public, read-only search over rental room listings:
- Filtered, sorted, paginated search (/api/rooms)
- Geo-radius search (haversine, no PostGIS required)
- Owner-scoped "my listings" behind a bearer token
"""

import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate

from config import Config, get_database_url
from constants import load_lookup_tables
from models.database import db

# Initialize Flask-Migrate (will be initialized in create_app)
migrate = Migrate()

logger = logging.getLogger('app')


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)

    if not app.config.get('SQLALCHEMY_DATABASE_URI'):
        app.config['SQLALCHEMY_DATABASE_URI'] = get_database_url()

    # Initialize CORS - allow all origins
    CORS(app,
         resources={r"/api/*": {"origins": "*"}},
         methods=["GET", "OPTIONS"],
         allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
         expose_headers=["X-Request-ID", "X-RateLimit-Limit", "X-RateLimit-Remaining", "Retry-After"],
         supports_credentials=False,
         send_wildcard=True)

    # === MIDDLEWARE ===
    # Request ID injection for request correlation and debugging
    from api.middleware import setup_request_id_middleware
    setup_request_id_middleware(app)

    # Request usage logging (sampling + watchlist)
    from api.middleware import setup_request_logging_middleware
    setup_request_logging_middleware(app)

    # Standardized {"success": false, "error": {...}} for every failure
    from api.middleware import setup_error_handlers
    setup_error_handlers(app)

    # Initialize SQLAlchemy
    db.init_app(app)

    # Initialize Flask-Migrate for database migrations
    migrate.init_app(app, db)

    # Rate limiting per caller (user id when authenticated, else IP)
    from utils.rate_limiter import init_limiter
    init_limiter(app)

    # Lookup tables are read once and shared immutably by every request
    app.extensions['lookup_tables'] = load_lookup_tables(app.config['LOOKUP_DATA_PATH'])

    with app.app_context():
        # Import all models before create_all to ensure tables are created
        from models.room import Room, RoomAmenity  # noqa: F401
        from models.user import User  # noqa: F401

        # Production schema is owned by migrations (flask db upgrade)
        if app.config.get('APP_ENV') != 'production':
            db.create_all()

    from routes.rooms import rooms_bp
    app.register_blueprint(rooms_bp, url_prefix='/api/rooms')

    @app.route("/api/health", methods=["GET"])
    def health():
        from services.room_paginator import STORE_ERRORS
        from models.room import Room

        try:
            count = db.session.query(Room).count()
        except STORE_ERRORS as e:
            logger.error("health_store_unavailable error=%s", type(e).__name__)
            return jsonify({
                "status": "unavailable",
                "database": "unreachable",
            }), 503

        return jsonify({
            "status": "ok",
            "database": "connected",
            "room_count": count,
        })

    @app.route("/", methods=["GET"])
    def index():
        return jsonify({
            "name": "Room Listing Search API",
            "status": "running",
            "endpoints": [
                "/api/rooms",
                "/api/rooms/<id>",
                "/api/rooms/owner/<user_id>",
                "/api/rooms/filter-options",
                "/api/health",
            ],
        })

    logger.info("app_created env=%s", app.config.get('APP_ENV'))
    return app


def run_app():
    """Main entry point for local development - starts server with Flask's dev server."""
    logging.basicConfig(
        level=Config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    app = create_app()
    port = int(os.getenv('PORT', '5000'))
    logger.info("starting dev server port=%s", port)
    app.run(debug=app.config.get('DEBUG', False), host="0.0.0.0", port=port)


if __name__ == "__main__":
    run_app()
