"""
Portfolio CV Backend - Application Factory

This module initializes the Flask application with all necessary extensions,
configurations, and middleware. All actual route handling is delegated to blueprints.
"""

import os
from flask import Flask, jsonify
from sqlalchemy import text
from werkzeug.exceptions import HTTPException
from config import get_config
from extensions import db, login_manager
from utils.errors import PortfolioError

# Import all blueprints
from blueprints.visitors import visitors_bp
from blueprints.portfolio import portfolio_bp
from blueprints.profiles import profiles_bp
from blueprints.experiences import experiences_bp
from blueprints.education import education_bp
from blueprints.skills import skills_bp
from blueprints.certifications import certifications_bp


def create_app(config_name=None, config_overrides=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)
        config_overrides (dict): Values applied on top of the selected config (optional)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    app.config.from_object(get_config(config_name))
    if config_overrides:
        app.config.update(config_overrides)

    # Keep response keys in insertion order
    app.json.sort_keys = False

    # Fix PostgreSQL URL if needed
    db_url = app.config.get('SQLALCHEMY_DATABASE_URI')
    if db_url and db_url.startswith("postgres://"):
        app.config['SQLALCHEMY_DATABASE_URI'] = db_url.replace(
            "postgres://", "postgresql://", 1)

    # Initialize extensions with app
    initialize_extensions(app)

    # The rest of the system assumes exactly one CV owner
    check_singleton_profile(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return {'status': 'ok', 'message': 'Portfolio CV backend is running'}, 200

    return app


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    db.init_app(app)
    login_manager.init_app(app)

    # Identity-provider hook registers itself on login_manager at import
    import utils.security  # noqa: F401

    # Create tables if they don't exist
    with app.app_context():
        try:
            db.create_all()
            # Verify connection
            db.session.execute(text('SELECT 1'))
            app.logger.info("✓ Database initialized successfully")
        except Exception as e:
            app.logger.error(f"✗ Database initialization failed: {str(e)}")


def check_singleton_profile(app):
    """Make sure the configured PROFILE_ID exists.

    Raises RuntimeError when PROFILE_REQUIRED is set, otherwise logs.
    """
    from models import Profile

    profile_id = app.config.get('PROFILE_ID')
    with app.app_context():
        try:
            profile = db.session.get(Profile, profile_id)
        except Exception as e:
            db.session.rollback()
            app.logger.error(f"✗ Could not check profile {profile_id}: {str(e)}")
            profile = None

    if profile is not None:
        app.logger.info(f"✓ CV profile {profile_id} ({profile.full_name}) found")
        return

    message = f"CV profile {profile_id} not found; create it via POST /api/profiles"
    if app.config.get('PROFILE_REQUIRED'):
        raise RuntimeError(message)
    app.logger.warning(f"⚠️ {message}")


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(visitors_bp)
    app.register_blueprint(portfolio_bp)
    app.register_blueprint(profiles_bp)
    app.register_blueprint(experiences_bp)
    app.register_blueprint(education_bp)
    app.register_blueprint(skills_bp)
    app.register_blueprint(certifications_bp)


def register_error_handlers(app):
    """Register JSON error handlers"""

    @app.errorhandler(PortfolioError)
    def portfolio_error(e):
        if e.status_code >= 500:
            app.logger.error(f"Server Error: {e.message}")
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def http_error(e):
        if e.code is not None and e.code < 400:
            return e
        return jsonify({'error': e.description}), e.code

    @app.errorhandler(Exception)
    def internal_server_error(e):
        app.logger.error(f"Server Error: {str(e)}", exc_info=True)
        return jsonify({'error': 'Internal server error'}), 500


def register_hooks(app):
    """Register request/response hooks"""

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        # API responses are live counters and admin data
        if response.mimetype == 'application/json':
            response.headers.setdefault('Cache-Control', 'no-store')
        return response


if __name__ == '__main__':
    # Get environment
    env = os.environ.get('FLASK_ENV', 'development')

    # Create app
    app = create_app(env)

    # Run development server
    app.run(
        host='0.0.0.0',
        port=int(os.environ.get('PORT', 5000)),
        debug=(env == 'development')
    )
