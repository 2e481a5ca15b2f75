import os
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_bcrypt import Bcrypt
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from werkzeug.middleware.proxy_fix import ProxyFix
from config import config
import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
bcrypt = Bcrypt()
limiter = Limiter(key_func=get_remote_address)


def init_sentry(app):
    """Initialize Sentry error tracking and performance monitoring"""
    sentry_dsn = app.config.get('SENTRY_DSN')

    if sentry_dsn:
        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FlaskIntegration(),
                SqlalchemyIntegration(),
            ],
            # Performance monitoring - sample 10% of transactions
            traces_sample_rate=0.1,
            release=os.environ.get('HEROKU_SLUG_COMMIT', 'unknown'),
            environment=app.config.get('FLASK_ENV', 'development'),
            # Don't send personally identifiable information
            send_default_pii=False,
            sample_rate=1.0,
        )
        app.logger.info(f"Sentry initialized for {app.config.get('FLASK_ENV', 'development')} environment")
    else:
        app.logger.info("Sentry DSN not configured - error tracking disabled")


def create_app(config_name='default'):
    """Application factory pattern"""
    app = Flask(__name__)
    app.config.from_object(config[config_name])

    # Trust X-Forwarded-For only for the configured number of proxy hops
    proxy_hops = app.config.get('TRUSTED_PROXY_HOPS', 0)
    if proxy_hops:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=proxy_hops, x_proto=proxy_hops)

    # Initialize Sentry error tracking (do this early to catch initialization errors)
    init_sentry(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    bcrypt.init_app(app)
    limiter.init_app(app)

    # Import all models for Flask-Migrate
    with app.app_context():
        from app.models import (user, job, balance_transaction, job_impression,
                                notification, engagement, job_fit)

    # JSON API - no login page to redirect to
    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Unauthorized'}), 401

    # Register blueprints
    from app.blueprints.jobs import jobs_bp
    from app.blueprints.employer import employer_bp
    from app.blueprints.admin import admin_bp

    app.register_blueprint(jobs_bp)
    app.register_blueprint(employer_bp)
    app.register_blueprint(admin_bp)

    # Error handlers
    from app.services.errors import LedgerError

    @app.errorhandler(LedgerError)
    def ledger_error(error):
        """Service errors carry their own status code and payload"""
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(403)
    def forbidden_error(error):
        return jsonify({'error': getattr(error, 'description', None) or 'Forbidden'}), 403

    @app.errorhandler(401)
    def unauthorized_error(error):
        return jsonify({'error': getattr(error, 'description', None) or 'Unauthorized'}), 401

    @app.errorhandler(429)
    def ratelimit_error(error):
        return jsonify({'error': 'Too many requests'}), 429

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()  # Rollback any failed database transactions
        return jsonify({'error': 'Internal server error'}), 500

    # Health check endpoint for monitoring and load balancers
    @app.route('/health')
    def health_check():
        """Health check endpoint - returns 200 if app is healthy"""
        health_status = {
            'status': 'healthy',
            'version': os.environ.get('HEROKU_RELEASE_VERSION', 'unknown'),
            'environment': app.config.get('FLASK_ENV', 'development')
        }

        try:
            from sqlalchemy import text
            db.session.execute(text('SELECT 1'))
            health_status['database'] = 'connected'
        except Exception as e:
            app.logger.error(f"Health check database error: {e}")
            health_status['status'] = 'unhealthy'
            health_status['database'] = f'error: {str(e)}'
            return jsonify(health_status), 500

        return jsonify(health_status), 200

    return app
