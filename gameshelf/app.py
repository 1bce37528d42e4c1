"""
GameShelf - Games Management API
Application factory and startup
"""
import os
import sys
import logging
from datetime import timedelta

from flask import Flask, request
import structlog

from gameshelf.auth import auth_blueprint, limiter, login_manager
from gameshelf.constants import BUILD_VERSION, GAMESHELF_DB
from gameshelf.db import db, init_db, migrate
from gameshelf.exceptions import register_exception_handlers
from gameshelf.routes.games import games_bp
from gameshelf.routes.genres import genres_bp
from gameshelf.routes.platforms import platforms_bp
from gameshelf.routes.system import system_bp
from gameshelf.seed import create_sample_data
from gameshelf.sessions import ServerSideSessionInterface, build_session_store
from gameshelf.settings import is_production, load_settings
from gameshelf.utils import ColoredFormatter, FilterRemoveDateFromWerkzeugLogs, get_or_create_secret_key

logger = structlog.get_logger('main')

CORS_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
CORS_HEADERS = "Content-Type, Authorization"

_logging_configured = False


def configure_logging():
    """Colored stdout logging plus structlog on top of the stdlib loggers"""
    global _logging_configured
    if _logging_configured:
        return

    formatter = ColoredFormatter(
        '[%(asctime)s.%(msecs)03d] %(levelname)s (%(module)s) %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    logging.basicConfig(
        level=logging.INFO,
        handlers=[handler]
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if os.environ.get('LOG_FORMAT') == 'json' else structlog.dev.ConsoleRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Apply filter to hide date from http access logs
    logging.getLogger('werkzeug').addFilter(FilterRemoveDateFromWerkzeugLogs())
    _logging_configured = True


def register_cors(app, origins):
    """Allow the configured frontends to call the API with credentials"""

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get('Origin')
        if origin and origin in origins:
            response.headers['Access-Control-Allow-Origin'] = origin
            response.headers['Access-Control-Allow-Credentials'] = 'true'
            response.headers['Access-Control-Allow-Methods'] = CORS_METHODS
            response.headers['Access-Control-Allow-Headers'] = CORS_HEADERS
            response.vary.add('Origin')
        return response


def create_app(config=None, session_store=None):
    """Application factory"""
    configure_logging()
    app_settings = load_settings()

    app = Flask(__name__)
    app.config["SQLALCHEMY_DATABASE_URI"] = GAMESHELF_DB
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['PERMANENT_SESSION_LIFETIME'] = timedelta(hours=app_settings['session']['lifetime_hours'])
    app.config['SESSION_COOKIE_NAME'] = app_settings['session']['cookie_name']
    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_SECURE'] = False
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'
    app.config['SEED_SAMPLE_DATA'] = app_settings['seed']['sample_data']
    app.config.update(config or {})
    if not app.config.get('SECRET_KEY'):
        app.config['SECRET_KEY'] = get_or_create_secret_key()

    # Initialize components
    db.init_app(app)
    migrate.init_app(app, db)

    # Server-side sessions; the cookie only carries the session token
    app.session_interface = ServerSideSessionInterface(session_store or build_session_store(app_settings))

    login_manager.init_app(app)
    limiter.init_app(app)

    # Register exception handlers
    register_exception_handlers(app, expose_errors=not is_production(app_settings))

    # Register blueprints
    app.register_blueprint(system_bp)
    app.register_blueprint(auth_blueprint)
    app.register_blueprint(games_bp)
    app.register_blueprint(genres_bp)
    app.register_blueprint(platforms_bp)

    register_cors(app, app_settings['cors']['origins'])

    # Initialize database
    init_db(app)
    if app.config['SEED_SAMPLE_DATA']:
        with app.app_context():
            create_sample_data()

    return app


def main():
    app_settings = load_settings()
    app = create_app()
    host = app_settings['server']['host']
    port = app_settings['server']['port']
    logger.info(f'Build Version: {BUILD_VERSION}')
    logger.info(f'Starting server on {host}:{port}...')
    app.run(host=host, port=port, debug=False, use_reloader=False)
    logger.info('Shutting down server...')


if __name__ == '__main__':
    main()
