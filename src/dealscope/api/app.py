"""
Flask application factory for DealScope.
"""
from typing import Optional

from flask import Flask, jsonify, send_from_directory
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, NotFound

from .. import __version__
from ..auth import AuthService, UserStore
from ..config import Config
from ..errors import APIError
from ..logger import get_logger, setup_logger
from ..search import Aggregator
from .routes import api_bp

logger = get_logger(__name__)


def create_app(
    config: Optional[Config] = None,
    *,
    aggregator: Optional[Aggregator] = None,
) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Application configuration (read from the environment if omitted)
        aggregator: Aggregator to serve searches with (built from ``config`` if omitted)

    Returns:
        Configured Flask app instance
    """
    config = config or Config.from_env()
    setup_logger(level=config.log_level)

    # The frontend is served by the catch-all route below
    app = Flask(__name__, static_folder=None)

    # Configure app
    app.config['SECRET_KEY'] = config.jwt_secret
    app.config['DEALSCOPE_CONFIG'] = config
    app.extensions['dealscope'] = {
        'aggregator': aggregator or Aggregator.from_config(config),
        'auth': AuthService(UserStore(config.users_file), config.jwt_secret),
    }

    # Enable CORS with configured origins
    cors_origins = config.get_cors_origins()
    if cors_origins == ["*"]:
        CORS(app)
    else:
        CORS(app, origins=cors_origins)

    # Register blueprints
    app.register_blueprint(api_bp)
    _register_error_handlers(app)

    # Health check
    @app.route('/health')
    def health():
        """Health check endpoint."""
        return {'status': 'healthy', 'version': __version__}

    # Frontend: real files are served as-is, everything else gets the entry
    # page so client-side routing works
    @app.route('/', defaults={'path': ''})
    @app.route('/<path:path>')
    def frontend(path: str):
        if path:
            try:
                return send_from_directory(config.static_dir, path)
            except NotFound:
                pass
        return send_from_directory(config.static_dir, 'index.html')

    # Log configuration
    logger.info("Flask app created")
    logger.info(f"Configuration: {config.get_summary()}")

    # Validate configuration
    errors = config.validate()
    if errors:
        logger.warning(f"Configuration warnings: {errors}")

    return app


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(APIError)
    def handle_api_error(error: APIError):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        logger.error(f"Unhandled error: {error}", exc_info=True)
        return jsonify({'error': 'internal server error'}), 500
