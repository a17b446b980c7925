"""
WSGI entry point for production deployment.

Use this file with a WSGI server like gunicorn or waitress:

    # Linux/Mac with gunicorn
    gunicorn wsgi:app --bind 0.0.0.0:3000 --workers 1 --threads 8

    # Windows with waitress
    waitress-serve --host=0.0.0.0 --port=3000 wsgi:app

    # Or use the CLI
    python wsgi.py

Run a single worker process: the flat user store only serialises writes
within one process.
"""
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from waitress import serve

from dealscope.api import create_app
from dealscope.config import Config
from dealscope.logger import get_logger

logger = get_logger(__name__)

config = Config.from_env()

# Create the Flask application instance
app = create_app(config)


def main():
    """Run with a production-ready server."""
    logger.info(f"Starting DealScope on {config.host}:{config.port}")
    logger.info(f"Environment: {config.flask_env}")

    if config.flask_env == "production" or not config.flask_debug:
        logger.info("Using Waitress production server")
        serve(app, host=config.host, port=config.port, threads=8)
    else:
        # Development mode - use Flask's built-in server
        logger.info("Using Flask development server")
        app.run(host=config.host, port=config.port, debug=config.flask_debug)


if __name__ == "__main__":
    main()
