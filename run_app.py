"""
Main entry point for the DealScope web application.

Run this file to start the Flask development server.
"""
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from dealscope.api import create_app
from dealscope.config import Config
from dealscope.logger import get_logger

logger = get_logger(__name__)


def main():
    """Main function to run the Flask app."""
    config = Config.from_env()

    # Create app (logs configuration warnings)
    app = create_app(config)

    logger.info(f"Starting Flask app on {config.host}:{config.port}")
    logger.info(f"Debug mode: {config.flask_debug}")

    app.run(
        host=config.host,
        port=config.port,
        debug=config.flask_debug
    )


if __name__ == "__main__":
    main()
