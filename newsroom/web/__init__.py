"""Flask application factory"""
import sys

from flask import Flask
from loguru import logger

from newsroom.config import LOG_DIR, LOG_FORMAT


def create_app(config_name='development'):
    """Application factory for creating Flask app instances"""
    app = Flask(__name__)

    # Load configuration
    from .config import config
    app.config.from_object(config[config_name])

    # Configure logging
    configure_logging(app.config['DEBUG'], log_to_file=not app.config.get('TESTING', False))

    # Register blueprints
    from .routes import publish
    app.register_blueprint(publish.bp, url_prefix='/api')

    logger.info(f"Flask app created with config: {config_name}")

    return app


def configure_logging(debug=False, log_to_file=True):
    """
    Configure loguru for the web application.

    The file sink shares the CLI's directory and line format so both entry
    points can be read side by side.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if debug else "INFO",
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"
    )

    if log_to_file and not debug:
        logger.add(
            str(LOG_DIR / "newsroom_web_{time:YYYY-MM-DD}.log"),
            rotation="1 day",
            retention="30 days",
            level="INFO",
            format=LOG_FORMAT
        )

    logger.debug("Web logging configured")
