from typing import Optional
from flask import Flask, render_template
from .api import EventAPIClient
from .routes import events_bp, image_src
from ..config.web import Config
from ..utils.logging_config import setup_logging
import logging

# Module logger
logger = logging.getLogger(__name__)

def create_app(config_class=Config, api_client: Optional[EventAPIClient] = None):
    """
    Create and configure the Flask application.

    Args:
        config_class: Settings object loaded into ``app.config``
        api_client: Events API client to use; built from ``API_BASE_URL``
            and ``API_TIMEOUT`` when omitted
    """
    setup_logging()

    # Initialize Flask app
    app = Flask(__name__)
    app.config.from_object(config_class)

    app.extensions['event_api_client'] = api_client or EventAPIClient(
        base_url=app.config['API_BASE_URL'],
        timeout=app.config['API_TIMEOUT']
    )
    app.add_template_filter(image_src)
    
    # Register blueprints
    app.register_blueprint(events_bp)
    
    # Error handlers
    @app.errorhandler(404)
    def not_found_error(error):
        return render_template('errors/404.html'), 404
    
    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Unhandled error while rendering page: {error}")
        return render_template('errors/500.html'), 500
    
    return app
