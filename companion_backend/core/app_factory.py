"""Application factory for Flask app"""
import os
import logging
from datetime import datetime as dat

from flask import Flask, jsonify

from core.extensions import init_extensions
from core.socketio_handlers import register_socketio_handlers

# Configure logging level from environment (default: INFO for production)
# Set LOG_LEVEL=DEBUG in .env for verbose logging during development
_log_level = getattr(logging, os.environ.get('LOG_LEVEL', 'INFO').upper(), logging.INFO)
logging.basicConfig(
    level=_log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Suppress noisy third-party loggers
logging.getLogger('httpx').setLevel(logging.WARNING)
logging.getLogger('hpack').setLevel(logging.WARNING)


def create_app(config=None):
    """Application factory function"""
    app = Flask(__name__)

    if config:
        app.config.update(config)

    socketio = init_extensions(app)
    register_socketio_handlers(socketio)

    from core.blueprints import register_blueprints
    register_blueprints(app)

    @app.errorhandler(400)
    def bad_request(error):
        logger.error(f"Bad request (400): {error}")
        return jsonify({'success': False, 'error': 'Bad Request'}), 400

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'success': False, 'error': 'Not Found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Internal server error (500): {error}")
        return jsonify({'success': False, 'error': 'Internal Server Error'}), 500

    @app.route('/health')
    def health():
        return jsonify(status="ok"), 200

    @app.route('/')
    def index():
        logger.info("Handling request to index endpoint")
        return jsonify({
            'status': 'online',
            'message': 'Companion backend is running',
            'version': '1.0.0',
            'timestamp': str(dat.now()),
        })

    return app, socketio
